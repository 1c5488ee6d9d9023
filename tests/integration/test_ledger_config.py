from __future__ import annotations

from pathlib import Path

import pytest

from src.core.rewards import DAY, DEFAULT_REWARDS_DURATION
from src.integration.config import (
    CONFIG_SCHEMA,
    ConfigError,
    LedgerConfig,
    config_from_env,
    config_from_mapping,
    load_config,
)

_BASE_ENV = {
    "REWARDS_OWNER": "owner",
    "REWARDS_POSITION_MANAGER": "short",
    "REWARDS_DISTRIBUTOR": "distribution",
}


def test_defaults() -> None:
    cfg = LedgerConfig(owner="o", position_manager="p", distributor="d")
    assert cfg.address == "rewards-ledger"
    assert cfg.reward_token == "RWD"
    assert cfg.staking_key == ""
    assert cfg.rewards_duration == DEFAULT_REWARDS_DURATION
    assert cfg.paused is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"owner": ""},
        {"position_manager": "   "},
        {"address": ""},
        {"rewards_duration": 0},
        {"rewards_duration": True},
        {"paused": "yes"},
    ],
)
def test_invalid_fields_rejected(overrides: dict[str, object]) -> None:
    kwargs: dict[str, object] = {"owner": "o", "position_manager": "p", "distributor": "d"}
    kwargs.update(overrides)
    with pytest.raises(ConfigError):
        LedgerConfig(**kwargs)  # type: ignore[arg-type]


def test_config_from_env() -> None:
    env = dict(_BASE_ENV)
    env.update(
        {
            "REWARDS_ADDRESS": " 0xrewards ",
            "REWARDS_STAKING_KEY": "sBTC",
            "REWARDS_DURATION_SECONDS": str(14 * DAY),
            "REWARDS_PAUSED": "yes",
        }
    )
    cfg = config_from_env(env)
    assert cfg.owner == "owner"
    assert cfg.position_manager == "short"
    assert cfg.distributor == "distribution"
    assert cfg.address == "0xrewards"
    assert cfg.staking_key == "sBTC"
    assert cfg.rewards_duration == 14 * DAY
    assert cfg.paused is True


def test_config_from_env_defaults() -> None:
    cfg = config_from_env(dict(_BASE_ENV, REWARDS_DURATION_SECONDS=""))
    assert cfg.rewards_duration == DEFAULT_REWARDS_DURATION
    assert cfg.paused is False


def test_config_from_env_custom_prefix() -> None:
    env = {k.replace("REWARDS_", "SHORTS_"): v for k, v in _BASE_ENV.items()}
    assert config_from_env(env, prefix="SHORTS_").owner == "owner"


def test_config_from_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    for k, v in _BASE_ENV.items():
        monkeypatch.setenv(k, v)
    monkeypatch.delenv("REWARDS_PAUSED", raising=False)
    monkeypatch.delenv("REWARDS_DURATION_SECONDS", raising=False)
    assert config_from_env().distributor == "distribution"


@pytest.mark.parametrize(
    "name,value",
    [
        ("REWARDS_DURATION_SECONDS", "seven days"),
        ("REWARDS_DURATION_SECONDS", "0"),
        ("REWARDS_PAUSED", "maybe"),
    ],
)
def test_config_from_env_bad_values(name: str, value: str) -> None:
    with pytest.raises(ConfigError):
        config_from_env(dict(_BASE_ENV, **{name: value}))


def test_config_from_env_missing_identity() -> None:
    env = dict(_BASE_ENV)
    del env["REWARDS_OWNER"]
    with pytest.raises(ConfigError):
        config_from_env(env)


def test_load_config_yaml(tmp_path: Path) -> None:
    path = tmp_path / "ledger.yaml"
    path.write_text(
        "\n".join(
            [
                f"schema: {CONFIG_SCHEMA}",
                'owner: "0xowner"',
                'position_manager: "0xshort"',
                'distributor: "0xdistribution"',
                'reward_token: "SNX"',
                "rewards_duration: 86400",
                "paused: true",
                "",
            ]
        ),
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.owner == "0xowner"
    assert cfg.reward_token == "SNX"
    assert cfg.address == "rewards-ledger"
    assert cfg.rewards_duration == DAY
    assert cfg.paused is True


def test_config_wrong_schema() -> None:
    with pytest.raises(ConfigError, match="unsupported"):
        config_from_mapping({"schema": "other/v1", "owner": "o", "position_manager": "p", "distributor": "d"})


@pytest.mark.parametrize(
    "root",
    [
        [],
        None,
        {"schema": CONFIG_SCHEMA, "owner": "o", "position_manager": "p"},
        {"schema": CONFIG_SCHEMA, "owner": "o", "position_manager": "p", "distributor": "d", "rewards_duration": "1"},
        {"schema": CONFIG_SCHEMA, "owner": "o", "position_manager": "p", "distributor": "d", "paused": "no"},
    ],
)
def test_config_from_mapping_fails_closed(root: object) -> None:
    with pytest.raises(ConfigError):
        config_from_mapping(root)
