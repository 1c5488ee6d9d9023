"""
Configuration for a rewards ledger deployment.

A `LedgerConfig` can be built three ways:
- directly in code (tests, embedding),
- from `REWARDS_*` environment variables (`config_from_env`),
- from a YAML document (`load_config`), validated fail-closed.

Example YAML:

    schema: rewards-ledger/config/v1
    owner: "0xowner"
    position_manager: "0xshort"
    distributor: "0xdistribution"
    address: "0xrewards"
    reward_token: "SNX"
    staking_key: "SynthsBTC"
    rewards_duration: 604800
    paused: false
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..core.rewards.engine import MAX_DURATION
from ..core.rewards.math import DEFAULT_REWARDS_DURATION

CONFIG_SCHEMA = "rewards-ledger/config/v1"
ENV_PREFIX = "REWARDS_"


class ConfigError(ValueError):
    """Configuration is missing a field or holds a value of the wrong shape."""


@dataclass(frozen=True)
class LedgerConfig:
    # Identities. The ledger trusts exactly one caller per privileged role.
    owner: str
    position_manager: str
    distributor: str

    # The ledger's own holder id on the reward token (payouts are sent from it).
    address: str = "rewards-ledger"
    reward_token: str = "RWD"
    # Identifier of the position currency whose stake this ledger rewards.
    staking_key: str = ""

    # Length of the next funded period, in seconds.
    rewards_duration: int = DEFAULT_REWARDS_DURATION
    paused: bool = False

    def __post_init__(self) -> None:
        for name in ("owner", "position_manager", "distributor", "address", "reward_token"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v.strip():
                raise ConfigError(f"{name} must be a non-empty string")
        if not isinstance(self.staking_key, str):
            raise ConfigError("staking_key must be a string")
        if not isinstance(self.rewards_duration, int) or isinstance(self.rewards_duration, bool):
            raise ConfigError("rewards_duration must be an int")
        if not (1 <= self.rewards_duration <= MAX_DURATION):
            raise ConfigError(f"rewards_duration must be in [1, {MAX_DURATION}]: {self.rewards_duration}")
        if not isinstance(self.paused, bool):
            raise ConfigError("paused must be a bool")


# -- Environment -------------------------------------------------------------

def _env_int(env: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if v < lo or v > hi:
        raise ConfigError(f"{name} must be in [{lo}, {hi}]: {v}")
    return v


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _env_bool(env: Mapping[str, str], name: str, *, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def config_from_env(env: Optional[Mapping[str, str]] = None, *, prefix: str = ENV_PREFIX) -> LedgerConfig:
    """Build a config from `<prefix>OWNER`, `<prefix>POSITION_MANAGER`, ... variables."""
    env = os.environ if env is None else env
    return LedgerConfig(
        owner=_env_str(env, f"{prefix}OWNER", ""),
        position_manager=_env_str(env, f"{prefix}POSITION_MANAGER", ""),
        distributor=_env_str(env, f"{prefix}DISTRIBUTOR", ""),
        address=_env_str(env, f"{prefix}ADDRESS", "rewards-ledger"),
        reward_token=_env_str(env, f"{prefix}REWARD_TOKEN", "RWD"),
        staking_key=_env_str(env, f"{prefix}STAKING_KEY", ""),
        rewards_duration=_env_int(
            env, f"{prefix}DURATION_SECONDS", DEFAULT_REWARDS_DURATION, lo=1, hi=MAX_DURATION,
        ),
        paused=_env_bool(env, f"{prefix}PAUSED", default=False),
    )


# -- YAML --------------------------------------------------------------------

def _require_mapping(obj: Any, *, name: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigError(f"{name} must be an object")
    return obj


def _require_str(obj: Any, *, name: str) -> str:
    if not isinstance(obj, str) or not obj.strip():
        raise ConfigError(f"{name} must be a non-empty string")
    return obj.strip()


def _require_int(obj: Any, *, name: str) -> int:
    if not isinstance(obj, int) or isinstance(obj, bool):
        raise ConfigError(f"{name} must be an integer")
    return obj


def config_from_mapping(root: Any) -> LedgerConfig:
    root = _require_mapping(root, name="config")

    schema = _require_str(root.get("schema"), name="config.schema")
    if schema != CONFIG_SCHEMA:
        raise ConfigError(f"unsupported config.schema: {schema}")

    kwargs: dict[str, Any] = {
        "owner": _require_str(root.get("owner"), name="config.owner"),
        "position_manager": _require_str(root.get("position_manager"), name="config.position_manager"),
        "distributor": _require_str(root.get("distributor"), name="config.distributor"),
    }
    for key in ("address", "reward_token", "staking_key"):
        if key in root:
            kwargs[key] = _require_str(root[key], name=f"config.{key}")
    if "rewards_duration" in root:
        kwargs["rewards_duration"] = _require_int(root["rewards_duration"], name="config.rewards_duration")
    if "paused" in root:
        if not isinstance(root["paused"], bool):
            raise ConfigError("config.paused must be a boolean")
        kwargs["paused"] = root["paused"]
    return LedgerConfig(**kwargs)


def load_config(path: Path) -> LedgerConfig:
    raw = Path(path).read_text(encoding="utf-8")
    return config_from_mapping(yaml.safe_load(raw))
