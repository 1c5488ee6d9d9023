"""State construction and serialization for the `rewards` ledger.

`initial_state()` returns an Idle ledger (nothing staked, never funded).

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s`.
Account maps are emitted with sorted keys so the dict form is deterministic.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping

from .math import DEFAULT_REWARDS_DURATION
from .stakes import StakeLedger
from .types import AccessState, AccountRewards, AccumulatorState, PeriodState, RewardsState


def initial_state(
    *,
    owner: str,
    position_manager: str,
    distributor: str,
    rewards_duration: int = DEFAULT_REWARDS_DURATION,
    paused: bool = False,
) -> RewardsState:
    if rewards_duration <= 0:
        raise ValueError(f"rewards_duration must be positive: {rewards_duration}")
    return RewardsState(
        access=AccessState(
            owner=owner,
            position_manager=position_manager,
            distributor=distributor,
            paused=paused,
        ),
        period=PeriodState(rewards_duration=rewards_duration),
    )


def _scalars(obj: Any) -> dict[str, Any]:
    return {f.name: getattr(obj, f.name) for f in fields(obj) if f.name not in ("accounts", "balances")}


def state_to_dict(state: RewardsState) -> dict[str, Any]:
    """Serialize a RewardsState to nested plain dicts."""
    acc = state.accumulator
    return {
        "access": _scalars(state.access),
        "stakes": {
            "total_staked": state.stakes.total_staked,
            "balances": {k: state.stakes.balances[k] for k in sorted(state.stakes.balances)},
        },
        "accumulator": {
            **_scalars(acc),
            "accounts": {k: _scalars(acc.accounts[k]) for k in sorted(acc.accounts)},
        },
        "period": _scalars(state.period),
    }


def _int(d: Mapping[str, Any], name: str) -> int:
    val = d[name]
    if isinstance(val, bool) or not isinstance(val, int):
        raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
    return int(val)  # normalize int subclasses


def _bool(d: Mapping[str, Any], name: str) -> bool:
    val = d[name]
    if not isinstance(val, bool):
        raise TypeError(f"state var {name!r} must be bool, got {type(val).__name__}")
    return val


def _str(d: Mapping[str, Any], name: str) -> str:
    val = d[name]
    if not isinstance(val, str):
        raise TypeError(f"state var {name!r} must be str, got {type(val).__name__}")
    return val


def state_from_dict(d: Mapping[str, Any]) -> RewardsState:
    """Deserialize a dict to a RewardsState. Raises KeyError on missing fields."""
    access = d["access"]
    stakes = d["stakes"]
    acc = d["accumulator"]
    period = d["period"]
    return RewardsState(
        access=AccessState(
            owner=_str(access, "owner"),
            position_manager=_str(access, "position_manager"),
            distributor=_str(access, "distributor"),
            paused=_bool(access, "paused"),
            last_pause_time=_int(access, "last_pause_time"),
        ),
        stakes=StakeLedger(
            balances={str(k): _int(stakes["balances"], k) for k in stakes["balances"]},
            total_staked=_int(stakes, "total_staked"),
        ),
        accumulator=AccumulatorState(
            reward_per_token_stored=_int(acc, "reward_per_token_stored"),
            last_update_time=_int(acc, "last_update_time"),
            last_observed_time=_int(acc, "last_observed_time"),
            accounts={
                str(k): AccountRewards(
                    reward_per_token_paid=_int(v, "reward_per_token_paid"),
                    rewards=_int(v, "rewards"),
                )
                for k, v in acc["accounts"].items()
            },
        ),
        period=PeriodState(**{f.name: _int(period, f.name) for f in fields(PeriodState)}),
    )
