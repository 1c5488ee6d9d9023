"""Access gate and precondition checks for the `rewards` engine.

`authorize()` decides whether the caller may invoke the action at all (and
whether the pause flag blocks it). The per-action `guard_*` functions check
the remaining preconditions against the PRE-state.

Every function returns None when the action may proceed, or a rejection code
that `engine.step_or_raise()` maps to an exception type.
"""

from __future__ import annotations

from typing import Callable

from .period import is_active, next_reward_rate
from .math import rate_is_covered
from .types import AccessState, Action, ActionParams, RewardsState

REJECT_AUTH_OWNER = "auth:owner"
REJECT_AUTH_POSITION_MANAGER = "auth:position_manager"
REJECT_AUTH_DISTRIBUTOR = "auth:distributor"
REJECT_PAUSED = "paused"
REJECT_INSUFFICIENT_BALANCE = "insufficient_balance"
REJECT_PERIOD_ACTIVE = "period_active"
REJECT_EXCESSIVE_REWARD_RATE = "excessive_reward_rate"


def _only_owner(access: AccessState, caller: str) -> str | None:
    return None if caller == access.owner else REJECT_AUTH_OWNER


def _only_position_manager(access: AccessState, caller: str) -> str | None:
    return None if caller == access.position_manager else REJECT_AUTH_POSITION_MANAGER


def _owner_or_distributor(access: AccessState, caller: str) -> str | None:
    if caller == access.owner or caller == access.distributor:
        return None
    return REJECT_AUTH_DISTRIBUTOR


def _anyone(access: AccessState, caller: str) -> str | None:
    return None


_CALLER_RULES: dict[Action, Callable[[AccessState, str], str | None]] = {
    Action.ENROL: _only_position_manager,
    Action.WITHDRAW: _only_position_manager,
    Action.EXIT: _only_position_manager,
    Action.GET_REWARD: _anyone,
    Action.NOTIFY_REWARD_AMOUNT: _owner_or_distributor,
    Action.SET_REWARDS_DURATION: _only_owner,
    Action.SET_PAUSED: _only_owner,
    Action.SET_REWARDS_DISTRIBUTION: _only_owner,
}

# Only new stake is blocked while paused; withdrawals and payouts keep working.
_BLOCKED_WHILE_PAUSED = frozenset({Action.ENROL})


def authorize(state: RewardsState, params: ActionParams) -> str | None:
    rule = _CALLER_RULES[params.action]
    rejection = rule(state.access, params.caller)
    if rejection is not None:
        return rejection
    if state.access.paused and params.action in _BLOCKED_WHILE_PAUSED:
        return REJECT_PAUSED
    return None


def guard_enrol(state: RewardsState, params: ActionParams) -> str | None:
    return None


def guard_withdraw(state: RewardsState, params: ActionParams) -> str | None:
    if params.amount > state.stakes.balance_of(params.account):
        return REJECT_INSUFFICIENT_BALANCE
    return None


def guard_exit(state: RewardsState, params: ActionParams) -> str | None:
    return None


def guard_get_reward(state: RewardsState, params: ActionParams) -> str | None:
    return None


def guard_notify_reward_amount(state: RewardsState, params: ActionParams) -> str | None:
    rate = next_reward_rate(state.period, params.amount, params.now)
    if not rate_is_covered(rate, params.reward_balance, state.period.rewards_duration):
        return REJECT_EXCESSIVE_REWARD_RATE
    return None


def guard_set_rewards_duration(state: RewardsState, params: ActionParams) -> str | None:
    if is_active(state.period, params.now):
        return REJECT_PERIOD_ACTIVE
    return None


def guard_set_paused(state: RewardsState, params: ActionParams) -> str | None:
    return None


def guard_set_rewards_distribution(state: RewardsState, params: ActionParams) -> str | None:
    return None
