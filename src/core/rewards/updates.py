"""State transition functions for the `rewards` engine.

One pure function per action. Each returns a new `RewardsState` built from the
PRE-state via `dataclasses.replace()`. Stake- and reward-affecting actions
checkpoint first, then mutate.
"""

from __future__ import annotations

from dataclasses import replace

from .accumulator import checkpoint, clear_rewards
from .period import set_rewards_duration, start_period
from .types import ActionParams, RewardsState


def apply_enrol(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now, params.account)
    return replace(s, stakes=s.stakes.increase(params.account, params.amount))


def apply_withdraw(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now, params.account)
    return replace(s, stakes=s.stakes.decrease(params.account, params.amount))


def apply_get_reward(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now, params.account)
    s, _ = clear_rewards(s, params.account)
    return s


def apply_exit(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now, params.account)
    balance = s.stakes.balance_of(params.account)
    if balance:
        s = replace(s, stakes=s.stakes.decrease(params.account, balance))
    s, _ = clear_rewards(s, params.account)
    return s


def apply_notify_reward_amount(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now)
    return start_period(s, params.amount, params.now)


def apply_set_rewards_duration(state: RewardsState, params: ActionParams) -> RewardsState:
    s = checkpoint(state, params.now)
    return set_rewards_duration(s, params.duration)


def apply_set_paused(state: RewardsState, params: ActionParams) -> RewardsState:
    access = state.access
    if params.paused == access.paused:
        return state
    return replace(
        state,
        access=replace(
            access,
            paused=params.paused,
            last_pause_time=params.now if params.paused else access.last_pause_time,
        ),
    )


def apply_set_rewards_distribution(state: RewardsState, params: ActionParams) -> RewardsState:
    return replace(state, access=replace(state.access, distributor=params.address))
