"""Reward-per-token accumulator.

`checkpoint()` is the only function that advances the accumulator. It runs in
front of every mutating action:

1. ``applicable = min(now, period_finish)``
2. ``stored += (applicable - last_update_time) * rate * PRECISION // total_staked``
   (skipped while nobody is staked)
3. ``last_update_time = applicable``
4. with an account: settle ``rewards`` against ``stored`` and snapshot ``paid``.

The views (`reward_per_token`, `earned`) compute the same projection without
persisting anything.
"""

from __future__ import annotations

from dataclasses import replace

from . import math as rmath
from .types import AccountRewards, RewardsState


def last_time_reward_applicable(state: RewardsState, now: int) -> int:
    return rmath.last_time_reward_applicable(now, state.period.period_finish)


def reward_per_token(state: RewardsState, now: int) -> int:
    acc = state.accumulator
    return rmath.reward_per_token(
        acc.reward_per_token_stored,
        acc.last_update_time,
        now,
        state.period.period_finish,
        state.period.reward_rate,
        state.stakes.total_staked,
    )


def earned(state: RewardsState, account: str, now: int) -> int:
    entry = state.accumulator.account(account)
    return rmath.earned(
        state.stakes.balance_of(account),
        reward_per_token(state, now),
        entry.reward_per_token_paid,
        entry.rewards,
    )


def checkpoint(state: RewardsState, now: int, account: str | None = None) -> RewardsState:
    """Advance the accumulator to `now`; settle `account` if given."""
    stored = reward_per_token(state, now)
    acc = replace(
        state.accumulator,
        reward_per_token_stored=stored,
        last_update_time=last_time_reward_applicable(state, now),
    )

    if account is not None:
        entry = acc.account(account)
        settled = AccountRewards(
            reward_per_token_paid=stored,
            rewards=rmath.earned(
                state.stakes.balance_of(account),
                stored,
                entry.reward_per_token_paid,
                entry.rewards,
            ),
        )
        acc = replace(acc, accounts={**acc.accounts, account: settled})

    return replace(state, accumulator=acc)


def clear_rewards(state: RewardsState, account: str) -> tuple[RewardsState, int]:
    """Zero `account`'s owed rewards. Returns (state, amount cleared).

    Call after `checkpoint(state, now, account)` so the amount is current.
    """
    entry = state.accumulator.account(account)
    if entry.rewards == 0:
        return state, 0
    acc = replace(
        state.accumulator,
        accounts={**state.accumulator.accounts, account: replace(entry, rewards=0)},
    )
    period = replace(
        state.period,
        total_rewards_paid=state.period.total_rewards_paid + entry.rewards,
    )
    return replace(state, accumulator=acc, period=period), entry.rewards
