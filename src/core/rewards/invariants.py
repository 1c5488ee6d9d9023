"""Invariant checkers for the `rewards` ledger.

Each function returns True when the invariant holds. `check_all()` returns the
violated state invariant IDs; `check_transition()` does the same for the
invariants that relate a PRE-state to its POST-state (monotonicity).
"""

from __future__ import annotations

from typing import Callable

from .types import RewardsState


def inv_total_staked_is_sum(s: RewardsState) -> bool:
    return s.stakes.total_staked == s.stakes.sum_of_balances()


def inv_balances_nonneg(s: RewardsState) -> bool:
    return all(v >= 0 for v in s.stakes.balances.values())


def inv_rewards_nonneg(s: RewardsState) -> bool:
    return all(a.rewards >= 0 for a in s.accumulator.accounts.values())


def inv_paid_not_ahead(s: RewardsState) -> bool:
    stored = s.accumulator.reward_per_token_stored
    return all(a.reward_per_token_paid <= stored for a in s.accumulator.accounts.values())


def inv_last_update_within_period(s: RewardsState) -> bool:
    return s.accumulator.last_update_time <= s.period.period_finish


def inv_idle_zeroed(s: RewardsState) -> bool:
    if s.period.period_finish != 0:
        return True
    return s.period.reward_rate == 0 and s.accumulator.reward_per_token_stored == 0


def inv_duration_positive(s: RewardsState) -> bool:
    return s.period.rewards_duration > 0


def inv_paid_within_notified(s: RewardsState) -> bool:
    return 0 <= s.period.total_rewards_paid <= s.period.total_rewards_notified


def inv_accumulator_monotone(pre: RewardsState, post: RewardsState) -> bool:
    return post.accumulator.reward_per_token_stored >= pre.accumulator.reward_per_token_stored


def inv_last_update_monotone(pre: RewardsState, post: RewardsState) -> bool:
    return post.accumulator.last_update_time >= pre.accumulator.last_update_time


def inv_paid_monotone(pre: RewardsState, post: RewardsState) -> bool:
    return post.period.total_rewards_paid >= pre.period.total_rewards_paid


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[RewardsState], bool]] = {
    "inv_total_staked_is_sum": inv_total_staked_is_sum,
    "inv_balances_nonneg": inv_balances_nonneg,
    "inv_rewards_nonneg": inv_rewards_nonneg,
    "inv_paid_not_ahead": inv_paid_not_ahead,
    "inv_last_update_within_period": inv_last_update_within_period,
    "inv_idle_zeroed": inv_idle_zeroed,
    "inv_duration_positive": inv_duration_positive,
    "inv_paid_within_notified": inv_paid_within_notified,
}

TRANSITION_REGISTRY: dict[str, Callable[[RewardsState, RewardsState], bool]] = {
    "inv_accumulator_monotone": inv_accumulator_monotone,
    "inv_last_update_monotone": inv_last_update_monotone,
    "inv_paid_monotone": inv_paid_monotone,
}


def check_all(state: RewardsState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]


def check_transition(pre: RewardsState, post: RewardsState) -> list[str]:
    return [
        inv_id
        for inv_id, check_fn in TRANSITION_REGISTRY.items()
        if not check_fn(pre, post)
    ]
