"""Distribution period controller.

Two effective phases:
- Idle: never funded (``reward_rate == 0`` and ``period_finish == 0``).
- Active/Expired: funded at least once. Expired is not stored; it is simply
  ``now > period_finish``.

Both transitions here expect the caller to have checkpointed the accumulator
at `now` already (see `updates.py`), so a rate change never re-prices time
that has already elapsed.
"""

from __future__ import annotations

from dataclasses import replace

from . import math as rmath
from .types import PeriodState, RewardsState


def is_idle(period: PeriodState) -> bool:
    return period.period_finish == 0


def is_active(period: PeriodState, now: int) -> bool:
    """True while a funded period has not yet finished (``now <= period_finish``)."""
    return not is_idle(period) and now <= period.period_finish


def current_reward_rate(period: PeriodState, now: int) -> int:
    """Effective distribution rate at `now`: 0 once the period has expired.

    The stored `reward_rate` is kept after expiry because the next funding
    reads it only through the rollover branch, which is skipped for expired
    periods.
    """
    if now > period.period_finish:
        return 0
    return period.reward_rate


def next_reward_rate(period: PeriodState, amount: int, now: int) -> int:
    return rmath.blended_reward_rate(
        amount, now, period.period_finish, period.reward_rate, period.rewards_duration,
    )


def start_period(state: RewardsState, amount: int, now: int) -> RewardsState:
    """Fund `amount` and start a new full-length period at `now`.

    Any unspent remainder of a running period is rolled into the new rate.
    """
    period = state.period
    rate = next_reward_rate(period, amount, now)
    return replace(
        state,
        accumulator=replace(state.accumulator, last_update_time=now),
        period=replace(
            period,
            reward_rate=rate,
            period_finish=now + period.rewards_duration,
            total_rewards_notified=period.total_rewards_notified + amount,
        ),
    )


def set_rewards_duration(state: RewardsState, duration: int) -> RewardsState:
    """Duration for the next funded period; the running one is untouched."""
    return replace(state, period=replace(state.period, rewards_duration=duration))


def reward_for_duration(period: PeriodState) -> int:
    return rmath.reward_for_duration(period.reward_rate, period.rewards_duration)
