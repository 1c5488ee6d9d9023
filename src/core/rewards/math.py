"""Pure fixed-point arithmetic for the `rewards` ledger.

Every function is stateless and operates on plain Python ints.

Units/conventions:
- token amounts and stake are integer base units (1 token = 10**18 units),
- `reward_per_token_*` values are reward units per stake unit scaled by `PRECISION`,
- `reward_rate` is reward units per second,
- timestamps and durations are integer seconds.

Rounding is explicit: every division is Python `//` on non-negative operands,
i.e. truncation toward zero. The truncation residue always stays in the ledger
(never paid out), which is what keeps payouts bounded by funding.
"""

from __future__ import annotations

PRECISION: int = 10**18
UNIT: int = 10**18

DAY: int = 86_400
DEFAULT_REWARDS_DURATION: int = 7 * DAY


def mul_div_floor(a: int, b: int, d: int) -> int:
    """
    ``floor(a * b / d)`` for non-negative ints and a positive divisor.

    The product is formed exactly before the single division, so the only loss
    is the final truncation.
    """
    if not isinstance(d, int) or isinstance(d, bool):
        raise TypeError("d must be an int")
    if d <= 0:
        raise ValueError("d must be positive")
    if a < 0 or b < 0:
        raise ValueError(f"operands must be non-negative: {a}, {b}")
    return a * b // d


def last_time_reward_applicable(now: int, period_finish: int) -> int:
    """``min(now, period_finish)``; 0 while no period has ever been funded."""
    return now if now < period_finish else period_finish


def accrued_per_token(elapsed: int, reward_rate: int, total_staked: int) -> int:
    """Accumulator increment for `elapsed` seconds at `reward_rate` over `total_staked`.

    Returns 0 when nobody is staked: the interval's reward is not attributed to
    anyone and stays in the ledger as surplus.
    """
    if total_staked == 0 or elapsed <= 0:
        return 0
    return mul_div_floor(elapsed * reward_rate, PRECISION, total_staked)


def reward_per_token(
    stored: int,
    last_update_time: int,
    now: int,
    period_finish: int,
    reward_rate: int,
    total_staked: int,
) -> int:
    """Accumulator value a checkpoint at `now` would store."""
    applicable = last_time_reward_applicable(now, period_finish)
    return stored + accrued_per_token(applicable - last_update_time, reward_rate, total_staked)


def earned(balance: int, reward_per_token_now: int, reward_per_token_paid: int, owed: int) -> int:
    """Owed rewards after settling `balance` from its paid snapshot to `reward_per_token_now`."""
    return owed + mul_div_floor(balance, reward_per_token_now - reward_per_token_paid, PRECISION)


def blended_reward_rate(
    amount: int,
    now: int,
    period_finish: int,
    reward_rate: int,
    rewards_duration: int,
) -> int:
    """Rate for a fresh period of `rewards_duration` funded with `amount` at `now`.

    When a period is still running, its unspent remainder
    ``(period_finish - now) * reward_rate`` is rolled into the new rate.
    """
    if now >= period_finish:
        return amount // rewards_duration
    leftover = (period_finish - now) * reward_rate
    return (amount + leftover) // rewards_duration


def rate_is_covered(reward_rate: int, reward_balance: int, rewards_duration: int) -> bool:
    """True when `reward_balance` pays `reward_rate` for a whole `rewards_duration`.

    ``rate <= balance // duration`` is equivalent to ``rate * duration <= balance``
    for non-negative ints.
    """
    return reward_rate <= reward_balance // rewards_duration


def reward_for_duration(reward_rate: int, rewards_duration: int) -> int:
    return reward_rate * rewards_duration
