"""`rewards`: time-weighted, proportional reward-distribution ledger.

Stake is reported by a trusted position manager; a reward token is streamed to
stakers in proportion to stake-time across fixed-length distribution periods.

This package is the functional core:
- deterministic, integer-only transitions (fixed-point with `PRECISION`),
- immutable state (frozen dataclasses),
- fail-closed access gate, guards and invariant checks.

The stateful, non-reentrant wrapper that moves tokens lives in
`src/integration/rewards_ledger.py`.

Public API:
- `initial_state(...) -> RewardsState`
- `step(state, params) -> StepResult`
- `step_or_raise(state, params) -> StepResult` (raises on rejection)
- views: `reward_per_token`, `earned`, `last_time_reward_applicable`,
  `reward_for_duration`, `current_reward_rate`
"""

from .accumulator import earned, last_time_reward_applicable, reward_per_token
from .engine import step, step_or_raise
from .errors import (
    AuthorizationError,
    ClockRegressionError,
    ExcessiveRewardRateError,
    InsufficientBalanceError,
    InvalidParameterError,
    PausedError,
    PeriodStillActiveError,
    ReentrancyError,
    RewardsError,
    RewardsInvariantError,
)
from .math import DAY, DEFAULT_REWARDS_DURATION, PRECISION, UNIT
from .period import current_reward_rate, reward_for_duration
from .stakes import StakeLedger
from .state import initial_state, state_from_dict, state_to_dict
from .types import (
    AccessState,
    AccountRewards,
    AccumulatorState,
    Action,
    ActionParams,
    Effect,
    Event,
    EventRecord,
    PeriodState,
    RewardsState,
    StepResult,
)

__all__ = [
    "step",
    "step_or_raise",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "earned",
    "last_time_reward_applicable",
    "reward_per_token",
    "current_reward_rate",
    "reward_for_duration",
    "DAY",
    "DEFAULT_REWARDS_DURATION",
    "PRECISION",
    "UNIT",
    "StakeLedger",
    "AccessState",
    "AccountRewards",
    "AccumulatorState",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "EventRecord",
    "PeriodState",
    "RewardsState",
    "StepResult",
    "RewardsError",
    "AuthorizationError",
    "PausedError",
    "InvalidParameterError",
    "InsufficientBalanceError",
    "PeriodStillActiveError",
    "ExcessiveRewardRateError",
    "ClockRegressionError",
    "ReentrancyError",
    "RewardsInvariantError",
]
