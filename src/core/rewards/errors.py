"""Exception types for the rewards ledger.

`step()` reports rejections as reason strings; `step_or_raise()` in
``engine.py`` and the stateful ledger in ``src/integration`` raise these.
Every error is raised before any state is committed.
"""

from __future__ import annotations


class RewardsError(Exception):
    """Base class. `reason` is the machine-readable rejection code."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or reason)


class AuthorizationError(RewardsError):
    """Caller is not the identity the entry point is reserved for."""


class PausedError(RewardsError):
    """Enrolment attempted while the ledger is paused."""


class InvalidParameterError(RewardsError):
    """Amount or duration outside its domain (e.g. staking 0)."""


class InsufficientBalanceError(RewardsError):
    """Withdrawal exceeds the account's stake."""


class PeriodStillActiveError(RewardsError):
    """Duration change attempted before the current period finished."""


class ExcessiveRewardRateError(RewardsError):
    """Funding would promise more than the ledger's reward balance covers."""


class ClockRegressionError(RewardsError):
    """Clock reading is earlier than the last checkpoint."""


class ReentrancyError(RewardsError):
    """An entry point was invoked while another one is still running."""

    def __init__(self, message: str = "reentrant call") -> None:
        super().__init__("reentrancy", message)


class RewardsInvariantError(RewardsError):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__("invariant", f"invariant violations: {', '.join(violations)}")
