"""Data types for the `rewards` ledger.

All types are frozen dataclasses (immutable). Per-account maps are plain dicts
that are never mutated in place: transitions build new dicts and new states via
`dataclasses.replace()`.

Units follow `math.py`: integer base units, `PRECISION`-scaled accumulator,
integer seconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Mapping

from .math import DEFAULT_REWARDS_DURATION
from .stakes import StakeLedger


@unique
class Action(Enum):
    """One member per mutating entry point."""
    ENROL = "enrol"
    WITHDRAW = "withdraw"
    EXIT = "exit"
    GET_REWARD = "get_reward"
    NOTIFY_REWARD_AMOUNT = "notify_reward_amount"
    SET_REWARDS_DURATION = "set_rewards_duration"
    SET_PAUSED = "set_paused"
    SET_REWARDS_DISTRIBUTION = "set_rewards_distribution"


@unique
class Event(Enum):
    """Observable state transitions."""
    ENROLLED = "Enrolled"
    WITHDRAWN = "Withdrawn"
    REWARD_PAID = "RewardPaid"
    REWARD_ADDED = "RewardAdded"
    REWARDS_DURATION_UPDATED = "RewardsDurationUpdated"
    PAUSE_CHANGED = "PauseChanged"
    REWARDS_DISTRIBUTION_UPDATED = "RewardsDistributionUpdated"


@dataclass(frozen=True)
class AccountRewards:
    """Reward bookkeeping of one account (its stake lives in `StakeLedger`)."""

    reward_per_token_paid: int = 0
    rewards: int = 0


@dataclass(frozen=True)
class AccumulatorState:
    reward_per_token_stored: int = 0
    last_update_time: int = 0
    # Latest clock reading of any accepted step; readings earlier than it are rejected.
    last_observed_time: int = 0
    accounts: Mapping[str, AccountRewards] = field(default_factory=dict)

    def account(self, account: str) -> AccountRewards:
        return self.accounts.get(account, AccountRewards())


@dataclass(frozen=True)
class PeriodState:
    """Distribution period. `period_finish == 0` means no period was ever funded."""

    reward_rate: int = 0
    period_finish: int = 0
    rewards_duration: int = DEFAULT_REWARDS_DURATION

    # Lifetime counters.
    total_rewards_notified: int = 0
    total_rewards_paid: int = 0


@dataclass(frozen=True)
class AccessState:
    owner: str
    position_manager: str
    distributor: str
    paused: bool = False
    last_pause_time: int = 0


@dataclass(frozen=True)
class RewardsState:
    """Complete state of one reward ledger."""

    access: AccessState
    stakes: StakeLedger = field(default_factory=StakeLedger)
    accumulator: AccumulatorState = field(default_factory=AccumulatorState)
    period: PeriodState = field(default_factory=PeriodState)


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields keep their defaults.

    `now` is the caller-supplied clock reading; `reward_balance` is the ledger's
    current reward-token balance (only read by `notify_reward_amount`).
    """

    action: Action
    caller: str
    now: int
    account: str = ""           # enrol / withdraw / exit / get_reward
    amount: int = 0             # enrol / withdraw / notify_reward_amount
    duration: int = 0           # set_rewards_duration
    paused: bool = False        # set_paused
    address: str = ""           # set_rewards_distribution
    reward_balance: int = 0     # notify_reward_amount


@dataclass(frozen=True)
class EventRecord:
    event: Event
    account: str = ""
    amount: int = 0
    reward_rate: int = 0
    duration: int = 0
    paused: bool = False
    address: str = ""


@dataclass(frozen=True)
class Effect:
    """What the shell must do after committing the post-state.

    `payout` reward units go to `payee`; events are emitted in order.
    """

    events: tuple[EventRecord, ...] = ()
    payee: str = ""
    payout: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: RewardsState | None = None
    effect: Effect | None = None
    rejection: str | None = None
