"""Dispatch-table engine for the `rewards` ledger.

``step(state, params)`` is the single entry point. It:

1. Rejects clock readings earlier than any reading an accepted step has seen.
2. Applies the access gate (caller identity, pause flag).
3. Validates parameter domains.
4. Dispatches to the action's guard / update / effect functions.
5. Checks all state and transition invariants on the post-state.
6. Returns a ``StepResult`` (accepted or rejected with reason).

Rejected steps never return a state, so nothing is ever partially applied.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from .effects import (
    effect_enrol,
    effect_exit,
    effect_get_reward,
    effect_notify_reward_amount,
    effect_set_paused,
    effect_set_rewards_distribution,
    effect_set_rewards_duration,
    effect_withdraw,
)
from .errors import (
    AuthorizationError,
    ClockRegressionError,
    ExcessiveRewardRateError,
    InsufficientBalanceError,
    InvalidParameterError,
    PausedError,
    PeriodStillActiveError,
    RewardsError,
    RewardsInvariantError,
)
from .guards import (
    REJECT_EXCESSIVE_REWARD_RATE,
    REJECT_INSUFFICIENT_BALANCE,
    REJECT_PAUSED,
    REJECT_PERIOD_ACTIVE,
    authorize,
    guard_enrol,
    guard_exit,
    guard_get_reward,
    guard_notify_reward_amount,
    guard_set_paused,
    guard_set_rewards_distribution,
    guard_set_rewards_duration,
    guard_withdraw,
)
from .invariants import check_all, check_transition
from .types import Action, ActionParams, Effect, RewardsState, StepResult
from .updates import (
    apply_enrol,
    apply_exit,
    apply_get_reward,
    apply_notify_reward_amount,
    apply_set_paused,
    apply_set_rewards_distribution,
    apply_set_rewards_duration,
    apply_withdraw,
)

GuardFn = Callable[[RewardsState, ActionParams], Optional[str]]
UpdateFn = Callable[[RewardsState, ActionParams], RewardsState]
EffectFn = Callable[[RewardsState, RewardsState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.ENROL: (guard_enrol, apply_enrol, effect_enrol),
    Action.WITHDRAW: (guard_withdraw, apply_withdraw, effect_withdraw),
    Action.EXIT: (guard_exit, apply_exit, effect_exit),
    Action.GET_REWARD: (guard_get_reward, apply_get_reward, effect_get_reward),
    Action.NOTIFY_REWARD_AMOUNT: (
        guard_notify_reward_amount, apply_notify_reward_amount, effect_notify_reward_amount,
    ),
    Action.SET_REWARDS_DURATION: (
        guard_set_rewards_duration, apply_set_rewards_duration, effect_set_rewards_duration,
    ),
    Action.SET_PAUSED: (guard_set_paused, apply_set_paused, effect_set_paused),
    Action.SET_REWARDS_DISTRIBUTION: (
        guard_set_rewards_distribution, apply_set_rewards_distribution, effect_set_rewards_distribution,
    ),
}

# -- Parameter domain bounds -------------------------------------------------

MAX_PARAM_AMOUNT: int = 2**256 - 1
MAX_DURATION: int = 2**64 - 1

# Per-action bounds: list of (field_name, min_val, max_val).
_PARAM_BOUNDS: dict[Action, list[tuple[str, int, int]]] = {
    Action.ENROL: [("amount", 1, MAX_PARAM_AMOUNT)],
    Action.WITHDRAW: [("amount", 1, MAX_PARAM_AMOUNT)],
    Action.NOTIFY_REWARD_AMOUNT: [
        ("amount", 0, MAX_PARAM_AMOUNT),
        ("reward_balance", 0, MAX_PARAM_AMOUNT),
    ],
    Action.SET_REWARDS_DURATION: [("duration", 1, MAX_DURATION)],
}

# Actions whose `account` must name someone.
_ACCOUNT_ACTIONS = frozenset({Action.ENROL, Action.WITHDRAW, Action.EXIT, Action.GET_REWARD})


def _validate_params(params: ActionParams) -> str | None:
    """Check parameter domain bounds. Returns rejection reason or None."""
    if params.action in _ACCOUNT_ACTIONS and not params.account:
        return "param_domain:account"
    if params.action == Action.SET_REWARDS_DISTRIBUTION and not params.address:
        return "param_domain:address"
    for field, lo, hi in _PARAM_BOUNDS.get(params.action, []):
        val = getattr(params, field)
        if isinstance(val, bool) or not isinstance(val, int):
            return f"param_domain:{field}"
        if val < lo or val > hi:
            return f"param_domain:{field}"
    return None


def _observe(state: RewardsState, now: int) -> RewardsState:
    acc = state.accumulator
    if now <= acc.last_observed_time:
        return state
    return replace(state, accumulator=replace(acc, last_observed_time=now))


def step(state: RewardsState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` reason string.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    acc = state.accumulator
    if params.now < max(acc.last_update_time, acc.last_observed_time):
        return StepResult(accepted=False, rejection="clock_regression")

    auth_err = authorize(state, params)
    if auth_err is not None:
        return StepResult(accepted=False, rejection=auth_err)

    domain_err = _validate_params(params)
    if domain_err is not None:
        return StepResult(accepted=False, rejection=domain_err)

    guard_fn, update_fn, effect_fn = entry

    guard_err = guard_fn(state, params)
    if guard_err is not None:
        return StepResult(accepted=False, rejection=guard_err)

    new_state = _observe(update_fn(state, params), params.now)

    violations = check_all(new_state) + check_transition(state, new_state)
    if violations:
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
        )

    effect = effect_fn(state, new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


_REJECTION_ERRORS: dict[str, type[RewardsError]] = {
    REJECT_PAUSED: PausedError,
    REJECT_INSUFFICIENT_BALANCE: InsufficientBalanceError,
    REJECT_PERIOD_ACTIVE: PeriodStillActiveError,
    REJECT_EXCESSIVE_REWARD_RATE: ExcessiveRewardRateError,
    "clock_regression": ClockRegressionError,
}

_MESSAGES: dict[str, str] = {
    "auth:owner": "Only the contract owner may perform this action",
    "auth:position_manager": "Only the position manager may perform this action",
    "auth:distributor": "Caller is not RewardsDistribution or Owner",
    REJECT_PAUSED: "This action cannot be performed while the contract is paused",
    "param_domain:amount": "Amount must be a positive integer",
    REJECT_INSUFFICIENT_BALANCE: "Cannot withdraw more than the staked balance",
    REJECT_PERIOD_ACTIVE: (
        "Previous rewards period must be complete before changing the duration for the new period"
    ),
    REJECT_EXCESSIVE_REWARD_RATE: "Provided reward too high",
    "clock_regression": "Clock reading is earlier than a previously accepted one",
}

_ZERO_AMOUNT_MESSAGES: dict[Action, str] = {
    Action.ENROL: "Cannot stake 0",
    Action.WITHDRAW: "Cannot withdraw 0",
}


def step_or_raise(state: RewardsState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        AuthorizationError: Caller may not invoke the action.
        PausedError: Enrolment while paused.
        InvalidParameterError: Parameter outside its domain.
        InsufficientBalanceError: Withdrawal exceeds stake.
        PeriodStillActiveError: Duration change during an active period.
        ExcessiveRewardRateError: Funding not covered by the reward balance.
        ClockRegressionError: `now` earlier than the last checkpoint.
        RewardsInvariantError: Post-state violates one or more invariants.
        RewardsError: Any other rejection.
    """
    result = step(state, params)
    if result.accepted:
        return result

    reason = result.rejection or ""
    message = _MESSAGES.get(reason)
    if reason == "param_domain:amount" and type(params.amount) is int and params.amount == 0:
        message = _ZERO_AMOUNT_MESSAGES.get(params.action, message)
    if reason.startswith("auth:"):
        raise AuthorizationError(reason, message)
    if reason.startswith("param_domain:"):
        raise InvalidParameterError(reason, message)
    if reason.startswith("invariant:"):
        raise RewardsInvariantError(reason.removeprefix("invariant:").split(","))
    error_cls = _REJECTION_ERRORS.get(reason, RewardsError)
    raise error_cls(reason, message)
