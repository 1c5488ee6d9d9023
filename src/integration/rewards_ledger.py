"""
Stateful rewards ledger (imperative shell around `src/core/rewards`).

Each public entry point:
1. refuses to run while another entry point is in progress (non-reentrant),
2. reads the injected clock once (and the reward balance, for funding),
3. runs the pure `step_or_raise()` transition; rejections raise before
   anything is committed,
4. commits the post-state,
5. performs the outbound reward transfer, if any. Transfers are the only
   callout and always come after bookkeeping is final; a failed transfer
   restores the pre-call state and re-raises,
6. records and logs the step's events, then delivers them to listeners;
   a listener that raises is logged and skipped.

Callers identify themselves explicitly through the `caller` argument; the
ledger checks it against the identities in its `LedgerConfig`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.rewards import accumulator, period
from ..core.rewards.engine import step_or_raise
from ..core.rewards.errors import ReentrancyError, RewardsError
from ..core.rewards.state import initial_state, state_to_dict
from ..core.rewards.types import Action, ActionParams, Effect, Event, EventRecord, RewardsState
from .clock import Clock, SystemClock
from .config import LedgerConfig
from .token import RewardToken

logger = logging.getLogger(__name__)

EventListener = Callable[[EventRecord], None]

_EVENT_NAMES: Dict[Event, str] = {
    Event.ENROLLED: "rewards.enrolled",
    Event.WITHDRAWN: "rewards.withdrawn",
    Event.REWARD_PAID: "rewards.reward_paid",
    Event.REWARD_ADDED: "rewards.reward_added",
    Event.REWARDS_DURATION_UPDATED: "rewards.duration_updated",
    Event.PAUSE_CHANGED: "rewards.pause_changed",
    Event.REWARDS_DISTRIBUTION_UPDATED: "rewards.distribution_updated",
}


class RewardsLedger:
    """
    Time-weighted reward distribution for stake reported by a position manager.

    Usage:
        ledger = RewardsLedger(config, token=token, clock=clock)
        ledger.enrol(config.position_manager, "alice", 10**18)
        ledger.notify_reward_amount(config.distributor, 5_000 * 10**18)
        ...
        ledger.get_reward("alice", "alice")
    """

    def __init__(
        self,
        config: LedgerConfig,
        *,
        token: RewardToken,
        clock: Optional[Clock] = None,
        state: Optional[RewardsState] = None,
    ) -> None:
        self.config = config
        self._token = token
        self._clock: Clock = clock if clock is not None else SystemClock()
        self._state = state if state is not None else initial_state(
            owner=config.owner,
            position_manager=config.position_manager,
            distributor=config.distributor,
            rewards_duration=config.rewards_duration,
            paused=config.paused,
        )
        self._entered = False
        self._listeners: List[EventListener] = []
        self.events: List[EventRecord] = []

    # ------------------------------------------------------------------
    # Mutating entry points
    # ------------------------------------------------------------------

    def enrol(self, caller: str, account: str, amount: int) -> Effect:
        """Add `amount` stake for `account`. Position manager only; blocked while paused."""
        return self._execute(Action.ENROL, caller, account=account, amount=amount)

    def withdraw(self, caller: str, account: str, amount: int) -> Effect:
        """Remove `amount` stake from `account`. Position manager only."""
        return self._execute(Action.WITHDRAW, caller, account=account, amount=amount)

    def exit(self, caller: str, account: str) -> Effect:
        """Withdraw all of `account`'s stake and pay out its rewards."""
        return self._execute(Action.EXIT, caller, account=account)

    def get_reward(self, caller: str, account: str) -> Effect:
        """Pay out `account`'s owed rewards. Anyone may trigger it; no-op when nothing is owed."""
        return self._execute(Action.GET_REWARD, caller, account=account)

    def notify_reward_amount(self, caller: str, amount: int) -> Effect:
        """Fund a new period with `amount` (rolling over any unspent remainder)."""
        return self._execute(Action.NOTIFY_REWARD_AMOUNT, caller, amount=amount)

    def set_rewards_duration(self, caller: str, duration: int) -> Effect:
        return self._execute(Action.SET_REWARDS_DURATION, caller, duration=duration)

    def set_paused(self, caller: str, paused: bool) -> Effect:
        return self._execute(Action.SET_PAUSED, caller, paused=bool(paused))

    def set_rewards_distribution(self, caller: str, address: str) -> Effect:
        return self._execute(Action.SET_REWARDS_DISTRIBUTION, caller, address=address)

    def subscribe(self, listener: EventListener) -> None:
        """Call `listener(record)` for every event, after the emitting step is committed."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def state(self) -> RewardsState:
        return self._state

    def now(self) -> int:
        return self._clock.now()

    def reward_per_token(self) -> int:
        return accumulator.reward_per_token(self._state, self._clock.now())

    def earned(self, account: str) -> int:
        return accumulator.earned(self._state, account, self._clock.now())

    def last_time_reward_applicable(self) -> int:
        return accumulator.last_time_reward_applicable(self._state, self._clock.now())

    def get_reward_for_duration(self) -> int:
        return period.reward_for_duration(self._state.period)

    def current_reward_rate(self) -> int:
        return period.current_reward_rate(self._state.period, self._clock.now())

    def balance_of(self, account: str) -> int:
        return self._state.stakes.balance_of(account)

    def total_supply(self) -> int:
        return self._state.stakes.total_staked

    @property
    def reward_rate(self) -> int:
        return self._state.period.reward_rate

    @property
    def period_finish(self) -> int:
        return self._state.period.period_finish

    @property
    def rewards_duration(self) -> int:
        return self._state.period.rewards_duration

    @property
    def last_update_time(self) -> int:
        return self._state.accumulator.last_update_time

    @property
    def owner(self) -> str:
        return self._state.access.owner

    @property
    def rewards_distribution(self) -> str:
        return self._state.access.distributor

    @property
    def paused(self) -> bool:
        return self._state.access.paused

    @property
    def last_pause_time(self) -> int:
        return self._state.access.last_pause_time

    @property
    def rewards_token(self) -> str:
        return self.config.reward_token

    @property
    def staking_key(self) -> str:
        return self.config.staking_key

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict copy of the committed state (see `state_to_dict`)."""
        return state_to_dict(self._state)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, action: Action, caller: str, **fields: Any) -> Effect:
        if self._entered:
            logger.error(
                "Reentrant call rejected",
                extra={
                    "event": "rewards.reentrancy",
                    "action": action.value,
                    "caller": caller,
                },
            )
            raise ReentrancyError(f"{action.value} called while another ledger call is in progress")

        self._entered = True
        try:
            return self._execute_locked(action, caller, fields)
        finally:
            self._entered = False

    def _execute_locked(self, action: Action, caller: str, fields: Dict[str, Any]) -> Effect:
        if action == Action.NOTIFY_REWARD_AMOUNT:
            fields["reward_balance"] = self._token.balance_of(self.config.address)
        params = ActionParams(action=action, caller=caller, now=self._clock.now(), **fields)

        try:
            result = step_or_raise(self._state, params)
        except RewardsError as exc:
            logger.warning(
                "Rejected %s: %s",
                action.value,
                exc,
                extra={
                    "event": "rewards.rejected",
                    "action": action.value,
                    "caller": caller,
                    "reason": exc.reason,
                },
            )
            raise

        assert result.state is not None and result.effect is not None
        pre = self._state
        self._state = result.state
        effect = result.effect

        if effect.payout:
            try:
                self._token.transfer(self.config.address, effect.payee, effect.payout)
            except Exception as exc:
                self._state = pre
                logger.error(
                    "Reward transfer failed, call rolled back: %s - %s",
                    type(exc).__name__,
                    str(exc),
                    extra={
                        "event": "rewards.transfer_failed",
                        "action": action.value,
                        "account": effect.payee,
                        "amount": effect.payout,
                        "error_type": type(exc).__name__,
                    },
                )
                raise

        for record in effect.events:
            self._record(record)
        for record in effect.events:
            self._deliver(record)
        return effect

    def _record(self, record: EventRecord) -> None:
        logger.info(
            "%s",
            record.event.value,
            extra={
                "event": _EVENT_NAMES[record.event],
                "account": record.account,
                "amount": record.amount,
                "reward_rate": record.reward_rate,
                "duration": record.duration,
                "paused": record.paused,
                "address": record.address,
            },
        )
        self.events.append(record)

    def _deliver(self, record: EventRecord) -> None:
        # The step is already committed; a failing listener must not undo or hide it.
        for listener in list(self._listeners):
            try:
                listener(record)
            except Exception:
                logger.exception(
                    "Event listener failed",
                    extra={
                        "event": "rewards.listener_failed",
                        "record": record.event.value,
                    },
                )
