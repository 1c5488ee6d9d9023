"""
Per-account stake bookkeeping.

`StakeLedger` maps account -> stake and keeps the aggregate `total_staked`.
It has no notion of time or rewards: callers checkpoint the account's rewards
first and only then move its stake, so accrual always uses the pre-mutation
balance for the elapsed interval.

Accounts are never removed; a zero balance is a valid resting state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .errors import InsufficientBalanceError, InvalidParameterError


@dataclass(frozen=True)
class StakeLedger:
    balances: Mapping[str, int] = field(default_factory=dict)
    total_staked: int = 0

    def __post_init__(self) -> None:
        if self.total_staked < 0:
            raise ValueError(f"total_staked must be non-negative: {self.total_staked}")

    def balance_of(self, account: str) -> int:
        """Stake of `account`. Returns 0 if never enrolled."""
        return self.balances.get(account, 0)

    def increase(self, account: str, amount: int) -> StakeLedger:
        """
        Return a ledger with `amount` more stake for `account`.

        Raises:
            InvalidParameterError: If amount is negative
        """
        if amount < 0:
            raise InvalidParameterError("param_domain:amount", f"stake delta must be non-negative: {amount}")
        balances = dict(self.balances)
        balances[account] = balances.get(account, 0) + amount
        return StakeLedger(balances=balances, total_staked=self.total_staked + amount)

    def decrease(self, account: str, amount: int) -> StakeLedger:
        """
        Return a ledger with `amount` less stake for `account`.

        Raises:
            InvalidParameterError: If amount is negative
            InsufficientBalanceError: If amount exceeds the account's stake
        """
        if amount < 0:
            raise InvalidParameterError("param_domain:amount", f"stake delta must be non-negative: {amount}")
        current = self.balance_of(account)
        if amount > current:
            raise InsufficientBalanceError(
                "insufficient_balance",
                f"Insufficient stake: {current} - {amount} < 0",
            )
        balances = dict(self.balances)
        balances[account] = current - amount
        return StakeLedger(balances=balances, total_staked=self.total_staked - amount)

    def sum_of_balances(self) -> int:
        return sum(self.balances.values())

    def __repr__(self) -> str:
        return f"StakeLedger({len(self.balances)} accounts, total_staked={self.total_staked})"
