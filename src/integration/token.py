"""
Reward-token collaborator.

The ledger only needs two primitives from the reward asset: its own balance
(for the funding coverage check) and an outbound transfer (for payouts).
`InMemoryRewardToken` backs them with a `BalanceTable` and lets tests hook
transfers to simulate a token that calls back into the ledger.
"""

from __future__ import annotations

from typing import Callable, List, Protocol

from ..state.balances import BalanceTable

TransferHook = Callable[[str, str, int], None]


class RewardToken(Protocol):
    def balance_of(self, holder: str) -> int:
        ...

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move `amount` from `sender` to `to`; raise on failure."""
        ...


class InMemoryRewardToken:
    """Single-asset token held in process memory."""

    def __init__(self, symbol: str = "RWD") -> None:
        self.symbol = symbol
        self._table = BalanceTable()
        self._hooks: List[TransferHook] = []

    def balance_of(self, holder: str) -> int:
        return self._table.get(holder)

    @property
    def total_supply(self) -> int:
        return self._table.total_supply

    def mint(self, holder: str, amount: int) -> None:
        self._table.mint(holder, amount)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        self._table.transfer(sender, to, amount)
        try:
            for hook in list(self._hooks):
                hook(sender, to, amount)
        except Exception:
            # A failing hook reverts the whole transfer.
            self._table.transfer(to, sender, amount)
            raise

    def on_transfer(self, hook: TransferHook) -> None:
        """Register `hook(sender, to, amount)`, run inside every transfer.

        Hooks may call back into other components; if a hook raises, the
        transfer is undone and the exception propagates to the sender.
        """
        self._hooks.append(hook)

    def __repr__(self) -> str:
        return f"InMemoryRewardToken({self.symbol!r}, {self._table!r})"
