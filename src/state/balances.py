"""
Single-asset token balance tracking.

Implements BalanceTable[Holder] -> Amount for one token, with a running
`total_supply` that always equals the sum of balances.
"""

from typing import Dict


# Type aliases
Holder = str  # account / contract identifier
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Balance table mapping holder -> amount for a single token.

    Note: balances are stored in a plain dict. Do not rely on dict iteration
    order; callers that need a stable view should sort holders explicitly.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Holder, Amount] = {}
        self._total_supply: Amount = 0

    def get(self, holder: Holder) -> Amount:
        """Get balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    @property
    def total_supply(self) -> Amount:
        return self._total_supply

    def _set(self, holder: Holder, amount: Amount) -> None:
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def mint(self, holder: Holder, amount: Amount) -> None:
        """
        Credit newly created tokens to holder.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self._set(holder, self.get(holder) + amount)
        self._total_supply += amount

    def transfer(self, sender: Holder, to: Holder, amount: Amount) -> None:
        """
        Move amount from sender to `to`.

        Raises:
            ValueError: If amount is negative or sender has insufficient balance
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        current = self.get(sender)
        if current < amount:
            raise ValueError(
                f"Insufficient balance: {current} - {amount} < 0"
            )
        self._set(sender, current - amount)
        self._set(to, self.get(to) + amount)

    def get_all_balances(self) -> Dict[Holder, Amount]:
        """
        Get all non-zero balances as a dictionary.

        Returns:
            Dictionary mapping holder -> amount
        """
        return dict(self._balances)

    def verify_supply(self) -> bool:
        """
        Verify balances are non-negative and sum to the total supply.

        Returns:
            True if the table is consistent
        """
        if any(amount < 0 for amount in self._balances.values()):
            return False
        return sum(self._balances.values()) == self._total_supply

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} holders, supply={self._total_supply})"
