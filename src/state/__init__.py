"""
State management for the rewards ledger's token collaborators
"""

from .balances import BalanceTable

__all__ = [
    "BalanceTable",
]
