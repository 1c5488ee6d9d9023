from __future__ import annotations

import pytest

from src.state import BalanceTable


def test_empty_table() -> None:
    table = BalanceTable()
    assert table.get("nobody") == 0
    assert table.total_supply == 0
    assert table.get_all_balances() == {}
    assert table.verify_supply()


def test_mint_and_transfer_preserve_supply() -> None:
    table = BalanceTable()
    table.mint("ledger", 100)
    table.mint("alice", 5)
    table.transfer("ledger", "alice", 30)
    assert table.get("ledger") == 70
    assert table.get("alice") == 35
    assert table.total_supply == 105
    assert table.verify_supply()


def test_zero_balances_are_dropped() -> None:
    table = BalanceTable()
    table.mint("ledger", 10)
    table.transfer("ledger", "alice", 10)
    assert table.get_all_balances() == {"alice": 10}


def test_negative_amounts_rejected() -> None:
    table = BalanceTable()
    with pytest.raises(ValueError):
        table.mint("ledger", -1)
    with pytest.raises(ValueError):
        table.transfer("ledger", "alice", -1)


def test_insufficient_balance_leaves_table_untouched() -> None:
    table = BalanceTable()
    table.mint("ledger", 10)
    with pytest.raises(ValueError, match="Insufficient balance"):
        table.transfer("ledger", "alice", 11)
    assert table.get_all_balances() == {"ledger": 10}
