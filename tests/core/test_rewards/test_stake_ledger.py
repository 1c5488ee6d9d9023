"""Tests for src/core/rewards/stakes.py: StakeLedger bookkeeping."""

import pytest

from src.core.rewards import InsufficientBalanceError, InvalidParameterError, StakeLedger


class TestIncrease:
    def test_creates_account(self):
        ledger = StakeLedger().increase("alice", 5)
        assert ledger.balance_of("alice") == 5
        assert ledger.total_staked == 5

    def test_total_tracks_every_account(self):
        ledger = StakeLedger().increase("alice", 5).increase("bob", 7).increase("alice", 1)
        assert ledger.balance_of("alice") == 6
        assert ledger.balance_of("bob") == 7
        assert ledger.total_staked == 13 == ledger.sum_of_balances()

    def test_returns_new_ledger(self):
        before = StakeLedger()
        after = before.increase("alice", 5)
        assert before.balance_of("alice") == 0
        assert before.total_staked == 0
        assert after is not before

    def test_negative_rejected(self):
        with pytest.raises(InvalidParameterError):
            StakeLedger().increase("alice", -1)


class TestDecrease:
    def test_basic(self):
        ledger = StakeLedger().increase("alice", 5).decrease("alice", 2)
        assert ledger.balance_of("alice") == 3
        assert ledger.total_staked == 3

    def test_full_withdrawal_keeps_account(self):
        ledger = StakeLedger().increase("alice", 5).decrease("alice", 5)
        assert ledger.balance_of("alice") == 0
        assert "alice" in ledger.balances
        assert ledger.total_staked == 0

    def test_insufficient(self):
        ledger = StakeLedger().increase("alice", 5)
        with pytest.raises(InsufficientBalanceError) as exc:
            ledger.decrease("alice", 6)
        assert exc.value.reason == "insufficient_balance"

    def test_unknown_account(self):
        with pytest.raises(InsufficientBalanceError):
            StakeLedger().decrease("nobody", 1)


def test_unknown_account_balance_is_zero():
    assert StakeLedger().balance_of("nobody") == 0


def test_negative_total_rejected():
    with pytest.raises(ValueError):
        StakeLedger(total_staked=-1)
