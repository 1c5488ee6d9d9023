from __future__ import annotations

import pytest

from src.integration import InMemoryRewardToken, ManualClock, SystemClock


def test_manual_clock_moves_forward_only() -> None:
    clock = ManualClock(100)
    assert clock.now() == 100
    assert clock.advance(5) == 105
    clock.set(200)
    assert clock.now() == 200
    with pytest.raises(ValueError):
        clock.advance(-1)
    with pytest.raises(ValueError):
        clock.set(199)
    with pytest.raises(ValueError):
        ManualClock(-1)


def test_system_clock_is_integer_seconds() -> None:
    now = SystemClock().now()
    assert isinstance(now, int)
    assert now > 1_600_000_000


def test_token_mint_and_transfer() -> None:
    token = InMemoryRewardToken("SNX")
    token.mint("ledger", 100)
    token.transfer("ledger", "alice", 40)
    assert token.balance_of("ledger") == 60
    assert token.balance_of("alice") == 40
    assert token.total_supply == 100


def test_token_transfer_insufficient() -> None:
    token = InMemoryRewardToken()
    token.mint("ledger", 10)
    with pytest.raises(ValueError):
        token.transfer("ledger", "alice", 11)
    assert token.balance_of("ledger") == 10


def test_token_hook_sees_transfer_and_can_revert_it() -> None:
    token = InMemoryRewardToken()
    token.mint("ledger", 10)
    seen: list[tuple[str, str, int]] = []

    def _record(sender: str, to: str, amount: int) -> None:
        seen.append((sender, to, amount))
        assert token.balance_of(to) >= amount

    token.on_transfer(_record)
    token.transfer("ledger", "alice", 3)
    assert seen == [("ledger", "alice", 3)]

    def _refuse(sender: str, to: str, amount: int) -> None:
        raise RuntimeError("recipient refused")

    token.on_transfer(_refuse)
    with pytest.raises(RuntimeError):
        token.transfer("ledger", "bob", 2)
    assert token.balance_of("ledger") == 7
    assert token.balance_of("bob") == 0
