"""Property tests: random action sequences against the `rewards` engine.

Every accepted step must leave a state that passes all invariants, and the
ledger may never owe or pay more than it was funded with.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from src.core.rewards import (
    DAY,
    UNIT,
    Action,
    ActionParams,
    earned,
    initial_state,
    reward_per_token,
    state_from_dict,
    state_to_dict,
    step,
)
from src.core.rewards.invariants import check_all

OWNER = "owner"
MANAGER = "short"
DIST = "distribution"
ACCOUNTS = ("alice", "bob", "carol")

_KINDS = (
    Action.ENROL,
    Action.WITHDRAW,
    Action.EXIT,
    Action.GET_REWARD,
    Action.NOTIFY_REWARD_AMOUNT,
    Action.SET_REWARDS_DURATION,
    Action.SET_PAUSED,
)

_op = st.tuples(
    st.sampled_from(_KINDS),
    st.sampled_from(ACCOUNTS),
    st.integers(min_value=0, max_value=10_000 * UNIT),
    st.integers(min_value=0, max_value=3 * DAY),
    st.booleans(),
)


def _params(kind: Action, account: str, amount: int, now: int, flag: bool) -> ActionParams:
    if kind in (Action.ENROL, Action.WITHDRAW):
        return ActionParams(action=kind, caller=MANAGER, now=now, account=account, amount=amount)
    if kind == Action.EXIT:
        return ActionParams(action=kind, caller=MANAGER, now=now, account=account)
    if kind == Action.GET_REWARD:
        return ActionParams(action=kind, caller=account, now=now, account=account)
    if kind == Action.NOTIFY_REWARD_AMOUNT:
        # Sometimes underfunded so the coverage check gets exercised.
        balance = amount * 2 if flag else amount // 2
        return ActionParams(action=kind, caller=DIST, now=now, amount=amount, reward_balance=balance)
    if kind == Action.SET_REWARDS_DURATION:
        return ActionParams(action=kind, caller=OWNER, now=now, duration=1 + amount % (14 * DAY))
    return ActionParams(action=kind, caller=OWNER, now=now, paused=flag)


def _run(ops):
    s = initial_state(owner=OWNER, position_manager=MANAGER, distributor=DIST)
    now = 1_000
    history = [(s, now)]
    for kind, account, amount, dt, flag in ops:
        now += dt
        result = step(s, _params(kind, account, amount, now, flag))
        if result.accepted:
            s = result.state
        history.append((s, now))
    return history


@settings(max_examples=200, deadline=None)
@given(st.lists(_op, max_size=30))
def test_accepted_states_pass_invariants(ops):
    for s, _ in _run(ops):
        assert check_all(s) == []


@settings(max_examples=200, deadline=None)
@given(st.lists(_op, max_size=30), st.integers(min_value=0, max_value=30 * DAY))
def test_never_promises_more_than_funded(ops, extra):
    s, now = _run(ops)[-1]
    later = now + extra
    owed = sum(earned(s, a, later) for a in ACCOUNTS)
    assert owed + s.period.total_rewards_paid <= s.period.total_rewards_notified


@settings(max_examples=200, deadline=None)
@given(st.lists(_op, max_size=30))
def test_accumulator_and_checkpoint_monotone(ops):
    history = _run(ops)
    for (pre, _), (post, _) in zip(history, history[1:]):
        assert post.accumulator.reward_per_token_stored >= pre.accumulator.reward_per_token_stored
        assert post.accumulator.last_update_time >= pre.accumulator.last_update_time
    for s, now in history:
        assert reward_per_token(s, now) >= s.accumulator.reward_per_token_stored


@settings(max_examples=100, deadline=None)
@given(st.lists(_op, max_size=30))
def test_snapshot_round_trip(ops):
    s, _ = _run(ops)[-1]
    assert state_from_dict(state_to_dict(s)) == s


@settings(max_examples=200, deadline=None)
@given(
    st.integers(min_value=1, max_value=10**6 * UNIT),
    st.integers(min_value=1, max_value=10**6 * UNIT),
    st.integers(min_value=0, max_value=10_000 * UNIT),
)
def test_split_proportional_to_stake(stake_a, stake_b, amount):
    s = initial_state(owner=OWNER, position_manager=MANAGER, distributor=DIST)
    for account, stake in (("alice", stake_a), ("bob", stake_b)):
        s = step(s, ActionParams(action=Action.ENROL, caller=MANAGER, now=0, account=account, amount=stake)).state
    s = step(
        s,
        ActionParams(action=Action.NOTIFY_REWARD_AMOUNT, caller=DIST, now=0, amount=amount, reward_balance=amount),
    ).state
    end = s.period.period_finish
    a = earned(s, "alice", end)
    b = earned(s, "bob", end)
    assert a + b <= amount
    # Both sides see the same reward_per_token; only the final floor differs.
    rpt = reward_per_token(s, end)
    assert a == stake_a * rpt // UNIT
    assert b == stake_b * rpt // UNIT
