"""Effect functions for the `rewards` engine.

One pure function per action. Each computes the `Effect` from the PRE- and
POST-state: the events to emit and the reward payout the shell must transfer
once the post-state is committed.
"""

from __future__ import annotations

from .types import ActionParams, Effect, Event, EventRecord, RewardsState


def _paid(pre: RewardsState, post: RewardsState) -> int:
    return post.period.total_rewards_paid - pre.period.total_rewards_paid


def _payout(pre: RewardsState, post: RewardsState, account: str) -> Effect:
    paid = _paid(pre, post)
    if paid == 0:
        return Effect()
    return Effect(
        events=(EventRecord(Event.REWARD_PAID, account=account, amount=paid),),
        payee=account,
        payout=paid,
    )


def effect_enrol(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return Effect(events=(EventRecord(Event.ENROLLED, account=params.account, amount=params.amount),))


def effect_withdraw(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return Effect(events=(EventRecord(Event.WITHDRAWN, account=params.account, amount=params.amount),))


def effect_get_reward(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return _payout(pre, post, params.account)


def effect_exit(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    withdrawn = pre.stakes.balance_of(params.account) - post.stakes.balance_of(params.account)
    payout = _payout(pre, post, params.account)
    if withdrawn == 0:
        return payout
    return Effect(
        events=(EventRecord(Event.WITHDRAWN, account=params.account, amount=withdrawn),) + payout.events,
        payee=payout.payee,
        payout=payout.payout,
    )


def effect_notify_reward_amount(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return Effect(
        events=(
            EventRecord(
                Event.REWARD_ADDED,
                amount=params.amount,
                reward_rate=post.period.reward_rate,
                duration=post.period.rewards_duration,
            ),
        ),
    )


def effect_set_rewards_duration(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return Effect(
        events=(EventRecord(Event.REWARDS_DURATION_UPDATED, duration=post.period.rewards_duration),),
    )


def effect_set_paused(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    if pre.access.paused == post.access.paused:
        return Effect()
    return Effect(events=(EventRecord(Event.PAUSE_CHANGED, paused=post.access.paused),))


def effect_set_rewards_distribution(pre: RewardsState, post: RewardsState, params: ActionParams) -> Effect:
    return Effect(
        events=(EventRecord(Event.REWARDS_DISTRIBUTION_UPDATED, address=post.access.distributor),),
    )
