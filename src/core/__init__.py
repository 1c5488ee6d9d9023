"""
Core reward-distribution algorithms
"""

from .rewards import (
    Action,
    ActionParams,
    RewardsState,
    StepResult,
    initial_state,
    step,
    step_or_raise,
)

__all__ = [
    "Action",
    "ActionParams",
    "RewardsState",
    "StepResult",
    "initial_state",
    "step",
    "step_or_raise",
]
