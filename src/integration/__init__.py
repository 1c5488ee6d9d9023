"""
Imperative shell for the rewards ledger: clock, token and configuration wiring
"""

from .clock import Clock, ManualClock, SystemClock
from .config import ConfigError, LedgerConfig, config_from_env, load_config
from .rewards_ledger import RewardsLedger
from .token import InMemoryRewardToken, RewardToken

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "ConfigError",
    "LedgerConfig",
    "config_from_env",
    "load_config",
    "RewardsLedger",
    "InMemoryRewardToken",
    "RewardToken",
]
