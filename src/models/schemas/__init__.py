"""Schema objects for core entities."""

from .boost import BoostConfig, BoostRule, resolve_multiplier
from .position import PositionBalance
from .user_balance import NetworkBalance, NetworkTotals, UserBalance

__all__ = [
    "BoostConfig",
    "BoostRule",
    "NetworkBalance",
    "NetworkTotals",
    "PositionBalance",
    "UserBalance",
    "resolve_multiplier",
]
