"""Schema for one token leg of a DEX position."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class PositionBalance:
    token_symbol: str
    token_balance: str
    equivalent_reg: str
    pool_address: str
    # Only set for concentrated-liquidity (V3-style) positions.
    position_id: int | str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def is_v3(self) -> bool:
        return self.position_id is not None
