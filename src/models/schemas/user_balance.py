"""Schema for a user's balances and running totals across networks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from models.enums import TotalKind

from .position import PositionBalance


@dataclass(frozen=True, slots=True)
class NetworkTotals:
    reg: str
    equivalent_reg: str

    def get(self, kind: TotalKind) -> str:
        return self.reg if kind is TotalKind.REG else self.equivalent_reg

    def with_value(self, kind: TotalKind, value: str) -> NetworkTotals:
        if kind is TotalKind.REG:
            return replace(self, reg=value)
        return replace(self, equivalent_reg=value)


@dataclass(frozen=True, slots=True)
class NetworkBalance:
    dexs: Mapping[str, tuple[PositionBalance, ...]] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        dexs = {dex: tuple(positions) for dex, positions in self.dexs.items()}
        object.__setattr__(self, "dexs", MappingProxyType(dexs))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True, slots=True)
class UserBalance:
    """One user's holdings; mapping fields are read-only views over private copies."""

    wallet_address: str
    source_balance: Mapping[str, NetworkBalance]
    total_balance: str
    total_balance_reg: str
    total_balance_equivalent_reg: str
    network_totals: Mapping[str, NetworkTotals] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("source_balance", "network_totals", "extra"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def total_for(self, kind: TotalKind) -> str:
        return self.total_balance_reg if kind is TotalKind.REG else self.total_balance_equivalent_reg
