"""Schema for per-DEX boost rules."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from models.enums import WILDCARD_SYMBOL


@dataclass(frozen=True, slots=True)
class BoostRule:
    symbol: str
    multiplier: Decimal

    @property
    def is_wildcard(self) -> bool:
        return self.symbol == WILDCARD_SYMBOL


# DEX id -> ordered rules, first match wins.
BoostConfig = dict[str, tuple[BoostRule, ...]]


def resolve_multiplier(rules: tuple[BoostRule, ...], token_symbol: str) -> Decimal | None:
    """Return the multiplier for ``token_symbol``.

    An explicit symbol rule takes precedence over the wildcard, whatever their
    order; ``None`` means the token is not boosted on this DEX.
    """
    for rule in rules:
        if rule.symbol == token_symbol:
            return rule.multiplier
    for rule in rules:
        if rule.is_wildcard:
            return rule.multiplier
    return None
