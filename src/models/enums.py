"""Common enums and symbols shared by the balance modifiers."""

from enum import Enum

REFERENCE_TOKEN_SYMBOL = "REG"
WILDCARD_SYMBOL = "*"


class TotalKind(str, Enum):
    """Which aggregate a token's equivalent value is counted in."""

    REG = "Reg"
    EQUIVALENT_REG = "EquivalentReg"

    @classmethod
    def for_symbol(cls, token_symbol: str) -> "TotalKind":
        return cls.REG if token_symbol == REFERENCE_TOKEN_SYMBOL else cls.EQUIVALENT_REG

    @property
    def total_key(self) -> str:
        return "totalBalanceREG" if self is TotalKind.REG else "totalBalanceEquivalentREG"

    def network_key(self, network: str) -> str:
        """Source field holding this total for one network, e.g. ``totalBalanceRegGnosis``."""
        return f"totalBalance{self.value}{network[:1].upper()}{network[1:]}"


class Modifier(str, Enum):
    BOOST_BALANCES_DEXS = "boosBalancesDexs"
