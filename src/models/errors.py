"""Errors raised while normalizing user balances."""

from __future__ import annotations


class BalanceNormalizationError(ValueError):
    """Base class for data-integrity errors in the normalization steps."""


class MalformedBalanceError(BalanceNormalizationError):
    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Malformed decimal value for {field}: {value!r}")
        self.field = field
        self.value = value


class MismatchedBoostConfigError(BalanceNormalizationError):
    def __init__(self, dex: str, detail: str) -> None:
        super().__init__(f"Invalid boost options for dex {dex!r}: {detail}")
        self.dex = dex


class UnknownNetworkFieldError(BalanceNormalizationError):
    def __init__(self, network: str, field: str) -> None:
        super().__init__(f"Missing total field {field!r} for network {network!r}")
        self.network = network
        self.field = field
