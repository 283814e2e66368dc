"""Arbitrary-precision decimal helpers for balance strings."""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, localcontext
from typing import ContextManager

from config.settings import settings
from models.errors import MalformedBalanceError


def decimal_context(precision: int | None = None) -> ContextManager:
    """Local decimal context used for every balance computation."""
    return localcontext(Context(prec=precision or settings.decimal_precision))


def to_decimal(value: object, field: str) -> Decimal:
    """Parse a balance string (or a numeric multiplier) into a finite ``Decimal``.

    Floats go through their shortest ``repr`` so ``1.1`` becomes ``Decimal("1.1")``
    rather than its binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise MalformedBalanceError(field, value)
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = repr(value) if isinstance(value, float) else str(value).strip()
        if not text:
            raise MalformedBalanceError(field, value)
        try:
            parsed = Decimal(text)
        except InvalidOperation as exc:
            raise MalformedBalanceError(field, value) from exc
    if not parsed.is_finite():
        raise MalformedBalanceError(field, value)
    return parsed


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain base-10 without exponent or trailing zeros."""
    if value.is_zero():
        return "0"
    # Enough precision for normalize() to only strip zeros, never round.
    exact = Context(prec=max(len(value.as_tuple().digits), 1))
    return format(value.normalize(exact), "f")
