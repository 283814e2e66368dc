"""Localized log messages for the normalization modifiers."""

from __future__ import annotations

from config.settings import settings

DEFAULT_LANGUAGE = "en"

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "modifiers.infoApplyModifier": "Applying modifier {modifier}",
        "modifiers.boostSkippedOutOfRange": (
            "Position {position_id}: token {token_symbol} not boosted "
            "(another token is at zero in pool {pool_address})"
        ),
    },
    "fr": {
        "modifiers.infoApplyModifier": "Application du modificateur {modifier}",
        "modifiers.boostSkippedOutOfRange": (
            "Position {position_id}: token {token_symbol} sans boost "
            "(autre token à zéro dans le pool {pool_address})"
        ),
    },
}


def translate(key: str, language: str | None = None, **params: object) -> str:
    """Look up ``key`` in the configured language, falling back to English, then to the key."""
    catalog = _MESSAGES.get(language or settings.language, _MESSAGES[DEFAULT_LANGUAGE])
    template = catalog.get(key) or _MESSAGES[DEFAULT_LANGUAGE].get(key, key)
    return template.format(**params)
