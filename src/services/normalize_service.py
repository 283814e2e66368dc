"""Core service: run the enabled balance modifiers over user balances."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from models.enums import Modifier
from models.schemas import UserBalance
from transform.normalize.dex_boost import boost_dex_balances
from transform.normalize.source_balances import parse_boost_options, parse_users, serialize_user


def apply_modifiers(
    users: list[UserBalance],
    raw_options: Mapping[str, Any] | None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[UserBalance]:
    options = raw_options or {}
    return boost_dex_balances(
        users,
        parse_boost_options(options.get(Modifier.BOOST_BALANCES_DEXS.value)),
        logger=logger,
    )


def normalize_balances(
    raw_users: Sequence[Mapping[str, Any]],
    raw_options: Mapping[str, Any] | None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[dict[str, Any]]:
    users = apply_modifiers(parse_users(raw_users), raw_options, logger=logger)
    return [serialize_user(user) for user in users]
