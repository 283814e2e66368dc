"""Convert source balance dicts (camelCase JSON shape) to typed records and back."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from models.enums import TotalKind
from models.errors import MalformedBalanceError, MismatchedBoostConfigError, UnknownNetworkFieldError
from models.schemas import (
    BoostConfig,
    BoostRule,
    NetworkBalance,
    NetworkTotals,
    PositionBalance,
    UserBalance,
)
from utils.decimals import to_decimal
from utils.validation import require_keys

POSITION_KEYS = ("tokenSymbol", "tokenBalance", "equivalentREG", "poolAddress")
USER_TOTAL_KEYS = ("totalBalance", "totalBalanceREG", "totalBalanceEquivalentREG")


def parse_position(raw: Mapping[str, Any]) -> PositionBalance:
    require_keys(raw, POSITION_KEYS, "position balance")
    # A null positionId stays in extra so it is written back as-is.
    known = set(POSITION_KEYS) | ({"positionId"} if raw.get("positionId") is not None else set())
    return PositionBalance(
        token_symbol=str(raw["tokenSymbol"]),
        token_balance=raw["tokenBalance"],
        equivalent_reg=raw["equivalentREG"],
        pool_address=str(raw["poolAddress"]),
        position_id=raw.get("positionId"),
        extra={key: value for key, value in raw.items() if key not in known},
    )


def _parse_network(raw: Mapping[str, Any]) -> NetworkBalance:
    dexs = raw.get("dexs") or {}
    return NetworkBalance(
        dexs={dex: tuple(parse_position(item) for item in items or []) for dex, items in dexs.items()},
        extra={key: value for key, value in raw.items() if key != "dexs"},
    )


def _parse_network_totals(raw: Mapping[str, Any], network: str) -> NetworkTotals | None:
    reg_key = TotalKind.REG.network_key(network)
    equivalent_key = TotalKind.EQUIVALENT_REG.network_key(network)
    if reg_key not in raw and equivalent_key not in raw:
        return None
    for key in (reg_key, equivalent_key):
        if key not in raw:
            raise UnknownNetworkFieldError(network, key)
    return NetworkTotals(reg=raw[reg_key], equivalent_reg=raw[equivalent_key])


def parse_user(raw: Mapping[str, Any]) -> UserBalance:
    for key in USER_TOTAL_KEYS:
        if raw.get(key) is None:
            raise MalformedBalanceError(key, raw.get(key))

    source_balance = {
        network: _parse_network(network_raw or {}) for network, network_raw in (raw.get("sourceBalance") or {}).items()
    }
    network_totals: dict[str, NetworkTotals] = {}
    consumed = {"walletAddress", "sourceBalance", *USER_TOTAL_KEYS}
    for network in source_balance:
        totals = _parse_network_totals(raw, network)
        if totals is not None:
            network_totals[network] = totals
            consumed.update(kind.network_key(network) for kind in TotalKind)

    return UserBalance(
        wallet_address=str(raw.get("walletAddress", "")),
        source_balance=source_balance,
        total_balance=raw["totalBalance"],
        total_balance_reg=raw["totalBalanceREG"],
        total_balance_equivalent_reg=raw["totalBalanceEquivalentREG"],
        network_totals=network_totals,
        extra={key: value for key, value in raw.items() if key not in consumed},
    )


def parse_users(raw_users: Sequence[Mapping[str, Any]]) -> list[UserBalance]:
    return [parse_user(raw) for raw in raw_users]


def serialize_position(position: PositionBalance) -> dict[str, Any]:
    out: dict[str, Any] = {
        "tokenSymbol": position.token_symbol,
        "tokenBalance": position.token_balance,
        "equivalentREG": position.equivalent_reg,
        "poolAddress": position.pool_address,
        **position.extra,
    }
    if position.position_id is not None:
        out["positionId"] = position.position_id
    return out


def serialize_user(user: UserBalance) -> dict[str, Any]:
    out: dict[str, Any] = {
        "walletAddress": user.wallet_address,
        "sourceBalance": {
            network: {
                **network_balance.extra,
                "dexs": {
                    dex: [serialize_position(position) for position in positions]
                    for dex, positions in network_balance.dexs.items()
                },
            }
            for network, network_balance in user.source_balance.items()
        },
        **user.extra,
    }
    for network, totals in user.network_totals.items():
        for kind in TotalKind:
            out[kind.network_key(network)] = totals.get(kind)
    out["totalBalanceREG"] = user.total_balance_reg
    out["totalBalanceEquivalentREG"] = user.total_balance_equivalent_reg
    out["totalBalance"] = user.total_balance
    return out


def parse_boost_options(raw: Mapping[str, Any] | None) -> BoostConfig | None:
    """Turn ``{dex: [[symbols...], [multipliers...]]}`` into ordered ``BoostRule`` pairs."""
    if raw is None:
        return None

    config: BoostConfig = {}
    for dex, entry in raw.items():
        if not isinstance(entry, Sequence) or isinstance(entry, str) or len(entry) != 2:
            raise MismatchedBoostConfigError(dex, "expected a [symbols, multipliers] pair")
        symbols, multipliers = entry
        if len(symbols) != len(multipliers):
            raise MismatchedBoostConfigError(
                dex, f"{len(symbols)} symbol(s) paired with {len(multipliers)} multiplier(s)"
            )
        config[dex] = tuple(
            BoostRule(symbol=str(symbol), multiplier=to_decimal(multiplier, f"boost multiplier for {dex}"))
            for symbol, multiplier in zip(symbols, multipliers)
        )
    return config
