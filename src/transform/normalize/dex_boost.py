"""Boost the REG-equivalent value of DEX positions and keep user totals consistent."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from decimal import Decimal

from i18n.messages import translate
from models.enums import Modifier, TotalKind
from models.errors import BalanceNormalizationError, UnknownNetworkFieldError
from models.schemas import (
    BoostConfig,
    NetworkBalance,
    PositionBalance,
    UserBalance,
    resolve_multiplier,
)
from utils.decimals import decimal_context, format_decimal, to_decimal


def has_zero_token_in_position(
    dex_balances: Sequence[PositionBalance],
    position_id: int | str,
    pool_address: str,
) -> bool:
    """True when a leg of the position ``(position_id, pool_address)`` holds no tokens.

    A concentrated-liquidity position with one side at zero is out of range.
    """
    return any(
        to_decimal(balance.token_balance, "tokenBalance").is_zero()
        for balance in dex_balances
        if balance.position_id == position_id and balance.pool_address == pool_address
    )


class _UserTotals:
    """Running totals of one user while its positions are being boosted."""

    def __init__(self, user: UserBalance) -> None:
        self.user = user
        self.grand = to_decimal(user.total_balance, "totalBalance")
        self.by_kind: dict[TotalKind, Decimal] = {}
        self.by_network: dict[tuple[str, TotalKind], Decimal] = {}

    def shift(self, network: str, kind: TotalKind, delta: Decimal) -> None:
        key = (network, kind)
        if key not in self.by_network:
            totals = self.user.network_totals.get(network)
            if totals is None:
                raise UnknownNetworkFieldError(network, kind.network_key(network))
            self.by_network[key] = to_decimal(totals.get(kind), kind.network_key(network))
        if kind not in self.by_kind:
            self.by_kind[kind] = to_decimal(self.user.total_for(kind), kind.total_key)
        self.by_network[key] += delta
        self.by_kind[kind] += delta
        self.grand += delta

    def apply(self, source_balance: dict[str, NetworkBalance]) -> UserBalance:
        network_totals = dict(self.user.network_totals)
        for (network, kind), value in self.by_network.items():
            network_totals[network] = network_totals[network].with_value(kind, format_decimal(value))
        changes = {
            "source_balance": source_balance,
            "network_totals": network_totals,
            "total_balance": format_decimal(self.grand),
        }
        if TotalKind.REG in self.by_kind:
            changes["total_balance_reg"] = format_decimal(self.by_kind[TotalKind.REG])
        if TotalKind.EQUIVALENT_REG in self.by_kind:
            changes["total_balance_equivalent_reg"] = format_decimal(self.by_kind[TotalKind.EQUIVALENT_REG])
        return replace(self.user, **changes)


def _boost_user(user: UserBalance, options: BoostConfig, log: logging.Logger | logging.LoggerAdapter) -> UserBalance:
    totals: _UserTotals | None = None
    source_balance = dict(user.source_balance)

    for network, network_balance in user.source_balance.items():
        if not network_balance.dexs:
            continue

        dexs = dict(network_balance.dexs)
        for dex, dex_balances in network_balance.dexs.items():
            rules = options.get(dex)
            if not dex_balances or not rules:
                continue

            boosted: list[PositionBalance] = []
            for balance in dex_balances:
                multiplier = resolve_multiplier(rules, balance.token_symbol)
                if multiplier is None:
                    boosted.append(balance)
                    continue

                if balance.is_v3 and has_zero_token_in_position(
                    dex_balances, balance.position_id, balance.pool_address
                ):
                    log.debug(
                        translate(
                            "modifiers.boostSkippedOutOfRange",
                            position_id=balance.position_id,
                            token_symbol=balance.token_symbol,
                            pool_address=balance.pool_address,
                        )
                    )
                    boosted.append(balance)
                    continue

                old_value = to_decimal(balance.equivalent_reg, "equivalentREG")
                new_value = old_value * multiplier
                if totals is None:
                    totals = _UserTotals(user)
                totals.shift(network, TotalKind.for_symbol(balance.token_symbol), new_value - old_value)
                boosted.append(replace(balance, equivalent_reg=format_decimal(new_value)))

            dexs[dex] = tuple(boosted)
        source_balance[network] = replace(network_balance, dexs=dexs)

    if totals is None:
        return user
    return totals.apply(source_balance)


def boost_dex_balances(
    data: list[UserBalance],
    options: BoostConfig | None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[UserBalance]:
    """Multiply the REG-equivalent value of configured DEX balances.

    ``options`` maps a DEX id to ordered ``BoostRule`` pairs; a rule for the
    token's own symbol wins over the ``"*"`` wildcard. Legs of a V3 position
    with an empty side are left alone. Every boost moves the user's grand
    total, the REG (or equivalent-REG) total and the matching per-network
    total by the same delta.

    The input records are never modified: boosted users are new records and
    untouched users are returned as-is. Applying the same options twice
    compounds the multipliers.
    """
    log = logger or logging.getLogger(__name__)
    log.info("%s %s", translate("modifiers.infoApplyModifier", modifier=Modifier.BOOST_BALANCES_DEXS.value), options)

    if not options:
        return data

    results: list[UserBalance] = []
    with decimal_context():
        for user in data:
            try:
                results.append(_boost_user(user, options, log))
            except BalanceNormalizationError as exc:
                exc.add_note(f"user={user.wallet_address}")
                raise
    return results
