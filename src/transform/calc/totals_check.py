"""Check that user totals still equal the sum of their position values."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import pandas as pd

from models.enums import TotalKind
from models.schemas import UserBalance
from utils.decimals import decimal_context, format_decimal, to_decimal
from utils.validation import require_columns

FRAME_COLUMNS = [
    "user_index",
    "wallet_address",
    "network",
    "dex",
    "token_symbol",
    "pool_address",
    "position_id",
    "token_balance",
    "equivalent_reg",
    "total_kind",
]


def _decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal(0))


def balances_frame(users: list[UserBalance]) -> pd.DataFrame:
    """Flatten every DEX position of every user into one row, values as ``Decimal``."""
    rows = [
        {
            "user_index": index,
            "wallet_address": user.wallet_address,
            "network": network,
            "dex": dex,
            "token_symbol": position.token_symbol,
            "pool_address": position.pool_address,
            "position_id": position.position_id,
            "token_balance": to_decimal(position.token_balance, "tokenBalance"),
            "equivalent_reg": to_decimal(position.equivalent_reg, "equivalentREG"),
            "total_kind": TotalKind.for_symbol(position.token_symbol).value,
        }
        for index, user in enumerate(users)
        for network, network_balance in user.source_balance.items()
        for dex, positions in network_balance.dexs.items()
        for position in positions
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def check_totals(users: list[UserBalance]) -> tuple[bool, list[str]]:
    """Compare recorded totals with the sums of position values.

    Returns ``(passed, messages)``; one message per total that disagrees.
    """
    messages: list[str] = []

    with decimal_context():
        frame = balances_frame(users)
        require_columns(frame, {"user_index", "network", "equivalent_reg", "total_kind"})

        grand_sums = frame.groupby("user_index")["equivalent_reg"].agg(_decimal_sum)
        kind_sums = frame.groupby(["user_index", "total_kind"])["equivalent_reg"].agg(_decimal_sum)
        network_sums = frame.groupby(["user_index", "network", "total_kind"])["equivalent_reg"].agg(_decimal_sum)

        for index, user in enumerate(users):
            checks = [("totalBalance", user.total_balance, grand_sums.get(index, Decimal(0)))]
            for kind in TotalKind:
                checks.append((kind.total_key, user.total_for(kind), kind_sums.get((index, kind.value), Decimal(0))))
            for network, totals in user.network_totals.items():
                for kind in TotalKind:
                    checks.append(
                        (
                            kind.network_key(network),
                            totals.get(kind),
                            network_sums.get((index, network, kind.value), Decimal(0)),
                        )
                    )

            for field, recorded, summed in checks:
                if to_decimal(recorded, field) != summed:
                    messages.append(
                        "Total mismatch "
                        f"({user.wallet_address}, {field}): "
                        f"recorded={recorded}, positions={format_decimal(summed)}"
                    )

    return len(messages) == 0, messages
