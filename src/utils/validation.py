"""Validation helpers for dataframe schemas and source records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd


def require_columns(df: pd.DataFrame, required: set[str]) -> None:
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")


def require_keys(record: Mapping[str, object], required: Iterable[str], where: str) -> None:
    missing = [key for key in required if key not in record]
    if missing:
        raise ValueError(f"Missing required keys in {where}: {sorted(missing)}")
