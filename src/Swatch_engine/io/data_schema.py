# src/Swatch_engine/io/data_schema.py
from __future__ import annotations

from typing import Iterable

import pandas as pd


class DataSchemaError(ValueError):
    pass


def _require_columns(df: pd.DataFrame, cols: Iterable[str], *, name: str) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise DataSchemaError(f"{name}: missing columns {missing}")


def validate_inventory(df: pd.DataFrame) -> None:
    _require_columns(df, ["id", "color_hex"], name="inventory")
    if df["id"].isna().any():
        raise DataSchemaError("inventory: 'id' must be non-null for every row")
    # owned is optional (defaults to False); color_hex may be null for shades without color data
