# src/Swatch_engine/io/inventory.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from Swatch_engine.color.model import is_valid_hex, parse_hex, to_hsl
from Swatch_engine.color.schema import Color, ReferenceDot
from Swatch_engine.io.data_schema import validate_inventory

__all__ = [
    "InventoryRecord",
    "record_from_mapping",
    "records_from_frame",
    "reference_dots",
    "rank_items",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InventoryRecord:
    """
    Does:
        Read-only view of one inventory row as supplied by the data layer.
        color_hex is kept exactly as received (it may be missing or malformed).
    """
    id: Any
    color_hex: Optional[str] = None
    owned: bool = False

    @property
    def color(self) -> Optional[Color]:
        """Canonical color, or None when the row has no usable hex."""
        if is_valid_hex(self.color_hex):
            return parse_hex(self.color_hex)
        return None


def _clean_hex(v: Any) -> Optional[str]:
    if v is None:
        return None
    if isinstance(v, float) and v != v:  # NaN
        return None
    s = str(v).strip()
    return s or None


def record_from_mapping(m: Mapping[str, Any]) -> InventoryRecord:
    """
    Does:
        Accept both the API shape ({id, colorHex, owned}) and the snake_case shape.
    """
    if "id" not in m:
        raise KeyError("inventory record missing 'id'")
    hx = m.get("colorHex", m.get("color_hex"))
    return InventoryRecord(id=m["id"], color_hex=_clean_hex(hx), owned=bool(m.get("owned", False)))


def records_from_frame(df: pd.DataFrame) -> List[InventoryRecord]:
    validate_inventory(df)
    owned = df["owned"].fillna(False).astype(bool).tolist() if "owned" in df.columns else [False] * len(df)
    return [
        InventoryRecord(id=i, color_hex=_clean_hex(hx), owned=o)
        for i, hx, o in zip(df["id"].tolist(), df["color_hex"].tolist(), owned)
    ]


def reference_dots(
    records: Iterable[InventoryRecord],
    *,
    owned_only: bool = True,
) -> Tuple[List[ReferenceDot], List[Any]]:
    """
    Does:
        Build wheel markers from inventory rows. Rows without a valid hex are skipped.

    Returns:
        (dots, ids) aligned by position, so a snap index maps back to the inventory id.
    """
    dots: List[ReferenceDot] = []
    ids: List[Any] = []
    skipped = 0
    for r in records:
        if owned_only and not r.owned:
            continue
        c = r.color
        if c is None:
            skipped += 1
            continue
        dots.append(ReferenceDot(color=c, hsl=to_hsl(c)))
        ids.append(r.id)
    if skipped:
        logger.debug("reference_dots skipped %d rows without a valid color", skipped)
    return dots, ids


def rank_items(records: Iterable[InventoryRecord]) -> List[Tuple[Any, Optional[Color]]]:
    """
    Does:
        Adapt inventory rows to the ranker's (id, color) pairs; invalid hexes become None.
    """
    return [(r.id, r.color) for r in records]
