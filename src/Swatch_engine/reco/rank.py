# src/Swatch_engine/reco/rank.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np
import pandas as pd

from Swatch_engine.color.model import (
    complementary,
    distances_to,
    is_valid_hex,
    match_percentage,
    oklab_array,
    parse_hex,
)
from Swatch_engine.color.schema import Color, MatchMode
from Swatch_engine.io.data_schema import _require_columns

__all__ = [
    "MultiMatch",
    "coerce_mode",
    "effective_target",
    "rank",
    "rank_multi",
    "rank_frame",
]

logger = logging.getLogger(__name__)

Id = TypeVar("Id", bound=Hashable)


@dataclass(frozen=True, slots=True)
class MultiMatch:
    """
    Does:
        Ranking row when matching against several targets (e.g. every color of a harmony palette).
        target_index is None for items without a color.
    """
    id: Any
    distance: float
    target_index: Optional[int]
    target: Optional[Color]


def coerce_mode(mode: Union[MatchMode, str]) -> MatchMode:
    if isinstance(mode, MatchMode):
        return mode
    try:
        return MatchMode(str(mode).strip().lower())
    except ValueError as e:
        raise ValueError(f"Unknown match mode {mode!r} (expected 'similar' or 'complementary')") from e


def effective_target(target: str, mode: Union[MatchMode, str]) -> Color:
    hx = parse_hex(target)
    if coerce_mode(mode) == MatchMode.COMPLEMENTARY:
        return complementary(hx)
    return hx


def _item_distances(targets: Sequence[Color], colors: Sequence[Optional[str]]) -> np.ndarray:
    """
    Does:
        (n_items, n_targets) distance matrix; rows for missing colors are +inf.

    Raises:
        InvalidColorFormat for a present but malformed item color.
    """
    out = np.full((len(colors), len(targets)), np.inf, dtype=float)
    present = [i for i, c in enumerate(colors) if c is not None]
    if not present or not targets:
        return out

    lab = oklab_array(colors[i] for i in present)
    for j, tg in enumerate(targets):
        out[present, j] = distances_to(tg, lab)
    return out


def _sort_key(key: Optional[Callable[[Any], Any]]):
    # (distance, secondary, input position); inf sorts last, sorted() is stable
    if key is None:
        return lambda row: (row[1], row[2])
    return lambda row: (row[1], key(row[0]), row[2])


def rank(
    target: str,
    items: Sequence[Tuple[Id, Optional[str]]],
    mode: Union[MatchMode, str] = MatchMode.SIMILAR,
    key: Optional[Callable[[Id], Any]] = None,
) -> List[Tuple[Id, float]]:
    """
    Does:
        Rank items by perceptual distance to target (SIMILAR) or to its complement (COMPLEMENTARY).

    Rules:
        - items without a color get +inf and sort last
        - ascending, stable; equal distances are ordered by key(id) when given, else input order

    Raises:
        InvalidColorFormat for a malformed target or item color.
    """
    tgt = effective_target(target, mode)
    items = list(items)
    if not items:
        return []

    d = _item_distances([tgt], [c for _, c in items])[:, 0]
    rows = [(item_id, float(d[i]), i) for i, (item_id, _) in enumerate(items)]
    rows.sort(key=_sort_key(key))
    return [(item_id, dist) for item_id, dist, _ in rows]


def rank_multi(
    targets: Sequence[str],
    items: Sequence[Tuple[Id, Optional[str]]],
    key: Optional[Callable[[Id], Any]] = None,
) -> List[MultiMatch]:
    """
    Does:
        Rank items by their distance to the closest of several targets and report which
        target matched (first target wins ties).
    """
    tg = [parse_hex(t) for t in targets]
    items = list(items)
    if not items:
        return []
    if not tg:
        logger.debug("rank_multi called without targets; all %d items get +inf", len(items))

    mat = _item_distances(tg, [c for _, c in items])
    rows = []
    for i, (item_id, _) in enumerate(items):
        if mat.shape[1] == 0 or not math.isfinite(float(mat[i].min())):
            rows.append((MultiMatch(item_id, math.inf, None, None), math.inf, i))
            continue
        j = int(np.argmin(mat[i]))
        d = float(mat[i, j])
        rows.append((MultiMatch(item_id, d, j, tg[j]), d, i))

    if key is None:
        rows.sort(key=lambda r: (r[1], r[2]))
    else:
        rows.sort(key=lambda r: (r[1], key(r[0].id), r[2]))
    return [r[0] for r in rows]


def rank_frame(
    target: str,
    df: pd.DataFrame,
    mode: Union[MatchMode, str] = MatchMode.SIMILAR,
    *,
    id_col: str = "id",
    color_col: str = "color_hex",
    name_col: Optional[str] = None,
    topk: Optional[int] = None,
) -> pd.DataFrame:
    """
    Does:
        DataFrame form of rank(): returns the input rows ordered by distance with
        `distance`, `match_pct` and 1-based `rank` columns appended.

    Notes:
        Missing or malformed colors (NaN/None/empty/not a hex) rank last with
        distance=inf and match_pct=0; the target itself must be valid.

    Raises:
        DataSchemaError when id_col, color_col or name_col is absent.
    """
    cols = [id_col, color_col] + ([name_col] if name_col else [])
    _require_columns(df, cols, name="rank_frame")

    colors: List[Optional[str]] = []
    skipped = 0
    for v in df[color_col].tolist():
        if is_valid_hex(v):
            colors.append(parse_hex(v))
            continue
        colors.append(None)
        if isinstance(v, str) and v.strip():
            skipped += 1
    if skipped:
        logger.debug("rank_frame: %d rows with a malformed %r rank last", skipped, color_col)

    names = df[name_col].astype(str).tolist() if name_col else None
    ranked = rank(
        target,
        list(enumerate(colors)),
        mode,
        key=(lambda pos: names[pos]) if names is not None else None,
    )

    positions = [pos for pos, _ in ranked]
    out = df.iloc[positions].copy().reset_index(drop=True)
    out["distance"] = [d for _, d in ranked]
    out["match_pct"] = [match_percentage(d) if math.isfinite(d) else 0.0 for _, d in ranked]
    out["rank"] = np.arange(1, len(out) + 1, dtype=int)
    if topk is not None:
        out = out.head(int(topk))
    return out
