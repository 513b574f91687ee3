# src/Swatch_engine/color/gaps.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from Swatch_engine.color._constants import (
    _GAP_NEUTRAL_C_MAX,
    _GAP_SEED_CHROMA,
    _GAP_UNDERREP_RATIO,
)
from Swatch_engine.color.model import is_valid_hex, oklch_to_hex, to_oklch
from Swatch_engine.color.schema import OKLCH, Color, HueFamily, LightnessBand

__all__ = [
    "HUE_FAMILY_ORDER",
    "LIGHTNESS_BAND_ORDER",
    "GapCell",
    "CollectionGapAnalysis",
    "classify_gap_cell",
    "gap_cell_to_seed_hex",
    "analyze_collection_gaps",
]

logger = logging.getLogger(__name__)

HUE_FAMILY_ORDER: Tuple[HueFamily, ...] = tuple(HueFamily)
LIGHTNESS_BAND_ORDER: Tuple[LightnessBand, ...] = tuple(LightnessBand)

# representative OKLCH hue per family (neutrals get zero chroma)
_HUE_SEED: Dict[HueFamily, float] = {
    HueFamily.REDS: 8.0,
    HueFamily.ORANGES_CORALS: 26.0,
    HueFamily.YELLOWS_GOLDS: 52.0,
    HueFamily.GREENS: 130.0,
    HueFamily.BLUES_TEALS: 205.0,
    HueFamily.PURPLES_VIOLETS: 275.0,
    HueFamily.PINKS_MAGENTAS: 328.0,
    HueFamily.NEUTRALS: 220.0,
}

_LIGHTNESS_SEED: Dict[LightnessBand, float] = {
    LightnessBand.DARK: 0.24,
    LightnessBand.DARK_MEDIUM: 0.38,
    LightnessBand.MEDIUM: 0.52,
    LightnessBand.MEDIUM_LIGHT: 0.70,
    LightnessBand.LIGHT: 0.86,
}

# (upper bound exclusive, band)
_LIGHTNESS_BOUNDS: Tuple[Tuple[float, LightnessBand], ...] = (
    (0.30, LightnessBand.DARK),
    (0.44, LightnessBand.DARK_MEDIUM),
    (0.60, LightnessBand.MEDIUM),
    (0.76, LightnessBand.MEDIUM_LIGHT),
)


@dataclass(frozen=True, slots=True)
class GapCell:
    hue_family: HueFamily
    lightness_band: LightnessBand
    count: int


@dataclass(frozen=True, slots=True)
class CollectionGapAnalysis:
    """
    Does:
        Full hue-family x lightness-band grid plus its empty and thin cells.
    """
    cells: Tuple[GapCell, ...]
    missing: Tuple[GapCell, ...]
    underrepresented: Tuple[GapCell, ...]


def _hue_family(lch: OKLCH) -> HueFamily:
    if lch.C < _GAP_NEUTRAL_C_MAX or math.isnan(lch.h):
        return HueFamily.NEUTRALS

    h = lch.h
    if h >= 350.0 or h < 10.0:
        return HueFamily.REDS
    if h < 40.0:
        return HueFamily.ORANGES_CORALS
    if h < 80.0:
        return HueFamily.YELLOWS_GOLDS
    if h < 170.0:
        return HueFamily.GREENS
    if h < 260.0:
        return HueFamily.BLUES_TEALS
    if h < 310.0:
        return HueFamily.PURPLES_VIOLETS
    return HueFamily.PINKS_MAGENTAS


def _lightness_band(L: float) -> LightnessBand:
    for upper, band in _LIGHTNESS_BOUNDS:
        if L < upper:
            return band
    return LightnessBand.LIGHT


def classify_gap_cell(c: object) -> Optional[Tuple[HueFamily, LightnessBand]]:
    """
    Does:
        Map a color to its (hue family, lightness band) cell; None for anything that is not a hex color.
    """
    if not is_valid_hex(c):
        return None
    lch = to_oklch(str(c))
    return _hue_family(lch), _lightness_band(lch.L)


def gap_cell_to_seed_hex(hue_family: HueFamily, lightness_band: LightnessBand) -> Color:
    hue_family = HueFamily(hue_family)
    lightness_band = LightnessBand(lightness_band)
    chroma = 0.0 if hue_family == HueFamily.NEUTRALS else _GAP_SEED_CHROMA
    return oklch_to_hex(OKLCH(_LIGHTNESS_SEED[lightness_band], chroma, _HUE_SEED[hue_family]))


def analyze_collection_gaps(colors: Iterable[object]) -> CollectionGapAnalysis:
    """
    Does:
        Count colors per (hue family, lightness band) and surface empty and thin cells.

    Rule:
        Invalid entries are skipped but still count toward the collection size used for
        the "underrepresented" threshold (max(1, floor(avg_per_cell * 0.5))).
    """
    colors = list(colors)
    counts: Dict[Tuple[HueFamily, LightnessBand], int] = {
        (hf, lb): 0 for hf in HUE_FAMILY_ORDER for lb in LIGHTNESS_BAND_ORDER
    }

    skipped = 0
    for c in colors:
        cell = classify_gap_cell(c)
        if cell is None:
            skipped += 1
            continue
        counts[cell] += 1
    if skipped:
        logger.debug("gap analysis skipped %d invalid colors", skipped)

    cells = tuple(
        GapCell(hue_family=hf, lightness_band=lb, count=counts[(hf, lb)])
        for hf in HUE_FAMILY_ORDER
        for lb in LIGHTNESS_BAND_ORDER
    )
    avg_per_cell = len(colors) / max(len(cells), 1)
    low = max(1, int(math.floor(avg_per_cell * _GAP_UNDERREP_RATIO)))

    return CollectionGapAnalysis(
        cells=cells,
        missing=tuple(c for c in cells if c.count == 0),
        underrepresented=tuple(c for c in cells if 0 < c.count <= low),
    )
