# src/Swatch_engine/palette/harmony.py
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from Swatch_engine.color.model import (
    distances_to,
    from_hsl,
    oklab_array,
    parse_hex,
    to_hsl,
)
from Swatch_engine.color.schema import HSL, Color, HarmonyFamily, HarmonyTarget, ReferenceDot

__all__ = [
    "HUE_OFFSETS",
    "MONOCHROMATIC_LIGHTNESS_DELTAS",
    "coerce_family",
    "generate_harmony",
    "harmony_targets",
    "constrain_to_candidates",
]

logger = logging.getLogger(__name__)

# Hue offsets (degrees) applied to the source hue; saturation/lightness are held.
HUE_OFFSETS: Dict[HarmonyFamily, Tuple[float, ...]] = {
    HarmonyFamily.SIMILAR: (),
    HarmonyFamily.COMPLEMENTARY: (180.0,),
    HarmonyFamily.SPLIT_COMPLEMENTARY: (150.0, 210.0),
    HarmonyFamily.ANALOGOUS: (-30.0, 30.0),
    HarmonyFamily.TRIADIC: (120.0, 240.0),
    HarmonyFamily.TETRADIC: (90.0, 180.0, 270.0),
    HarmonyFamily.MONOCHROMATIC: (),
}

# Monochromatic keeps hue/saturation and moves lightness (clamped to [0, 1]):
# three entries in total, the source plus one darker and one lighter variant.
MONOCHROMATIC_LIGHTNESS_DELTAS: Tuple[float, ...] = (-0.2, 0.2)


def coerce_family(family: Union[HarmonyFamily, str]) -> HarmonyFamily:
    """
    Does:
        Accept a HarmonyFamily or its string value ("split-complementary", ...).
    """
    if isinstance(family, HarmonyFamily):
        return family
    try:
        return HarmonyFamily(str(family).strip().lower())
    except ValueError as e:
        allowed = ", ".join(f.value for f in HarmonyFamily)
        raise ValueError(f"Unknown harmony family {family!r} (expected one of: {allowed})") from e


def _dedupe_preserve_order(items: Sequence[Color]) -> List[Color]:
    seen = set()
    out: List[Color] = []
    for x in items:
        if x in seen:
            continue
        seen.add(x)
        out.append(x)
    return out


def _raw_palette(src: Color, family: HarmonyFamily) -> List[Color]:
    hsl = to_hsl(src)
    out = [src]
    if family == HarmonyFamily.MONOCHROMATIC:
        for dl in MONOCHROMATIC_LIGHTNESS_DELTAS:
            out.append(from_hsl(HSL(hsl.h, hsl.s, min(1.0, max(0.0, hsl.l + dl)))))
        return out

    for off in HUE_OFFSETS[family]:
        out.append(from_hsl(HSL((hsl.h + off) % 360.0, hsl.s, hsl.l)))
    return out


def generate_harmony(
    source: str,
    family: Union[HarmonyFamily, str],
    min_count: int = 0,
) -> List[Color]:
    """
    Does:
        Build the palette for a harmony family: source first, then the family's offsets in order.
        Duplicates (by canonical hex) are dropped keeping the first occurrence; if fewer than
        min_count entries remain, existing entries are repeated cyclically.

    Raises:
        InvalidColorFormat for a malformed source, ValueError for an unknown family.
    """
    src = parse_hex(source)
    fam = coerce_family(family)

    unique = _dedupe_preserve_order(_raw_palette(src, fam))
    out = list(unique)
    while len(out) < int(min_count):
        out.append(unique[len(out) % len(unique)])
    return out


def harmony_targets(
    source: str,
    family: Union[HarmonyFamily, str],
    dots: Sequence[ReferenceDot] = (),
    min_count: int = 0,
) -> List[HarmonyTarget]:
    """
    Does:
        Harmony entries after the source, each linked to the perceptually nearest ReferenceDot
        (lowest index on ties). matched_reference_index is None when no dots are given.
    """
    palette = generate_harmony(source, family, min_count=min_count)[1:]
    if not palette:
        return []

    lab = oklab_array(d.color for d in dots)
    out: List[HarmonyTarget] = []
    for hx in palette:
        idx = None
        if lab.shape[0] > 0:
            idx = int(np.argmin(distances_to(hx, lab)))
        out.append(HarmonyTarget(color=hx, hsl=to_hsl(hx), matched_reference_index=idx))
    return out


def constrain_to_candidates(slots: Sequence[str], candidates: Sequence[str]) -> List[Color]:
    """
    Does:
        Replace every slot except the first (the source) by its nearest candidate color.
        Slots are returned unchanged when there are no candidates.
    """
    canonical = [parse_hex(s) for s in slots]
    if not canonical:
        return []
    lab = oklab_array(candidates)
    if lab.shape[0] == 0:
        logger.debug("no candidates to constrain %d slots", len(canonical))
        return canonical

    cands = [parse_hex(c) for c in candidates]
    out = [canonical[0]]
    for hx in canonical[1:]:
        out.append(cands[int(np.argmin(distances_to(hx, lab)))])
    return out
