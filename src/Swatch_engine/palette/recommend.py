# src/Swatch_engine/palette/recommend.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from Swatch_engine.color.model import distances_to, oklab_array, parse_hex
from Swatch_engine.color.schema import Color, HarmonyFamily
from Swatch_engine.palette.harmony import coerce_family, constrain_to_candidates, generate_harmony

__all__ = [
    "Availability",
    "SlotAvailability",
    "RecommendedPalette",
    "AVAILABILITY_MATCH_THRESHOLD",
    "slot_availability",
    "recommend_palettes",
]

logger = logging.getLogger(__name__)

# A slot counts as covered when a shade lies within this normalized distance.
AVAILABILITY_MATCH_THRESHOLD = 0.075

# fit_quality saturates at this average distance
_FIT_DISTANCE_CAP = 0.25

_W_HAVE = 0.7
_W_BUY = 0.2
_W_FIT = 0.1

_DEFAULT_LIMIT = 12


class Availability(str, Enum):
    HAVE = "have"
    BUY = "buy"
    VIRTUAL = "virtual"


@dataclass(frozen=True, slots=True)
class SlotAvailability:
    color: Color
    status: Availability
    match: Optional[Color] = None
    distance: Optional[float] = None


@dataclass(frozen=True, slots=True)
class RecommendedPalette:
    """
    Does:
        One candidate palette with coverage diagnostics.
        have/buy/virtual coverages are fractions of slots and sum to 1.
    """
    harmony: HarmonyFamily
    source: Color
    slots: Tuple[Color, ...]
    statuses: Tuple[SlotAvailability, ...]
    have_coverage: float
    buy_coverage: float
    virtual_coverage: float
    fit_quality: float
    score: float

    @property
    def key(self) -> str:
        return f"{self.harmony.value}:{','.join(self.slots)}"


def _closest(hx: Color, colors: Sequence[Color], lab: np.ndarray) -> Optional[Tuple[Color, float]]:
    if lab.shape[0] == 0:
        return None
    d = distances_to(hx, lab)
    i = int(np.argmin(d))
    return colors[i], float(d[i])


def slot_availability(
    color: str,
    owned: Sequence[str],
    available: Sequence[str] = (),
    *,
    threshold: float = AVAILABILITY_MATCH_THRESHOLD,
) -> SlotAvailability:
    """
    Does:
        "have" if an owned shade is within threshold, else "buy" if a purchasable one is, else "virtual".
    """
    return _slot_availability(
        parse_hex(color),
        [parse_hex(c) for c in owned],
        oklab_array(owned),
        [parse_hex(c) for c in available],
        oklab_array(available),
        threshold,
    )


def _slot_availability(
    hx: Color,
    owned: Sequence[Color],
    owned_lab: np.ndarray,
    available: Sequence[Color],
    available_lab: np.ndarray,
    threshold: float,
) -> SlotAvailability:
    m = _closest(hx, owned, owned_lab)
    if m is not None and m[1] <= threshold:
        return SlotAvailability(color=hx, status=Availability.HAVE, match=m[0], distance=m[1])

    m = _closest(hx, available, available_lab)
    if m is not None and m[1] <= threshold:
        return SlotAvailability(color=hx, status=Availability.BUY, match=m[0], distance=m[1])

    return SlotAvailability(color=hx, status=Availability.VIRTUAL)


def _fit_quality(fit_colors: Sequence[Color], slots: Sequence[Color]) -> float:
    if not fit_colors:
        return 0.5
    slot_lab = oklab_array(slots)
    avg_min = float(np.mean([float(distances_to(c, slot_lab).min()) for c in fit_colors]))
    return 1.0 - min(avg_min / _FIT_DISTANCE_CAP, 1.0)


def recommend_palettes(
    anchors: Sequence[str],
    owned: Sequence[str],
    available: Sequence[str] = (),
    *,
    family: Optional[Union[HarmonyFamily, str]] = None,
    snap_slots_to: Optional[Sequence[str]] = None,
    threshold: float = AVAILABILITY_MATCH_THRESHOLD,
    limit: int = _DEFAULT_LIMIT,
) -> List[RecommendedPalette]:
    """
    Does:
        Build one palette per (anchor, harmony family) and rank them by how much of the
        palette the user already owns, then how much is purchasable, then overall score.

    Args:
        anchors: seed colors; duplicates are ignored. Also used as fit colors.
        owned / available: colors the user has / could buy.
        family: restrict to one family (SIMILAR is never recommended).
        snap_slots_to: when given, non-source slots are replaced by the nearest of these colors.

    Rule:
        score = 0.7 * have + 0.2 * buy + 0.1 * fit_quality
    """
    seeds: List[Color] = []
    for a in anchors:
        hx = parse_hex(a)
        if hx not in seeds:
            seeds.append(hx)
    if not seeds:
        return []

    if family is None:
        families = [f for f in HarmonyFamily if f != HarmonyFamily.SIMILAR]
    else:
        families = [coerce_family(family)]
        if families[0] == HarmonyFamily.SIMILAR:
            return []

    owned_hex = [parse_hex(c) for c in owned]
    owned_lab = oklab_array(owned_hex)
    avail_hex = [parse_hex(c) for c in available]
    avail_lab = oklab_array(avail_hex)

    seen = set()
    out: List[RecommendedPalette] = []
    for src in seeds:
        for fam in families:
            slots = generate_harmony(src, fam)
            if snap_slots_to is not None:
                slots = constrain_to_candidates(slots, snap_slots_to)

            key = f"{fam.value}:{','.join(slots)}"
            if key in seen:
                continue
            seen.add(key)

            statuses = tuple(
                _slot_availability(hx, owned_hex, owned_lab, avail_hex, avail_lab, threshold) for hx in slots
            )
            n = len(slots)
            have = sum(1 for s in statuses if s.status == Availability.HAVE) / n
            buy = sum(1 for s in statuses if s.status == Availability.BUY) / n
            fit = _fit_quality(seeds, slots)

            out.append(
                RecommendedPalette(
                    harmony=fam,
                    source=src,
                    slots=tuple(slots),
                    statuses=statuses,
                    have_coverage=have,
                    buy_coverage=buy,
                    virtual_coverage=1.0 - have - buy,
                    fit_quality=fit,
                    score=have * _W_HAVE + buy * _W_BUY + fit * _W_FIT,
                )
            )

    logger.debug("palette candidates=%d seeds=%d families=%d", len(out), len(seeds), len(families))
    out.sort(key=lambda p: (-p.have_coverage, -p.buy_coverage, -p.score))
    return out[: max(0, int(limit))]
