# src/Swatch_engine/color/undertone.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from Swatch_engine.color._constants import (
    _UNDERTONE_CHROMA_MIN,
    _UNDERTONE_COOL_MAX,
    _UNDERTONE_WARM_MIN,
    _WARMTH_A_WEIGHT,
)
from Swatch_engine.color.model import to_oklab
from Swatch_engine.color.schema import OKLab, Undertone

__all__ = ["UndertoneBreakdown", "warmth_score", "undertone", "undertone_breakdown"]


@dataclass(frozen=True, slots=True)
class UndertoneBreakdown:
    warm: int
    cool: int
    neutral: int
    dominant: Undertone


def warmth_score(lab: OKLab) -> float:
    """
    Does:
        Signed warmth from OKLab: b (blue<->yellow) is the primary signal, a (green<->red) secondary.
        Positive = warm, negative = cool.
    """
    return lab.b + lab.a * _WARMTH_A_WEIGHT


def undertone(c: str) -> Undertone:
    """
    Does:
        Classify a color as warm / cool / neutral. Low-chroma colors (greys, whites, taupes)
        are neutral regardless of their hue lean.
    """
    lab = to_oklab(c)
    if math.hypot(lab.a, lab.b) < _UNDERTONE_CHROMA_MIN:
        return Undertone.NEUTRAL

    score = warmth_score(lab)
    if score > _UNDERTONE_WARM_MIN:
        return Undertone.WARM
    if score < _UNDERTONE_COOL_MAX:
        return Undertone.COOL
    return Undertone.NEUTRAL


def undertone_breakdown(colors: Iterable[str]) -> UndertoneBreakdown:
    counts = {Undertone.WARM: 0, Undertone.COOL: 0, Undertone.NEUTRAL: 0}
    for c in colors:
        counts[undertone(c)] += 1

    warm, cool, neutral = counts[Undertone.WARM], counts[Undertone.COOL], counts[Undertone.NEUTRAL]
    if warm >= cool and warm >= neutral:
        dominant = Undertone.WARM
    elif cool >= neutral:
        dominant = Undertone.COOL
    else:
        dominant = Undertone.NEUTRAL
    return UndertoneBreakdown(warm=warm, cool=cool, neutral=neutral, dominant=dominant)
