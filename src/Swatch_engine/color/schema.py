# src/Swatch_engine/color/schema.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Canonical color form: uppercase "#RRGGBB".
Color = str


# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------

class InvalidColorFormat(ValueError):
    """
    Does:
        Signal a color string that is not a 6-digit hex color.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid color format: {value!r} (expected '#RRGGBB')")


# ---------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------

class HarmonyFamily(str, Enum):
    SIMILAR = "similar"
    COMPLEMENTARY = "complementary"
    SPLIT_COMPLEMENTARY = "split-complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    MONOCHROMATIC = "monochromatic"


class MatchMode(str, Enum):
    SIMILAR = "similar"
    COMPLEMENTARY = "complementary"


class Undertone(str, Enum):
    WARM = "warm"
    COOL = "cool"
    NEUTRAL = "neutral"


class HueFamily(str, Enum):
    REDS = "reds"
    ORANGES_CORALS = "oranges-corals"
    YELLOWS_GOLDS = "yellows-golds"
    GREENS = "greens"
    BLUES_TEALS = "blues-teals"
    PURPLES_VIOLETS = "purples-violets"
    PINKS_MAGENTAS = "pinks-magentas"
    NEUTRALS = "neutrals"


class LightnessBand(str, Enum):
    DARK = "dark"
    DARK_MEDIUM = "dark-medium"
    MEDIUM = "medium"
    MEDIUM_LIGHT = "medium-light"
    LIGHT = "light"


# ---------------------------------------------------------------------
# Color value types
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RGB:
    r: int
    g: int
    b: int


@dataclass(frozen=True, slots=True)
class HSL:
    """
    Does:
        Hue in degrees [0, 360), saturation and lightness in [0, 1].
    """
    h: float
    s: float
    l: float


@dataclass(frozen=True, slots=True)
class OKLab:
    L: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class OKLCH:
    """
    Does:
        Cylindrical OKLab. h is NaN for achromatic colors.
    """
    L: float
    C: float
    h: float

    @property
    def achromatic(self) -> bool:
        return math.isnan(self.h)


# ---------------------------------------------------------------------
# Geometry / wheel objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True, slots=True)
class ReferenceDot:
    """
    Does:
        A fixed marker supplied by the caller (e.g. an owned polish). Never stored by the engine.
    """
    color: Color
    hsl: HSL


@dataclass(frozen=True, slots=True)
class HarmonyTarget:
    """
    Does:
        A generated palette entry, optionally linked to its nearest ReferenceDot.
    """
    color: Color
    hsl: HSL
    matched_reference_index: Optional[int] = None
