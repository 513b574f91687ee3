# src/Swatch_engine/color/__init__.py
from __future__ import annotations

# Stable re-exports (keep this list SHORT).
from Swatch_engine.color.schema import (
    HSL,
    OKLCH,
    RGB,
    Color,
    HarmonyFamily,
    HarmonyTarget,
    InvalidColorFormat,
    MatchMode,
    OKLab,
    Point,
    ReferenceDot,
)
from Swatch_engine.color.model import (
    D_MAX,
    complementary,
    distance,
    from_hsl,
    parse_hex,
    to_hsl,
    to_oklab,
)

__all__ = [
    "HSL",
    "OKLCH",
    "RGB",
    "Color",
    "HarmonyFamily",
    "HarmonyTarget",
    "InvalidColorFormat",
    "MatchMode",
    "OKLab",
    "Point",
    "ReferenceDot",
    "D_MAX",
    "complementary",
    "distance",
    "from_hsl",
    "parse_hex",
    "to_hsl",
    "to_oklab",
]
