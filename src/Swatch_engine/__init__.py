# src/Swatch_engine/__init__.py
from __future__ import annotations

# Library surface: color model, harmony, wheel geometry, ranking.
# Resolved lazily so importing the package stays cheap.

_EXPORTS = {
    "parse_hex": "Swatch_engine.color.model",
    "to_hsl": "Swatch_engine.color.model",
    "from_hsl": "Swatch_engine.color.model",
    "to_oklab": "Swatch_engine.color.model",
    "distance": "Swatch_engine.color.model",
    "complementary": "Swatch_engine.color.model",
    "InvalidColorFormat": "Swatch_engine.color.schema",
    "HarmonyFamily": "Swatch_engine.color.schema",
    "MatchMode": "Swatch_engine.color.schema",
    "HSL": "Swatch_engine.color.schema",
    "Point": "Swatch_engine.color.schema",
    "ReferenceDot": "Swatch_engine.color.schema",
    "HarmonyTarget": "Swatch_engine.color.schema",
    "generate_harmony": "Swatch_engine.palette.harmony",
    "ViewTransform": "Swatch_engine.wheel.geometry",
    "project": "Swatch_engine.wheel.geometry",
    "unproject": "Swatch_engine.wheel.geometry",
    "apply_zoom": "Swatch_engine.wheel.geometry",
    "apply_pan": "Swatch_engine.wheel.geometry",
    "snap": "Swatch_engine.wheel.snap",
    "resolve_overlaps": "Swatch_engine.wheel.overlap",
    "rank": "Swatch_engine.reco.rank",
}

__all__ = list(_EXPORTS)


def __getattr__(name: str):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(name)
