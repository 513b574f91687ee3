# src/Swatch_engine/wheel/__init__.py
from __future__ import annotations

from Swatch_engine.wheel.geometry import (
    ViewTransform,
    apply_pan,
    apply_zoom,
    project,
    reset_view,
    unproject,
)
from Swatch_engine.wheel.overlap import resolve_overlaps
from Swatch_engine.wheel.snap import snap

__all__ = [
    "ViewTransform",
    "apply_pan",
    "apply_zoom",
    "project",
    "reset_view",
    "unproject",
    "resolve_overlaps",
    "snap",
]
