# src/Swatch_engine/wheel/geometry.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional

import numpy as np

from Swatch_engine.color.schema import HSL, Point
from Swatch_engine.wheel._constants import (
    _MAX_ZOOM,
    _MIN_ZOOM,
    _PAN_EPS,
    _SCROLL_ZOOM_STEP,
    _VISIBILITY_MARGIN_PX,
)

__all__ = [
    "ViewTransform",
    "max_pan",
    "clamp_pan",
    "project0",
    "to_viewport",
    "to_wheel",
    "project",
    "project_many",
    "unproject",
    "apply_zoom",
    "apply_pan",
    "reset_view",
    "zoom_factor_for_scroll",
    "pinch_zoom_factor",
    "is_visible",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# View transform (immutable)
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ViewTransform:
    """
    Does:
        Zoom + pan applied on top of the polar wheel mapping.

    Invariant:
        1 <= zoom <= 8 and |pan.x|, |pan.y| <= radius * (zoom - 1),
        so the wheel center always stays reachable.

    New values come from apply_zoom / apply_pan / reset_view; nothing mutates in place.
    """
    radius: float
    center: Point
    zoom: float = _MIN_ZOOM
    pan: Point = Point(0.0, 0.0)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError(f"radius must be a positive finite number, got {self.radius!r}")
        if not (_MIN_ZOOM <= self.zoom <= _MAX_ZOOM):
            raise ValueError(f"zoom must be within [{_MIN_ZOOM}, {_MAX_ZOOM}], got {self.zoom!r}")
        bound = max_pan(self.radius, self.zoom) + _PAN_EPS
        if abs(self.pan.x) > bound or abs(self.pan.y) > bound:
            raise ValueError(f"pan {self.pan} exceeds bound {bound:.6g} at zoom {self.zoom:.6g}")

    @classmethod
    def initial(cls, radius: float, center: Optional[Point] = None) -> "ViewTransform":
        """
        Does:
            Unzoomed, unpanned view. center defaults to (radius, radius), i.e. a square canvas
            whose top-left corner is the viewport origin.
        """
        r = float(radius)
        return cls(radius=r, center=center if center is not None else Point(r, r))


def max_pan(radius: float, zoom: float) -> float:
    return float(radius) * (float(zoom) - 1.0)


def clamp_pan(pan: Point, radius: float, zoom: float) -> Point:
    m = max_pan(radius, zoom)
    return Point(max(-m, min(m, pan.x)), max(-m, min(m, pan.y)))


# ---------------------------------------------------------------------
# Polar mapping + affine view
# ---------------------------------------------------------------------

def project0(hsl: HSL, radius: float, center: Point) -> Point:
    """
    Does:
        Wheel-space position: hue is the angle (degrees, +x axis, y grows downward on screen),
        saturation the fraction of the radius.
    """
    ang = math.radians(hsl.h)
    dist = hsl.s * radius
    return Point(center.x + math.cos(ang) * dist, center.y + math.sin(ang) * dist)


def to_viewport(p: Point, t: ViewTransform) -> Point:
    return Point(
        (p.x - t.center.x) * t.zoom + t.center.x + t.pan.x,
        (p.y - t.center.y) * t.zoom + t.center.y + t.pan.y,
    )


def to_wheel(v: Point, t: ViewTransform) -> Point:
    return Point(
        (v.x - t.center.x - t.pan.x) / t.zoom + t.center.x,
        (v.y - t.center.y - t.pan.y) / t.zoom + t.center.y,
    )


def project(hsl: HSL, t: ViewTransform) -> Point:
    return to_viewport(project0(hsl, t.radius, t.center), t)


def project_many(hsls: Iterable[HSL], t: ViewTransform) -> np.ndarray:
    """
    Does:
        Vectorized project() for many colors. Returns an (n, 2) array of viewport positions.
    """
    arr = np.asarray([(h.h, h.s) for h in hsls], dtype=float)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=float)

    ang = np.radians(arr[:, 0])
    dist = arr[:, 1] * t.radius
    cx, cy = t.center.x, t.center.y
    wx = cx + np.cos(ang) * dist
    wy = cy + np.sin(ang) * dist
    vx = (wx - cx) * t.zoom + cx + t.pan.x
    vy = (wy - cy) * t.zoom + cy + t.pan.y
    return np.column_stack([vx, vy])


def unproject(v: Point, t: ViewTransform, lightness: float) -> Optional[HSL]:
    """
    Does:
        Viewport point -> HSL under the current view. Lightness is supplied by the caller
        (slider value), it is not derived from position.

    Returns:
        None when the point falls outside the wheel disk.
    """
    p = to_wheel(v, t)
    dx = p.x - t.center.x
    dy = p.y - t.center.y
    d = math.hypot(dx, dy)
    if d > t.radius:
        return None

    hue = math.degrees(math.atan2(dy, dx)) % 360.0
    return HSL(hue, d / t.radius, min(1.0, max(0.0, float(lightness))))


# ---------------------------------------------------------------------
# Zoom / pan (return new transforms)
# ---------------------------------------------------------------------

def apply_zoom(t: ViewTransform, cursor: Point, factor: float) -> ViewTransform:
    """
    Does:
        Zoom by factor (clamped to [1, 8] overall) keeping the wheel point under the cursor fixed,
        then clamp pan to the view bound.

    Raises:
        ValueError if factor is not a positive finite number.
    """
    factor = float(factor)
    if not (math.isfinite(factor) and factor > 0):
        raise ValueError(f"zoom factor must be a positive finite number, got {factor!r}")

    new_zoom = min(_MAX_ZOOM, max(_MIN_ZOOM, t.zoom * factor))
    if new_zoom == t.zoom:
        return t

    w = to_wheel(cursor, t)
    new_pan = Point(
        cursor.x - (w.x - t.center.x) * new_zoom - t.center.x,
        cursor.y - (w.y - t.center.y) * new_zoom - t.center.y,
    )
    clamped = clamp_pan(new_pan, t.radius, new_zoom)
    if clamped != new_pan:
        logger.debug("zoom pan clamped from %s to %s (zoom=%.3f)", new_pan, clamped, new_zoom)
    return replace(t, zoom=new_zoom, pan=clamped)


def apply_pan(t: ViewTransform, delta: Point) -> ViewTransform:
    return replace(t, pan=clamp_pan(t.pan + delta, t.radius, t.zoom))


def reset_view(t: ViewTransform) -> ViewTransform:
    return replace(t, zoom=_MIN_ZOOM, pan=Point(0.0, 0.0))


def zoom_factor_for_scroll(delta_y: float) -> float:
    """
    Does:
        Scroll delta -> zoom factor: one fixed step in for negative deltas, out for positive.
    """
    if delta_y < 0:
        return _SCROLL_ZOOM_STEP
    if delta_y > 0:
        return 1.0 / _SCROLL_ZOOM_STEP
    return 1.0


def pinch_zoom_factor(previous_span: float, span: float) -> float:
    """
    Does:
        Ratio of successive two-finger spans; 1.0 when there is no usable previous span.
    """
    if previous_span <= 0 or not math.isfinite(previous_span) or not math.isfinite(span) or span <= 0:
        return 1.0
    return span / previous_span


def is_visible(v: Point, t: ViewTransform, margin: float = _VISIBILITY_MARGIN_PX) -> bool:
    """
    Does:
        True when a viewport point lies within the wheel's bounding square (plus margin).
    """
    return (
        t.center.x - t.radius - margin <= v.x <= t.center.x + t.radius + margin
        and t.center.y - t.radius - margin <= v.y <= t.center.y + t.radius + margin
    )
