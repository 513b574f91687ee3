# src/Swatch_engine/wheel/snap.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from Swatch_engine.color.schema import Point, ReferenceDot
from Swatch_engine.wheel._constants import _SNAP_THRESHOLD_PX
from Swatch_engine.wheel.geometry import ViewTransform, project_many

__all__ = ["nearest_dot", "snap"]


def nearest_dot(
    v: Point,
    dots: Sequence[ReferenceDot],
    t: ViewTransform,
) -> Optional[Tuple[int, ReferenceDot, float]]:
    """
    Does:
        Find the dot whose projection under the *current* view is closest to a viewport point.

    Returns:
        (index, dot, distance_px), lowest index on ties; None when there are no dots.
    """
    if not dots:
        return None

    pos = project_many((d.hsl for d in dots), t)
    dist = np.hypot(pos[:, 0] - v.x, pos[:, 1] - v.y)
    i = int(np.argmin(dist))  # first occurrence on ties
    return i, dots[i], float(dist[i])


def snap(
    v: Point,
    dots: Sequence[ReferenceDot],
    t: ViewTransform,
    threshold_px: float = _SNAP_THRESHOLD_PX,
) -> Optional[Tuple[int, ReferenceDot]]:
    """
    Does:
        Lock onto the nearest dot if it lies within threshold_px of the query point.
        Recomputed from scratch on every call; nothing is cached across zoom/pan changes.

    Raises:
        ValueError for a negative threshold.
    """
    if threshold_px < 0:
        raise ValueError(f"threshold_px must be >= 0, got {threshold_px!r}")

    hit = nearest_dot(v, dots, t)
    if hit is None:
        return None
    i, dot, d = hit
    if d > threshold_px:
        return None
    return i, dot
