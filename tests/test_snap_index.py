from __future__ import annotations

import math

import pytest

from Swatch_engine.color.model import from_hsl
from Swatch_engine.color.schema import HSL, Point, ReferenceDot
from Swatch_engine.wheel.geometry import apply_zoom, project
from Swatch_engine.wheel.snap import nearest_dot, snap

R = 140.0


def _threshold_for_degrees(deg: float, s: float = 1.0) -> float:
    # chord length between two points deg apart on the saturation ring
    return 2.0 * R * s * math.sin(math.radians(deg) / 2.0)


def test_scenario_snaps_to_nearest_pentagon_dot(view, pentagon_dots):
    q = project(HSL(70.0, 1.0, 0.5), view)
    hit = snap(q, pentagon_dots, view, _threshold_for_degrees(5.0))
    assert hit is not None
    idx, dot = hit
    assert idx == 1
    assert dot.hsl.h == 72.0


def test_nearest_outside_threshold_is_rejected(view, pentagon_dots):
    q = project(HSL(70.0, 1.0, 0.5), view)
    # 2 degrees away is ~4.9 px; a 4 px threshold must not snap even to the global nearest
    assert snap(q, pentagon_dots, view, 4.0) is None
    i, _, d = nearest_dot(q, pentagon_dots, view)
    assert i == 1
    assert d == pytest.approx(_threshold_for_degrees(2.0))


def test_snap_iff_within_threshold(view, pentagon_dots, rng):
    for _ in range(300):
        q = Point(float(rng.uniform(0, 2 * R)), float(rng.uniform(0, 2 * R)))
        thr = float(rng.uniform(0, 60))
        dists = [project(d.hsl, view).distance_to(q) for d in pentagon_dots]
        best = min(range(len(dists)), key=lambda i: (dists[i], i))
        hit = snap(q, pentagon_dots, view, thr)
        if dists[best] <= thr - 1e-9:
            assert hit is not None and hit[0] == best
        elif dists[best] > thr + 1e-9:
            assert hit is None


def test_ties_break_to_lowest_index(view):
    hsl = HSL(10.0, 0.5, 0.5)
    dots = [ReferenceDot(color=from_hsl(hsl), hsl=hsl) for _ in range(3)]
    assert snap(project(hsl, view), dots, view, 1.0)[0] == 0


def test_empty_dots(view):
    assert snap(Point(R, R), [], view, 20.0) is None
    assert nearest_dot(Point(R, R), [], view) is None


def test_snap_uses_current_transform(view):
    a = HSL(0.0, 0.10, 0.5)
    b = HSL(0.0, 0.14, 0.5)
    dots = [ReferenceDot(from_hsl(a), a), ReferenceDot(from_hsl(b), b)]

    # at 1x the two dots are ~5.6 px apart; a point between them snaps with a 4 px threshold
    q = project(HSL(0.0, 0.12, 0.5), view)
    assert snap(q, dots, view, 4.0) is not None

    zoomed = apply_zoom(view, q, 8.0)
    # same viewport point, same threshold: dots are now ~22 px away
    assert snap(q, dots, zoomed, 4.0) is None
    assert snap(project(b, zoomed), dots, zoomed, 4.0)[0] == 1


def test_negative_threshold_rejected(view, pentagon_dots):
    with pytest.raises(ValueError):
        snap(Point(R, R), pentagon_dots, view, -1.0)
