from __future__ import annotations

import itertools
import math

import pytest

from Swatch_engine.color.model import from_hsl
from Swatch_engine.color.schema import HSL, HarmonyFamily, HarmonyTarget, Point
from Swatch_engine.palette.harmony import harmony_targets
from Swatch_engine.wheel.geometry import project
from Swatch_engine.wheel.overlap import group_coincident, resolve_overlaps


def _target(hsl: HSL) -> HarmonyTarget:
    return HarmonyTarget(color=from_hsl(hsl), hsl=hsl)


@pytest.mark.parametrize("k", range(2, 9))
def test_coincident_targets_are_fanned_apart(view, k):
    hsl = HSL(200.0, 0.6, 0.5)
    r = 10.0
    out = resolve_overlaps([_target(hsl)] * k, view, fan_threshold_px=4.0, fan_radius_px=r)
    pts = [p for _, p in out]

    min_sep = 2.0 * r * math.sin(math.pi / k)
    for a, b in itertools.combinations(pts, 2):
        assert a.distance_to(b) >= min_sep - 1e-9

    ref = project(hsl, view)
    for p in pts:
        assert p.distance_to(ref) == pytest.approx(r)


def test_first_member_sits_above_reference(view):
    hsl = HSL(10.0, 0.3, 0.5)
    out = resolve_overlaps([_target(hsl)] * 3, view)
    ref = project(hsl, view)
    first = out[0][1]
    assert first.x == pytest.approx(ref.x)
    assert first.y == pytest.approx(ref.y - 10.0)


def test_singletons_keep_their_projection(view):
    targets = [_target(HSL(0.0, 1.0, 0.5)), _target(HSL(120.0, 1.0, 0.5)), _target(HSL(240.0, 1.0, 0.5))]
    out = resolve_overlaps(targets, view)
    for tg, p in out:
        assert p == project(tg.hsl, view)


def test_output_order_matches_input(view):
    a, b = HSL(0.0, 0.5, 0.5), HSL(180.0, 0.5, 0.5)
    targets = [_target(a), _target(b), _target(a), _target(b)]
    out = resolve_overlaps(targets, view)
    assert [tg for tg, _ in out] == targets
    # members 0 and 2 share a group; 1 and 3 share another
    assert out[0][1] != out[2][1]
    assert out[1][1] != out[3][1]


def test_monochromatic_targets_overlap_on_wheel(view):
    # lightness variants project to the same hue/saturation point
    targets = harmony_targets("#3366CC", HarmonyFamily.MONOCHROMATIC)
    assert len(targets) == 2
    positions = [project(t.hsl, view) for t in targets]
    assert positions[0].distance_to(positions[1]) <= 4.0

    out = resolve_overlaps(targets, view)
    assert out[0][1].distance_to(out[1][1]) == pytest.approx(20.0)


def test_group_coincident_is_greedy_against_first_member():
    pts = [Point(0.0, 0.0), Point(3.0, 0.0), Point(6.0, 0.0), Point(100.0, 0.0)]
    assert group_coincident(pts, 4.0) == [[0, 1], [2], [3]]
    assert group_coincident([], 4.0) == []


def test_negative_radii_rejected(view):
    with pytest.raises(ValueError):
        resolve_overlaps([], view, fan_threshold_px=-1.0)


def test_grouping_threshold_is_inclusive():
    assert group_coincident([Point(0.0, 0.0), Point(4.0, 0.0)], 4.0) == [[0, 1]]
    assert group_coincident([Point(0.0, 0.0), Point(4.0 + 1e-9, 0.0)], 4.0) == [[0], [1]]


def test_targets_exactly_threshold_apart_are_fanned(view):
    # two targets on the +x axis whose projections are exactly 4 px apart
    a, b = HSL(0.0, 0.5, 0.5), HSL(0.0, 0.5 + 4.0 / 140.0, 0.5)
    d = project(a, view).distance_to(project(b, view))
    out = resolve_overlaps([_target(a), _target(b)], view, fan_threshold_px=d, fan_radius_px=10.0)
    assert out[0][1].distance_to(out[1][1]) == pytest.approx(20.0)
