from __future__ import annotations

import pytest

from Swatch_engine.color.model import complementary, from_hsl, to_hsl
from Swatch_engine.color.schema import HSL, HarmonyFamily, InvalidColorFormat, ReferenceDot
from Swatch_engine.palette.harmony import (
    coerce_family,
    constrain_to_candidates,
    generate_harmony,
    harmony_targets,
)


def _hue_diff(a: float, b: float) -> float:
    return abs((a - b + 180.0) % 360.0 - 180.0)


def _dot(hx: str) -> ReferenceDot:
    return ReferenceDot(color=hx, hsl=to_hsl(hx))


def test_complementary_is_source_plus_complement():
    for src in ["#FF0000", "#3366CC", "#C0392B"]:
        out = generate_harmony(src, HarmonyFamily.COMPLEMENTARY)
        assert out == [src, complementary(src)]


def test_triadic_red_is_rgb_primaries():
    assert generate_harmony("#FF0000", HarmonyFamily.TRIADIC) == ["#FF0000", "#00FF00", "#0000FF"]


def test_triadic_hues_are_120_apart():
    out = generate_harmony("#3366CC", "triadic")
    assert len(out) == 3
    hues = [to_hsl(c).h for c in out]
    assert _hue_diff(hues[1], hues[0]) == pytest.approx(120.0, abs=1.0)
    assert _hue_diff(hues[2], hues[0]) == pytest.approx(120.0, abs=1.0)
    assert _hue_diff(hues[2], hues[1]) == pytest.approx(120.0, abs=1.0)


def test_offsets_in_table_order():
    assert generate_harmony("#FF0000", HarmonyFamily.ANALOGOUS) == ["#FF0000", "#FF0080", "#FF8000"]

    out = generate_harmony("#FF0000", HarmonyFamily.TETRADIC)
    assert len(out) == 4
    assert [round(to_hsl(c).h) for c in out] == [0, 90, 180, 270]

    out = generate_harmony("#FF0000", HarmonyFamily.SPLIT_COMPLEMENTARY)
    assert [round(to_hsl(c).h) for c in out] == [0, 150, 210]


def test_similar_is_source_only():
    assert generate_harmony("#abcdef", HarmonyFamily.SIMILAR) == ["#ABCDEF"]


def test_monochromatic_lightness_variants():
    out = generate_harmony("#FF0000", HarmonyFamily.MONOCHROMATIC)
    assert out == ["#FF0000", "#990000", "#FF6666"]
    for c in out[1:]:
        hsl = to_hsl(c)
        assert hsl.h == pytest.approx(0.0)
        assert hsl.s == pytest.approx(1.0)


def test_monochromatic_clamps_lightness():
    out = generate_harmony("#FFFFFF", HarmonyFamily.MONOCHROMATIC)
    # white: l+0.2 clamps back to white and is deduplicated
    assert out == ["#FFFFFF", from_hsl(HSL(0.0, 0.0, 0.8))]


def test_dedup_and_cyclic_fill_for_achromatic_source():
    assert generate_harmony("#808080", HarmonyFamily.TRIADIC) == ["#808080"]
    assert generate_harmony("#808080", HarmonyFamily.TRIADIC, min_count=3) == ["#808080"] * 3


def test_min_count_repeats_existing_entries_cyclically():
    out = generate_harmony("#FF0000", HarmonyFamily.COMPLEMENTARY, min_count=5)
    assert out == ["#FF0000", "#00FFFF", "#FF0000", "#00FFFF", "#FF0000"]


def test_min_count_below_length_is_noop():
    assert len(generate_harmony("#FF0000", HarmonyFamily.TETRADIC, min_count=2)) == 4


def test_family_coercion():
    assert coerce_family("Split-Complementary") == HarmonyFamily.SPLIT_COMPLEMENTARY
    with pytest.raises(ValueError):
        coerce_family("pentagonal")


def test_invalid_source_raises():
    with pytest.raises(InvalidColorFormat):
        generate_harmony("#12", HarmonyFamily.TRIADIC)


def test_harmony_targets_link_nearest_reference():
    dots = [_dot("#00FFFF"), _dot("#FF0000"), _dot("#00EEEE")]
    targets = harmony_targets("#FF0000", HarmonyFamily.COMPLEMENTARY, dots)
    assert len(targets) == 1
    assert targets[0].color == "#00FFFF"
    assert targets[0].matched_reference_index == 0


def test_harmony_targets_without_dots_or_for_similar():
    targets = harmony_targets("#FF0000", HarmonyFamily.TRIADIC)
    assert [t.color for t in targets] == ["#00FF00", "#0000FF"]
    assert all(t.matched_reference_index is None for t in targets)
    assert harmony_targets("#FF0000", HarmonyFamily.SIMILAR, [_dot("#FF0000")]) == []


def test_constrain_to_candidates_keeps_source():
    out = constrain_to_candidates(["#FF0000", "#00FFFF"], ["#00EEEE", "#111111"])
    assert out == ["#FF0000", "#00EEEE"]
    assert constrain_to_candidates(["#FF0000", "#00FFFF"], []) == ["#FF0000", "#00FFFF"]


def test_monochromatic_is_source_plus_two_lightness_variants(rng):
    for _ in range(50):
        hsl = HSL(float(rng.uniform(0, 360)), float(rng.uniform(0.3, 1.0)), float(rng.uniform(0.3, 0.7)))
        out = generate_harmony(from_hsl(hsl), HarmonyFamily.MONOCHROMATIC)
        assert len(out) == 3
        ls = [to_hsl(c).l for c in out]
        assert ls[1] < ls[0] < ls[2]
