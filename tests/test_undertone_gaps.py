from __future__ import annotations

import pytest

from Swatch_engine.color.gaps import (
    HUE_FAMILY_ORDER,
    LIGHTNESS_BAND_ORDER,
    analyze_collection_gaps,
    classify_gap_cell,
    gap_cell_to_seed_hex,
)
from Swatch_engine.color.model import is_valid_hex
from Swatch_engine.color.schema import HueFamily, LightnessBand, Undertone
from Swatch_engine.color.undertone import undertone, undertone_breakdown


@pytest.mark.parametrize(
    "c, expected",
    [
        ("#FF0000", Undertone.WARM),
        ("#E0A040", Undertone.WARM),
        ("#0000FF", Undertone.COOL),
        ("#808080", Undertone.NEUTRAL),
        ("#FFFFFF", Undertone.NEUTRAL),
    ],
)
def test_undertone(c, expected):
    assert undertone(c) == expected


def test_undertone_breakdown_dominant():
    b = undertone_breakdown(["#FF0000", "#FF0000", "#0000FF", "#808080"])
    assert (b.warm, b.cool, b.neutral) == (2, 1, 1)
    assert b.dominant == Undertone.WARM

    assert undertone_breakdown(["#0000FF", "#808080", "#FFFFFF"]).dominant == Undertone.NEUTRAL
    assert undertone_breakdown(["#0000FF", "#808080"]).dominant == Undertone.COOL
    assert undertone_breakdown([]).dominant == Undertone.WARM


@pytest.mark.parametrize(
    "c, cell",
    [
        ("#FFFFFF", (HueFamily.NEUTRALS, LightnessBand.LIGHT)),
        ("#000000", (HueFamily.NEUTRALS, LightnessBand.DARK)),
        ("#00FF00", (HueFamily.GREENS, LightnessBand.LIGHT)),
        ("#FF0000", (HueFamily.ORANGES_CORALS, LightnessBand.MEDIUM_LIGHT)),
    ],
)
def test_classify_gap_cell(c, cell):
    assert classify_gap_cell(c) == cell


def test_classify_invalid_is_none():
    assert classify_gap_cell("nope") is None
    assert classify_gap_cell(None) is None


@pytest.mark.parametrize("band", list(LightnessBand))
def test_neutral_seed_lands_in_its_cell(band):
    seed = gap_cell_to_seed_hex(HueFamily.NEUTRALS, band)
    assert is_valid_hex(seed)
    assert classify_gap_cell(seed) == (HueFamily.NEUTRALS, band)


def test_chromatic_seeds_land_in_their_cells():
    for hf, lb in [
        (HueFamily.GREENS, LightnessBand.MEDIUM_LIGHT),
        (HueFamily.PURPLES_VIOLETS, LightnessBand.MEDIUM),
    ]:
        assert classify_gap_cell(gap_cell_to_seed_hex(hf, lb)) == (hf, lb)


def test_every_seed_is_a_valid_hex():
    for hf in HUE_FAMILY_ORDER:
        for lb in LIGHTNESS_BAND_ORDER:
            assert is_valid_hex(gap_cell_to_seed_hex(hf, lb))


def test_analyze_collection_gaps():
    res = analyze_collection_gaps(["#FFFFFF", "#000000", "#00FF00", "not-a-color"])
    assert len(res.cells) == len(HUE_FAMILY_ORDER) * len(LIGHTNESS_BAND_ORDER) == 40
    assert sum(c.count for c in res.cells) == 3
    assert len(res.missing) == 37
    assert {(c.hue_family, c.lightness_band) for c in res.underrepresented} == {
        (HueFamily.NEUTRALS, LightnessBand.LIGHT),
        (HueFamily.NEUTRALS, LightnessBand.DARK),
        (HueFamily.GREENS, LightnessBand.LIGHT),
    }


def test_analyze_empty_collection():
    res = analyze_collection_gaps([])
    assert len(res.missing) == 40
    assert res.underrepresented == ()
