# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import numpy as np
import pytest

from Swatch_engine.color.model import from_hsl
from Swatch_engine.color.schema import HSL, ReferenceDot
from Swatch_engine.wheel.geometry import ViewTransform

WHEEL_RADIUS = 140.0


@pytest.fixture
def view() -> ViewTransform:
    return ViewTransform.initial(WHEEL_RADIUS)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def pentagon_dots() -> list[ReferenceDot]:
    hues = [0.0, 72.0, 144.0, 216.0, 288.0]
    return [ReferenceDot(color=from_hsl(HSL(h, 1.0, 0.5)), hsl=HSL(h, 1.0, 0.5)) for h in hues]
