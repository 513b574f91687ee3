# src/Swatch_engine/color/_constants.py
from __future__ import annotations

import re

import numpy as np

# =============================================================================
# HEX PARSING
# =============================================================================

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# =============================================================================
# sRGB -> OKLab (Björn Ottosson reference matrices)
# =============================================================================

_SRGB_LINEAR_KNEE = 0.04045
_SRGB_GAMMA_KNEE = 0.0031308

_M_LINEAR_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ],
    dtype=float,
)

_M_LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ],
    dtype=float,
)

_M_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ],
    dtype=float,
)

_M_LMS_TO_LINEAR = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ],
    dtype=float,
)

# =============================================================================
# OKLCH helpers
# =============================================================================

_ACHROMATIC_C_EPS = 1e-8
_GAMUT_BISECT_STEPS = 20

# =============================================================================
# Display
# =============================================================================

# match percentage is clamped to [0, 100]; raw distances may exceed 1
_MATCH_PCT_SCALE = 100.0

# =============================================================================
# Undertone (thresholds tuned on nail polish colors)
# =============================================================================

_UNDERTONE_CHROMA_MIN = 0.04
_UNDERTONE_WARM_MIN = 0.015
_UNDERTONE_COOL_MAX = -0.015
_WARMTH_A_WEIGHT = 0.5

# =============================================================================
# Collection gaps (OKLCH hue families / lightness bands)
# =============================================================================

_GAP_NEUTRAL_C_MAX = 0.04
_GAP_SEED_CHROMA = 0.09
_GAP_UNDERREP_RATIO = 0.5
