# src/Swatch_engine/color/model.py
from __future__ import annotations

import math
from functools import lru_cache
from typing import Iterable, Tuple

import numpy as np

from Swatch_engine.color._constants import (
    _ACHROMATIC_C_EPS,
    _GAMUT_BISECT_STEPS,
    _HEX_RE,
    _M_LINEAR_TO_LMS,
    _M_LMS_TO_LINEAR,
    _M_LMS_TO_OKLAB,
    _M_OKLAB_TO_LMS,
    _MATCH_PCT_SCALE,
    _SRGB_GAMMA_KNEE,
    _SRGB_LINEAR_KNEE,
)
from Swatch_engine.color.schema import (
    HSL,
    OKLCH,
    RGB,
    Color,
    InvalidColorFormat,
    OKLab,
)

__all__ = [
    "D_MAX",
    "parse_hex",
    "is_valid_hex",
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "to_hsl",
    "from_hsl",
    "to_oklab",
    "oklab_array",
    "oklab_to_rgb",
    "oklab_to_oklch",
    "oklch_to_oklab",
    "to_oklch",
    "clamp_chroma_to_gamut",
    "oklch_to_hex",
    "distance",
    "distances_to",
    "match_percentage",
    "complementary",
]


# ---------------------------------------------------------------------
# Hex <-> RGB
# ---------------------------------------------------------------------

def parse_hex(s: object) -> Color:
    """
    Does:
        Validate a 6-digit hex color (leading '#' optional) and return it as uppercase '#RRGGBB'.

    Raises:
        InvalidColorFormat for anything else (3-digit shorthand, names, non-strings).
    """
    if not isinstance(s, str):
        raise InvalidColorFormat(s)
    m = _HEX_RE.match(s.strip())
    if not m:
        raise InvalidColorFormat(s)
    return "#" + m.group(1).upper()


def is_valid_hex(s: object) -> bool:
    return isinstance(s, str) and _HEX_RE.match(s.strip()) is not None


def _round255(v: float) -> int:
    # half-up rounding, clamped to a byte
    return max(0, min(255, int(math.floor(v + 0.5))))


def hex_to_rgb(c: str) -> RGB:
    hx = parse_hex(c)
    return RGB(int(hx[1:3], 16), int(hx[3:5], 16), int(hx[5:7], 16))


def rgb_to_hex(rgb: RGB) -> Color:
    return "#{:02X}{:02X}{:02X}".format(_round255(rgb.r), _round255(rgb.g), _round255(rgb.b))


# ---------------------------------------------------------------------
# RGB <-> HSL
# ---------------------------------------------------------------------

def rgb_to_hsl(rgb: RGB) -> HSL:
    r1 = rgb.r / 255.0
    g1 = rgb.g / 255.0
    b1 = rgb.b / 255.0
    mx = max(r1, g1, b1)
    mn = min(r1, g1, b1)
    d = mx - mn
    l = (mx + mn) / 2.0

    if d == 0:
        return HSL(0.0, 0.0, l)

    s = d / (2.0 - mx - mn) if l > 0.5 else d / (mx + mn)
    if mx == r1:
        h = ((g1 - b1) / d + (6.0 if g1 < b1 else 0.0)) * 60.0
    elif mx == g1:
        h = ((b1 - r1) / d + 2.0) * 60.0
    else:
        h = ((r1 - g1) / d + 4.0) * 60.0

    return HSL(h % 360.0, s, l)


def hsl_to_rgb(hsl: HSL) -> RGB:
    """
    Does:
        Chroma / six-sector HSL -> RGB. Hue is wrapped mod 360, s and l are clamped to [0, 1].
    """
    h = float(hsl.h) % 360.0
    s = min(1.0, max(0.0, float(hsl.s)))
    l = min(1.0, max(0.0, float(hsl.l)))

    c = (1.0 - abs(2.0 * l - 1.0)) * s
    hp = h / 60.0
    x = c * (1.0 - abs(hp % 2.0 - 1.0))
    m = l - c / 2.0

    if hp < 1:
        r1, g1, b1 = c, x, 0.0
    elif hp < 2:
        r1, g1, b1 = x, c, 0.0
    elif hp < 3:
        r1, g1, b1 = 0.0, c, x
    elif hp < 4:
        r1, g1, b1 = 0.0, x, c
    elif hp < 5:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x

    return RGB(
        _round255((r1 + m) * 255.0),
        _round255((g1 + m) * 255.0),
        _round255((b1 + m) * 255.0),
    )


def to_hsl(c: str) -> HSL:
    return rgb_to_hsl(hex_to_rgb(c))


def from_hsl(hsl: HSL) -> Color:
    return rgb_to_hex(hsl_to_rgb(hsl))


# ---------------------------------------------------------------------
# OKLab (vectorized core)
# ---------------------------------------------------------------------

def _srgb_to_linear(c01: np.ndarray) -> np.ndarray:
    return np.where(c01 <= _SRGB_LINEAR_KNEE, c01 / 12.92, ((c01 + 0.055) / 1.055) ** 2.4)


def _linear_to_srgb(lin: np.ndarray) -> np.ndarray:
    lin = np.asarray(lin, dtype=float)
    safe = np.maximum(lin, 0.0)
    return np.where(lin <= _SRGB_GAMMA_KNEE, 12.92 * lin, 1.055 * safe ** (1.0 / 2.4) - 0.055)


def _rgb255_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """
    Does:
        (n, 3) array of 0..255 channels -> (n, 3) array of OKLab (L, a, b).
    """
    lin = _srgb_to_linear(np.asarray(rgb, dtype=float) / 255.0)
    lms = np.cbrt(lin @ _M_LINEAR_TO_LMS.T)
    return lms @ _M_LMS_TO_OKLAB.T


def _oklab_to_linear(lab: np.ndarray) -> np.ndarray:
    lms_ = np.asarray(lab, dtype=float) @ _M_OKLAB_TO_LMS.T
    return (lms_ ** 3) @ _M_LMS_TO_LINEAR.T


@lru_cache(maxsize=4096)
def _oklab_tuple(hx: str) -> Tuple[float, float, float]:
    rgb = hex_to_rgb(hx)
    lab = _rgb255_to_oklab(np.array([[rgb.r, rgb.g, rgb.b]], dtype=float))[0]
    return (float(lab[0]), float(lab[1]), float(lab[2]))


def to_oklab(c: str) -> OKLab:
    L, a, b = _oklab_tuple(parse_hex(c))
    return OKLab(L, a, b)


def oklab_array(colors: Iterable[str]) -> np.ndarray:
    """
    Does:
        Convert many colors at once into an (n, 3) OKLab array (same numbers as to_oklab).

    Raises:
        InvalidColorFormat on the first malformed color.
    """
    rows = [_oklab_tuple(parse_hex(c)) for c in colors]
    if not rows:
        return np.zeros((0, 3), dtype=float)
    return np.asarray(rows, dtype=float)


def oklab_to_rgb(lab: OKLab) -> RGB:
    lin = _oklab_to_linear(np.array([lab.L, lab.a, lab.b], dtype=float))
    srgb = np.clip(_linear_to_srgb(lin), 0.0, 1.0)
    return RGB(_round255(srgb[0] * 255.0), _round255(srgb[1] * 255.0), _round255(srgb[2] * 255.0))


def _in_gamut(lab: OKLab, eps: float = 1e-7) -> bool:
    lin = _oklab_to_linear(np.array([lab.L, lab.a, lab.b], dtype=float))
    return bool(np.all(lin >= -eps) and np.all(lin <= 1.0 + eps))


# ---------------------------------------------------------------------
# OKLCH
# ---------------------------------------------------------------------

def oklab_to_oklch(lab: OKLab) -> OKLCH:
    C = math.hypot(lab.a, lab.b)
    h = float("nan") if C < _ACHROMATIC_C_EPS else math.degrees(math.atan2(lab.b, lab.a)) % 360.0
    return OKLCH(lab.L, C, h)


def oklch_to_oklab(lch: OKLCH) -> OKLab:
    h_rad = 0.0 if math.isnan(lch.h) else math.radians(lch.h)
    return OKLab(lch.L, lch.C * math.cos(h_rad), lch.C * math.sin(h_rad))


def to_oklch(c: str) -> OKLCH:
    return oklab_to_oklch(to_oklab(c))


def clamp_chroma_to_gamut(lch: OKLCH) -> OKLCH:
    """
    Does:
        Reduce chroma (bisection) until the OKLCH color fits the sRGB gamut; hue and lightness are kept.
    """
    if lch.C < _ACHROMATIC_C_EPS or math.isnan(lch.h):
        return OKLCH(lch.L, 0.0, lch.h)
    if _in_gamut(oklch_to_oklab(lch)):
        return lch

    lo, hi = 0.0, float(lch.C)
    best = OKLCH(lch.L, 0.0, lch.h)
    for _ in range(_GAMUT_BISECT_STEPS):
        mid = 0.5 * (lo + hi)
        cand = OKLCH(lch.L, mid, lch.h)
        if _in_gamut(oklch_to_oklab(cand)):
            best = cand
            lo = mid
        else:
            hi = mid
    return best


def oklch_to_hex(lch: OKLCH) -> Color:
    return rgb_to_hex(oklab_to_rgb(oklch_to_oklab(clamp_chroma_to_gamut(lch))))


# ---------------------------------------------------------------------
# Perceptual distance
# ---------------------------------------------------------------------

def _oklab_euclid(p: Tuple[float, float, float], q: Tuple[float, float, float]) -> float:
    return math.sqrt((p[0] - q[0]) ** 2 + (p[1] - q[1]) ** 2 + (p[2] - q[2]) ** 2)


# normalization: OKLab distance between pure black and pure white
D_MAX: float = _oklab_euclid(_oklab_tuple("#000000"), _oklab_tuple("#FFFFFF"))


def distance(a: str, b: str) -> float:
    """
    Does:
        Euclidean OKLab distance divided by D_MAX. Not clamped: extreme pairs may slightly exceed 1.
    """
    return _oklab_euclid(_oklab_tuple(parse_hex(a)), _oklab_tuple(parse_hex(b))) / D_MAX


def distances_to(target: str, lab: np.ndarray) -> np.ndarray:
    """
    Does:
        Normalized distances from one color to an (n, 3) OKLab array (see oklab_array).
    """
    t = np.asarray(_oklab_tuple(parse_hex(target)), dtype=float)
    if lab.shape[0] == 0:
        return np.zeros(0, dtype=float)
    return np.sqrt(((lab - t) ** 2).sum(axis=1)) / D_MAX


def match_percentage(d: float) -> float:
    return (1.0 - min(max(float(d), 0.0), 1.0)) * _MATCH_PCT_SCALE


def complementary(c: str) -> Color:
    hsl = to_hsl(c)
    return from_hsl(HSL((hsl.h + 180.0) % 360.0, hsl.s, hsl.l))
