# src/Swatch_engine/wheel/_constants.py
from __future__ import annotations

# =============================================================================
# VIEW TRANSFORM
# =============================================================================

_MIN_ZOOM = 1.0
_MAX_ZOOM = 8.0

# one scroll notch zooms in by this factor (out by its inverse)
_SCROLL_ZOOM_STEP = 1.15

# float slack when validating the pan bound
_PAN_EPS = 1e-9

# =============================================================================
# INTERACTION DEFAULTS (viewport pixels)
# =============================================================================

_SNAP_THRESHOLD_PX = 20.0

_FAN_THRESHOLD_PX = 4.0
_FAN_RADIUS_PX = 10.0

# markers this far outside the wheel's bounding square are still drawn
_VISIBILITY_MARGIN_PX = 10.0
