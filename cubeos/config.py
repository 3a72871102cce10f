"""
Configuration constants for the home screen and its lattice objects.

All tunables pass through ``sanitize_numeric_input`` so an edited value that is
out of range falls back into bounds instead of breaking the scene.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Union

from .geometry import Boundary

# -----------------------------
# Input Sanitization Functions
# -----------------------------

def sanitize_numeric_input(value: Union[int, float], min_val: Union[int, float], max_val: Union[int, float], default: Union[int, float]) -> Union[int, float]:
    """Clamp a numeric value into ``[min_val, max_val]``; non-numbers give ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, (int, float)):
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return max(min_val, min(max_val, value))


# -----------------------------
# Screen
# -----------------------------
# Logical screen size in points; zone boundaries below are expressed in it
WIDTH = sanitize_numeric_input(360.0, 100.0, 4096.0, 360.0)
HEIGHT = sanitize_numeric_input(660.0, 100.0, 4096.0, 660.0)
WINDOW_SCALE = sanitize_numeric_input(1.0, 0.5, 4.0, 1.0)  # window pixels per point
FPS = sanitize_numeric_input(60, 30, 120, 60)

# -----------------------------
# Move timing (seconds) and pivot scaling
# -----------------------------
FIT_SCALE = sanitize_numeric_input(0.7, 0.1, 1.0, 0.7)
REFIT_SCALE = 1 / FIT_SCALE
FIT_DURATION = sanitize_numeric_input(0.1, 0.0, 2.0, 0.1)
SNAP_DURATION = sanitize_numeric_input(0.23, 0.0, 2.0, 0.23)
REFIT_DURATION = sanitize_numeric_input(0.08, 0.0, 2.0, 0.08)
PRISM_SNAP_DURATION = sanitize_numeric_input(0.3, 0.0, 2.0, 0.3)

# -----------------------------
# Zones (top, bot, left, right)
# -----------------------------

class Zone(Enum):
    TOP = "top"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    CENTER = "center"
    BOT = "bot"


BOUND_VIEW = Boundary(0, HEIGHT, 0, WIDTH)
BOUND_TOP = Boundary(33, 130, 18, 362)
BOUND_TOP_LEFT = Boundary(130.1, 306, 18, 188.5)
BOUND_TOP_RIGHT = Boundary(130.1, 306, 188.6, 362)
BOUND_CENTER = Boundary(306.1, 656.5, 18, 362)
BOUND_BOT = Boundary(656.5, 750, 18, 362)

ZONE_BOUNDS = {
    Zone.TOP: BOUND_TOP,
    Zone.TOP_LEFT: BOUND_TOP_LEFT,
    Zone.TOP_RIGHT: BOUND_TOP_RIGHT,
    Zone.CENTER: BOUND_CENTER,
    Zone.BOT: BOUND_BOT,
}

# -----------------------------
# Home scene layout
# -----------------------------
# zone -> (kind, dim, world position, uniform scale)
# kind: 'cube', 'prism' (single block) or 'tiles' (tessellated prism)
SCENE_LAYOUT = {
    Zone.TOP: ('prism', 4, (0.0, 13.8, 0.0), 1.0),
    Zone.TOP_LEFT: ('cube', 1, (-1.037, 12.2, 1.0), 1.98),
    Zone.TOP_RIGHT: ('cube', 2, (1.0, 12.2, 1.0), 1.0),
    Zone.CENTER: ('cube', 4, (0.0, 9.1, 0.0), 1.0),
    Zone.BOT: ('tiles', 4, (0.0, 6.5, 0.0), 1.0),
}

# Texture plan: image-name stems per cube face (FRONT..BOT) and image counts
CUBE_TEXTURES = {
    Zone.CENTER: (("black", "red", "green", "white", "purple", "blue"), 16),
    Zone.TOP_RIGHT: (("app1", "app2", "app3", "app4", "app5", "app6"), 4),
    Zone.TOP_LEFT: (("widget1", "widget2", "widget3", "widget4", "widget5", "widget6"), 1),
}
BOT_SIDE_TEXTURE = ("bot", 16)
BOT_TOP_TEXTURE = ("al", 16)
TOP_SIDE_TEXTURE = ("rect", 4)

# Materials an element starts with before any texture is applied
DEFAULT_CUBE_MATERIAL = (0.0, 0.0, 0.0)
DEFAULT_PRISM_MATERIAL = (1.0, 1.0, 1.0)

# -----------------------------
# Camera
# -----------------------------
CAMERA_POS = (0.0, 10.15, 10.4 * WIDTH / 390)
CAMERA_FOV = sanitize_numeric_input(60.0, 10.0, 120.0, 60.0)
CLEAR_COLOR = (0.08, 0.08, 0.1, 1.0)
