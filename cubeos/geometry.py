"""
Geometric primitives shared by the lattice objects and the gesture router.

Rotations here are restricted to the two axes a lattice can turn about:
rows spin about +y, columns spin about +x.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from .errors import InvariantError

RIGHT_ANGLE = math.pi / 2

# Tolerance used when deciding whether an angle is a whole quarter turn
QUARTER_EPS = 1e-9


class Point2D(NamedTuple):
    x: float
    y: float


class Face(IntEnum):
    """Material slot order of every element."""
    FRONT = 0
    RIGHT = 1
    BACK = 2
    LEFT = 3
    TOP = 4
    BOT = 5


class Direction(Enum):
    ROW = "row"        # horizontal drag, turns about y
    COLUMN = "column"  # vertical drag, turns about x
    UNSET = "unset"


# Axis vectors used for rotations
AXIS = {
    Direction.ROW: (0.0, 1.0, 0.0),
    Direction.COLUMN: (1.0, 0.0, 0.0),
}

# Unit outward normal of each face
FACE_NORMAL = {
    Face.FRONT: (0, 0, 1),
    Face.RIGHT: (1, 0, 0),
    Face.BACK: (0, 0, -1),
    Face.LEFT: (-1, 0, 0),
    Face.TOP: (0, 1, 0),
    Face.BOT: (0, -1, 0),
}

# Side-slot permutations for one quarter turn. Entry i names the old slot that
# moves into slot i. Forward means a positive snapped angle.
FACE_CYCLE = {
    (Direction.ROW, True): (Face.LEFT, Face.FRONT, Face.RIGHT, Face.BACK, Face.TOP, Face.BOT),
    (Direction.ROW, False): (Face.RIGHT, Face.BACK, Face.LEFT, Face.FRONT, Face.TOP, Face.BOT),
    (Direction.COLUMN, True): (Face.TOP, Face.RIGHT, Face.BOT, Face.LEFT, Face.BACK, Face.FRONT),
    (Direction.COLUMN, False): (Face.BOT, Face.RIGHT, Face.TOP, Face.LEFT, Face.FRONT, Face.BACK),
}


@dataclass(frozen=True)
class Boundary:
    """Closed screen rectangle; y grows downwards so top < bot."""
    top: float
    bot: float
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bot - self.top

    @property
    def extent(self) -> Point2D:
        return Point2D(self.width, self.height)

    def contains(self, pos: Sequence[float]) -> bool:
        x, y = pos[0], pos[1]
        return self.left <= x <= self.right and self.top <= y <= self.bot

    def to_local(self, screen_pos: Sequence[float]) -> Point2D:
        """Map a screen point into this zone's frame, flipping y so up is positive."""
        return Point2D(screen_pos[0] - self.left, self.bot - screen_pos[1])


# -----------------------------
# Lattice helpers
# -----------------------------

def lattice_offsets(dim: int) -> List[float]:
    """Centered coordinates of a dim-sized axis: -(dim-1)/2 ... (dim-1)/2."""
    start = -(dim / 2 - 0.5)
    return [start + i for i in range(dim)]


def on_grid(value: float, dim: int) -> bool:
    return value in lattice_offsets(dim)


def coord_to_index(coord: float, extent: float, dim: int) -> int:
    """Index of the row or column under a local coordinate.

    ``extent`` is the frame size along the axis ``coord`` is measured on.

    A start point lying exactly on the far edge of the frame maps to the last
    slice instead of one past it.
    """
    index = int(math.floor(coord / (extent / dim)))
    return max(0, min(dim - 1, index))


# -----------------------------
# Rotation helpers
# -----------------------------

def rotation_matrix(direction: Direction, angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return _axis_matrix(direction, c, s)


def quarter_turn_matrix(direction: Direction, angle: float) -> np.ndarray:
    """Exact rotation matrix for a whole number of quarter turns.

    cos and sin are rounded to {-1, 0, 1} so applying the matrix to lattice
    coordinates only swaps and negates them.
    """
    quarters = angle / RIGHT_ANGLE
    if abs(quarters - round(quarters)) > QUARTER_EPS:
        raise InvariantError(f"{angle!r} rad is not a whole quarter turn")
    n = int(round(quarters)) % 4
    c, s = ((1, 0), (0, 1), (-1, 0), (0, -1))[n]
    return _axis_matrix(direction, float(c), float(s))


def _axis_matrix(direction: Direction, c: float, s: float) -> np.ndarray:
    if direction is Direction.ROW:
        # x' = x*c + z*s, z' = -x*s + z*c
        return np.array([[c, 0.0, s],
                         [0.0, 1.0, 0.0],
                         [-s, 0.0, c]])
    if direction is Direction.COLUMN:
        # y' = y*c - z*s, z' = y*s + z*c
        return np.array([[1.0, 0.0, 0.0],
                         [0.0, c, -s],
                         [0.0, s, c]])
    raise InvariantError("direction is unset")


def permute_faces(materials: Sequence, direction: Direction, forward: bool) -> list:
    """Cycle the four side slots of a quarter-turned element by one step."""
    order = FACE_CYCLE[(direction, forward)]
    return [materials[slot] for slot in order]


def snap_rotation(cumulative: float) -> Tuple[float, float]:
    """Decide how a drag settles.

    Returns ``(increment, total)``: the rotation still to apply and the snapped
    total of the whole move. The remainder lies in (-90, 90] degrees and its sign
    follows ``cumulative``; at least half a quarter turn finishes the turn,
    anything less springs back.
    """
    remainder = math.fmod(cumulative, RIGHT_ANGLE)
    if remainder == 0.0 and cumulative > 0:
        # a whole positive quarter turn counts as finished, not at rest
        remainder = RIGHT_ANGLE
    if abs(remainder) >= RIGHT_ANGLE / 2:
        total = math.copysign(RIGHT_ANGLE, remainder)
        increment = math.copysign(RIGHT_ANGLE - abs(remainder), remainder)
    else:
        total = 0.0
        increment = -remainder
    if total not in (-RIGHT_ANGLE, 0.0, RIGHT_ANGLE):
        raise InvariantError(f"snapped rotation {total!r} is not a single quarter turn")
    return increment, total


def drag_increment(direction: Direction, anchor: Point2D, pos: Point2D, extent: Point2D) -> float:
    """Signed rotation produced by dragging from ``anchor`` to ``pos``.

    A full frame width turns a row by +90 degrees; a full frame height turns a
    column by -90 degrees.
    """
    if direction is Direction.ROW:
        return RIGHT_ANGLE * (pos.x - anchor.x) / extent.x
    if direction is Direction.COLUMN:
        return -RIGHT_ANGLE * (pos.y - anchor.y) / extent.y
    raise InvariantError("direction is unset")
