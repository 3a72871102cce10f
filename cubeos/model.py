"""
Shared pieces of the lattice objects: elements, turnable nodes, the per-object
move record and the Rotatable base class that drives drag -> rotate -> settle.
"""
from __future__ import annotations

import abc
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import LatticeError, ProtocolViolation
from .geometry import (
    Direction,
    Face,
    Point2D,
    drag_increment,
    rotation_matrix,
    snap_rotation,
)

logger = logging.getLogger(__name__)

SLOT_COUNT = len(Face)


# -----------------------------
# Elements and nodes
# -----------------------------

class Node:
    """Something that can be turned as one piece: a pivot axis or a whole body.

    ``orientation`` and ``scale`` are purely visual; lattice coordinates never
    depend on them once a move has settled.
    """

    def __init__(self, name: str, offset: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.name = name
        self.offset = np.array(offset, dtype=float)
        self.orientation = np.eye(3)
        self.scale = 1.0

    def turn(self, direction: Direction, radians: float) -> None:
        """Rotate by ``radians`` on top of the current orientation."""
        self.orientation = rotation_matrix(direction, radians) @ self.orientation

    def reset(self) -> None:
        self.orientation = np.eye(3)
        self.scale = 1.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PivotAxis(Node):
    """Handle a row or column is grouped under while it turns."""

    def __init__(self, direction: Direction, index: int, coord: float) -> None:
        offset = (0.0, coord, 0.0) if direction is Direction.ROW else (coord, 0.0, 0.0)
        super().__init__(f"{direction.value}{index}", offset)
        self.direction = direction
        self.index = index
        self.coord = coord
        # which position component the pivot sits on
        self.component = 1 if direction is Direction.ROW else 0


@dataclass(eq=False)
class Element:
    """One unit of a lattice.

    ``position`` is object-local; while ``owner`` is a pivot it is relative to
    that pivot's offset instead.
    """
    position: np.ndarray
    materials: List[Any]
    size: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    owner: Optional[PivotAxis] = None

    def __post_init__(self):
        self.position = np.array(self.position, dtype=float)
        self.materials = list(self.materials)
        if len(self.materials) != SLOT_COUNT:
            raise ValueError(f"an element has {SLOT_COUNT} material slots, got {len(self.materials)}")

    def set_material(self, face: Face, material: Any) -> None:
        self.materials[face] = material

    def material(self, face: Face) -> Any:
        return self.materials[face]

    def local_position(self) -> np.ndarray:
        """Displayed position in the object's frame, following any pivot it rides on."""
        if self.owner is None:
            return self.position.copy()
        pivot = self.owner
        return pivot.offset + pivot.orientation @ (pivot.scale * self.position)


def make_element(position: Sequence[float], material: Any, size=(1.0, 1.0, 1.0)) -> Element:
    return Element(np.array(position, dtype=float), [material] * SLOT_COUNT, tuple(size))


# -----------------------------
# Move record
# -----------------------------

@dataclass
class MoveState:
    """Transient record of the move in flight on one object."""
    active: bool = False
    axis: Optional[PivotAxis] = None
    direction: Direction = Direction.UNSET
    anchor: Optional[Point2D] = None
    cumulative: float = 0.0
    # direction restored on clear(); fixed-axis objects keep theirs
    home_direction: Direction = field(default=Direction.UNSET, repr=False)

    def __post_init__(self):
        if self.direction is Direction.UNSET:
            self.direction = self.home_direction

    def clear(self) -> None:
        self.active = False
        self.axis = None
        self.direction = self.home_direction
        self.anchor = None
        self.cumulative = 0.0


# -----------------------------
# Animation
# -----------------------------

class Animator:
    """Applies node transforms immediately.

    Hosts that want eased motion subclass this, call the base implementation
    to commit the transform, and replay the remaining motion on screen.
    """

    def rotate(self, node: Node, direction: Direction, radians: float, duration: float = 0.0,
               members: Iterable[Element] = ()) -> None:
        node.turn(direction, radians)

    def scale(self, node: Node, factor: float, duration: float = 0.0,
              members: Iterable[Element] = ()) -> None:
        node.scale *= factor


# -----------------------------
# Rotatable contract
# -----------------------------

@dataclass(frozen=True)
class SettleResult:
    increment: float
    total: float
    moved: Tuple[Element, ...] = ()


class Rotatable(abc.ABC):
    """A lattice object the gesture router can drive.

    Every public call holds the object's lock for its whole body, so a move is
    started, turned and settled atomically with respect to other threads.
    """

    def __init__(self, name: str, frame_dim: Sequence[float], animator: Optional[Animator] = None,
                 direction: Direction = Direction.UNSET) -> None:
        self.name = name
        self.frame_dim = Point2D(float(frame_dim[0]), float(frame_dim[1]))
        self.animator = animator if animator is not None else Animator()
        self.state = MoveState(home_direction=direction)
        self.elements: List[Element] = []
        self._lock = threading.Lock()

    # -------- public protocol --------
    def start_drag(self, start: Sequence[float], pos: Sequence[float]) -> None:
        start, pos = Point2D(*start), Point2D(*pos)
        with self._lock:
            if self.state.active:
                raise ProtocolViolation(f"{self.name}: start_drag called while a move is active")
            self._begin(start, pos)
            self.state.anchor = start
            self.state.active = True
            logger.debug("%s: drag started at %s (%s)", self.name, start, self.state.direction.value)

    def rotate(self, pos: Sequence[float]) -> float:
        """Turn the active slice by the drag since the last call; returns the increment."""
        pos = Point2D(*pos)
        with self._lock:
            self._require_active("rotate")
            increment = drag_increment(self.state.direction, self.state.anchor, pos, self.frame_dim)
            self.state.cumulative += increment
            self.animator.rotate(self._moving_node(), self.state.direction, increment,
                                 members=self._moving_elements())
            self.state.anchor = pos
            return increment

    def settle(self) -> SettleResult:
        with self._lock:
            self._require_active("settle")
            try:
                increment, total = snap_rotation(self.state.cumulative)
                logger.debug("%s: settling %.4f rad -> %.4f rad", self.name, self.state.cumulative, total)
                moved = tuple(self._moving_elements())
                self._finish(increment, total)
            except LatticeError:
                self._release()
                raise
            finally:
                self.state.clear()
            return SettleResult(increment, total, moved)

    @property
    def is_active(self) -> bool:
        return self.state.active

    # -------- hooks --------
    @abc.abstractmethod
    def _begin(self, start: Point2D, pos: Point2D) -> None:
        """Pick the direction and slice for a new move."""

    @abc.abstractmethod
    def _finish(self, increment: float, total: float) -> None:
        """Animate the snap correction and commit the move."""

    @abc.abstractmethod
    def _moving_node(self) -> Node:
        """Node that turns during the active move."""

    @abc.abstractmethod
    def _moving_elements(self) -> List[Element]:
        """Elements carried by the turning node."""

    def _release(self) -> None:
        """Undo the grouping of a move that failed to settle."""

    # -------- helpers --------
    def _require_active(self, operation: str) -> None:
        if not self.state.active:
            raise ProtocolViolation(f"{self.name}: {operation} called when no move is active")

    def _require_idle(self, operation: str) -> None:
        if self.state.active:
            raise ProtocolViolation(f"{self.name}: {operation} called during a move")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
