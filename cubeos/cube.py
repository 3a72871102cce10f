"""
AxisRotatingLattice: an N x N x N cube whose rows and columns turn.

A move groups one slice under a pivot axis, turns the pivot while the drag
continues and, once settled, puts the slice back on the lattice with its
coordinates rotated exactly and its face materials cycled. Elements are never
left with a rotated transform of their own.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from . import config
from .errors import InvariantError
from .geometry import (
    RIGHT_ANGLE,
    Direction,
    Face,
    Point2D,
    coord_to_index,
    lattice_offsets,
    on_grid,
    permute_faces,
    quarter_turn_matrix,
)
from .model import Animator, Element, Node, PivotAxis, Rotatable, make_element

logger = logging.getLogger(__name__)


class Axes:
    """The two families of pivot handles: one per row, one per column."""

    def __init__(self, dim: int) -> None:
        offsets = lattice_offsets(dim)
        self.rows = [PivotAxis(Direction.ROW, i, c) for i, c in enumerate(offsets)]
        self.columns = [PivotAxis(Direction.COLUMN, i, c) for i, c in enumerate(offsets)]

    def get(self, direction: Direction, index: int) -> PivotAxis:
        if direction is Direction.ROW:
            return self.rows[index]
        return self.columns[index]

    def __iter__(self):
        yield from self.rows
        yield from self.columns


class AxisRotatingLattice(Rotatable):
    """Cube whose rows turn with horizontal drags and columns with vertical ones."""

    def __init__(self, frame_dim: Sequence[float], dim: int, name: str = "cube",
                 animator: Optional[Animator] = None, material: Any = config.DEFAULT_CUBE_MATERIAL) -> None:
        if dim < 1:
            raise ValueError(f"cube dimension must be at least 1, got {dim}")
        super().__init__(name, frame_dim, animator)
        self.dim = dim
        self.elements = self._init_elements(dim, material)
        self.axes = Axes(dim)

    @staticmethod
    def _init_elements(dim: int, material: Any) -> List[Element]:
        offsets = lattice_offsets(dim)
        return [make_element((x, y, z), material)
                for x in offsets for y in offsets for z in offsets]

    # -------- Rotatable hooks --------
    def _begin(self, start: Point2D, pos: Point2D) -> None:
        # the slice index divides the start coordinate by the frame extent on
        # that same axis: height for rows, width for columns
        if abs(pos.x - start.x) > abs(pos.y - start.y):
            direction = Direction.ROW
            index = coord_to_index(start.y, self.frame_dim.y, self.dim)
        else:
            direction = Direction.COLUMN
            index = coord_to_index(start.x, self.frame_dim.x, self.dim)
        axis = self.axes.get(direction, index)
        self._group(axis)
        self.state.axis = axis
        self.state.direction = direction
        self.animator.scale(axis, config.FIT_SCALE, config.FIT_DURATION, self.elements_in(axis))

    def _finish(self, increment: float, total: float) -> None:
        axis = self.state.axis
        members = self.elements_in(axis)
        self.animator.rotate(axis, self.state.direction, increment, config.SNAP_DURATION, members)
        self.animator.scale(axis, config.REFIT_SCALE, config.REFIT_DURATION, members)
        self._rehome(axis, self.state.direction, total)

    def _moving_node(self) -> Node:
        return self.state.axis

    def _moving_elements(self) -> List[Element]:
        return self.elements_in(self.state.axis)

    # -------- slice bookkeeping --------
    def elements_in(self, owner: Optional[PivotAxis]) -> List[Element]:
        """Elements owned by a pivot, or by the permanent lattice when ``owner`` is None."""
        return [e for e in self.elements if e.owner is owner]

    def _group(self, axis: PivotAxis) -> None:
        """Hand the slice under ``axis`` to the pivot, positions relative to it."""
        for element in self.elements:
            if element.owner is None and element.position[axis.component] == axis.coord:
                element.owner = axis
                element.position[axis.component] -= axis.coord

    def _rehome(self, axis: PivotAxis, direction: Direction, total: float) -> None:
        """Move every element of ``axis`` back onto the lattice, turned by ``total``.

        New positions are computed and checked for the whole slice before any
        element is touched.
        """
        quarters = int(round(total / RIGHT_ANGLE))
        matrix = quarter_turn_matrix(direction, total) if quarters else None
        members = self.elements_in(axis)
        positions = []
        for element in members:
            position = element.position.copy()
            position[axis.component] += axis.coord
            if quarters:
                position = matrix @ position
            self._check_on_grid(position)
            positions.append(position)
        for element, position in zip(members, positions):
            element.owner = None
            element.position = position
            for _ in range(abs(quarters)):
                element.materials = permute_faces(element.materials, direction, quarters > 0)
        axis.reset()

    def _release(self) -> None:
        if self.state.axis is not None:
            self._ungroup(self.state.axis)

    def _ungroup(self, axis: PivotAxis) -> None:
        """Hand the slice back to the lattice unturned."""
        for element in self.elements_in(axis):
            element.owner = None
            element.position[axis.component] += axis.coord
        axis.reset()

    def _check_on_grid(self, position: np.ndarray) -> None:
        for value in position:
            if not on_grid(value, self.dim):
                raise InvariantError(f"{self.name}: element left the lattice at {position}")

    def apply_turn(self, direction: Direction, index: int, quarters: int = 1) -> None:
        """Turn a slice by whole quarter turns immediately, without a drag."""
        if direction is Direction.UNSET:
            raise ValueError("direction is unset")
        with self._lock:
            self._require_idle("apply_turn")
            axis = self.axes.get(direction, index)
            self._group(axis)
            try:
                self._rehome(axis, direction, quarters * RIGHT_ANGLE)
            except InvariantError:
                self._ungroup(axis)
                raise

    # -------- texturing --------
    def face_elements(self, face: Face) -> List[Element]:
        """Elements on the outer layer of ``face``, in construction order."""
        edge = self.dim / 2 - 0.5
        component, coord = {
            Face.FRONT: (2, edge),
            Face.BACK: (2, -edge),
            Face.RIGHT: (0, edge),
            Face.LEFT: (0, -edge),
            Face.TOP: (1, edge),
            Face.BOT: (1, -edge),
        }[face]
        return [e for e in self.elements if e.position[component] == coord]

    def apply_face_images(self, face: Face, images: Sequence[Any]) -> int:
        """Put one image per boundary element on ``face``; returns how many were applied."""
        face = Face(face)
        with self._lock:
            self._require_idle("apply_face_images")
            targets = self.face_elements(face)
            count = min(len(targets), len(images))
            if count < len(targets):
                logger.warning("%s: %d images for %d elements on %s face",
                               self.name, len(images), len(targets), face.name)
            for element, image in zip(targets[:count], images):
                element.set_material(face, image)
            return count
