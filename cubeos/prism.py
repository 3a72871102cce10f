"""
SingleAxisLattice: a flat prism that only spins like a turntable.

The whole body turns about its own vertical axis, so no slice is ever split off
and nothing needs re-homing after a settle. The prism is either one solid
block or a tessellated grid of tiles lying in the y = 0 plane.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from . import config
from .errors import ProtocolViolation
from .geometry import Direction, Face, Point2D, lattice_offsets
from .model import Animator, Element, Node, Rotatable, make_element

logger = logging.getLogger(__name__)

SIDE_FACES = (Face.FRONT, Face.RIGHT, Face.BACK, Face.LEFT)


class SingleAxisLattice(Rotatable):
    """Prism rotated left and right by horizontal drags only."""

    def __init__(self, frame_dim: Sequence[float], dims: Tuple[int, int] = (4, 4), name: str = "prism",
                 tessellated: bool = False, animator: Optional[Animator] = None,
                 material: Any = config.DEFAULT_PRISM_MATERIAL) -> None:
        if isinstance(dims, int):
            dims = (dims, dims)
        if min(dims) < 1:
            raise ValueError(f"prism dimensions must be at least 1, got {dims}")
        super().__init__(name, frame_dim, animator, direction=Direction.ROW)
        self.dims = (int(dims[0]), int(dims[1]))
        self.tessellated = tessellated
        self.body = Node(f"{name}-body")
        self.elements = self._init_elements(self.dims, tessellated, material)

    @staticmethod
    def _init_elements(dims: Tuple[int, int], tessellated: bool, material: Any) -> List[Element]:
        if not tessellated:
            return [make_element((0.0, 0.0, 0.0), material, size=(dims[0], 1.0, dims[1]))]
        return [make_element((x, 0.0, z), material)
                for x in lattice_offsets(dims[0]) for z in lattice_offsets(dims[1])]

    # -------- Rotatable hooks --------
    def _begin(self, start: Point2D, pos: Point2D) -> None:
        # the body is the pivot and the direction never changes
        pass

    def _finish(self, increment: float, total: float) -> None:
        self.animator.rotate(self.body, Direction.ROW, increment, config.PRISM_SNAP_DURATION, self.elements)
        # the body has completed a whole number of quarter turns
        self.body.orientation = np.rint(self.body.orientation)

    def _moving_node(self) -> Node:
        return self.body

    def _moving_elements(self) -> List[Element]:
        return list(self.elements)

    # -------- texturing --------
    def apply_images(self, images: Sequence[Any]) -> int:
        """Texture the four sides of the first element (the solid block)."""
        with self._lock:
            self._require_idle("apply_images")
            count = min(len(SIDE_FACES), len(images))
            if count < len(SIDE_FACES):
                logger.warning("%s: %d images for %d side faces", self.name, len(images), len(SIDE_FACES))
            element = self.elements[0]
            for face, image in zip(SIDE_FACES[:count], images):
                element.set_material(face, image)
            return count

    def apply_top_images(self, images: Sequence[Any]) -> int:
        """One image per tile on its TOP slot, in construction order."""
        with self._lock:
            self._require_tiles("apply_top_images")
            count = min(len(self.elements), len(images))
            if count < len(self.elements):
                logger.warning("%s: %d images for %d tiles", self.name, len(images), len(self.elements))
            for element, image in zip(self.elements[:count], images):
                element.set_material(Face.TOP, image)
            return count

    def side_tiles(self) -> List[Tuple[Element, Face]]:
        """Outer tiles with the slot facing out: front row, left, right, then back row."""
        edge_x = self.dims[0] / 2 - 0.5
        edge_z = self.dims[1] / 2 - 0.5
        rings = (
            (2, edge_z, Face.FRONT),
            (0, -edge_x, Face.LEFT),
            (0, edge_x, Face.RIGHT),
            (2, -edge_z, Face.BACK),
        )
        slots = []
        for component, coord, face in rings:
            slots.extend((e, face) for e in self.elements if e.position[component] == coord)
        return slots

    def apply_side_images(self, images: Sequence[Any]) -> int:
        """Texture the outward sides of the tiles, consuming images in order."""
        with self._lock:
            self._require_tiles("apply_side_images")
            slots = self.side_tiles()
            count = min(len(slots), len(images))
            if count < len(slots):
                logger.warning("%s: %d images for %d side slots", self.name, len(images), len(slots))
            for (element, face), image in zip(slots[:count], images):
                element.set_material(face, image)
            return count

    def _require_tiles(self, operation: str) -> None:
        self._require_idle(operation)
        if not self.tessellated:
            raise ProtocolViolation(f"{self.name}: {operation} needs a tessellated prism")
