"""
Home screen assembly: the five lattice objects, their zones and textures.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pygame

from . import config
from .config import Zone
from .cube import AxisRotatingLattice
from .geometry import Boundary, Face
from .model import Animator, Rotatable
from .prism import SingleAxisLattice
from .router import GestureRouter

logger = logging.getLogger(__name__)

# -----------------------------
# Image libraries
# -----------------------------

class ImageLibrary:
    """Loads numbered image files ``<common><n>.png`` from a directory."""

    def __init__(self, directory: str, extension: str = ".png") -> None:
        self.directory = directory
        self.extension = extension

    def _load(self, name: str) -> Optional[pygame.Surface]:
        path = os.path.join(self.directory, name + self.extension)
        try:
            return pygame.image.load(path)
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("failed to import %s: %s", name, e)
            return None

    def load_sequence(self, common: str, count: int) -> List[Any]:
        """Images ``common1 .. common<count>``; a count of 1 loads ``common`` itself.

        Missing files are skipped, so the result may be shorter than ``count``.
        """
        if count == 1:
            image = self._load(common)
            return [image] if image is not None else []
        images = []
        for index in range(1, count + 1):
            image = self._load(f"{common}{index}")
            if image is not None:
                images.append(image)
        return images


# Enhanced palette used when no image assets are available
PALETTE = [
    (1.0, 1.0, 1.0),
    (1.0, 1.0, 0.0),
    (0.0, 0.8, 0.0),
    (0.0, 0.4, 1.0),
    (1.0, 0.0, 0.0),
    (1.0, 0.6, 0.0),
    (0.6, 0.2, 0.9),
    (0.15, 0.15, 0.15),
]


class ColorLibrary:
    """Stands in for image assets with solid colours, one colour per name stem."""

    def color_for(self, common: str) -> Tuple[float, float, float]:
        return PALETTE[sum(map(ord, common)) % len(PALETTE)]

    def load_sequence(self, common: str, count: int) -> List[Any]:
        return [self.color_for(common)] * count


# -----------------------------
# Scene
# -----------------------------

@dataclass
class Placement:
    position: Tuple[float, float, float]
    scale: float


class HomeScene:
    """The five draggable objects of the home screen and the router driving them."""

    def __init__(self, animator: Optional[Animator] = None) -> None:
        self.objects: Dict[Zone, Rotatable] = {}
        self.placements: Dict[Zone, Placement] = {}
        for zone, (kind, dim, position, scale) in config.SCENE_LAYOUT.items():
            bound = config.ZONE_BOUNDS[zone]
            name = zone.value
            if kind == 'cube':
                obj = AxisRotatingLattice(bound.extent, dim, name=name, animator=animator)
            elif kind == 'tiles':
                obj = SingleAxisLattice(bound.extent, (dim, dim), name=name, tessellated=True, animator=animator)
            else:
                obj = SingleAxisLattice(bound.extent, (dim, dim), name=name, animator=animator)
            self.objects[zone] = obj
            self.placements[zone] = Placement(position, scale)

        self.router = GestureRouter(self.zone_map(), config.BOUND_VIEW)

    def zone_map(self) -> List[Tuple[Boundary, Rotatable]]:
        return [(config.ZONE_BOUNDS[zone], self.objects[zone]) for zone in Zone]

    def __getitem__(self, zone: Zone) -> Rotatable:
        return self.objects[zone]

    def apply_textures(self, library) -> None:
        """Apply the home screen texture plan from an image or colour library."""
        for zone, (commons, count) in config.CUBE_TEXTURES.items():
            cube = self.objects[zone]
            for face, common in zip(Face, commons):
                cube.apply_face_images(face, library.load_sequence(common, count))

        bot = self.objects[Zone.BOT]
        bot.apply_side_images(library.load_sequence(*config.BOT_SIDE_TEXTURE))
        bot.apply_top_images(library.load_sequence(*config.BOT_TOP_TEXTURE))
        self.objects[Zone.TOP].apply_images(library.load_sequence(*config.TOP_SIDE_TEXTURE))
        logger.info("textures applied from %s", type(library).__name__)
