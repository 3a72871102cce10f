"""
CubeOS home screen (Python + Pygame + PyOpenGL)
------------------------------------------------
Interactive host for the lattice objects:
  • Renders the five home-screen objects as textured boxes
  • Mouse drag turns rows and columns of the cubes, or spins the prisms
  • Settles ease out over the configured durations

Controls:
    Mouse drag       – Turn the row/column (or prism) under the pointer
    ESC or Q         – Quit
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pygame
from pygame.locals import DOUBLEBUF, K_ESCAPE, K_q, KEYDOWN, MOUSEBUTTONDOWN, MOUSEBUTTONUP, MOUSEMOTION, OPENGL, QUIT
from OpenGL.GL import *  # noqa: F401,F403
from OpenGL.GLU import *  # noqa: F401,F403

from . import config
from .geometry import AXIS, FACE_NORMAL, Face
from .model import Element, Node
from .prism import SingleAxisLattice
from .scene import ColorLibrary, HomeScene, ImageLibrary
from .tween import Tween, TweenAnimator

logger = logging.getLogger(__name__)

# Fraction of a cell an element fills, leaving a gap for visual clarity
ELEMENT_FILL = config.sanitize_numeric_input(0.94, 0.1, 1.0, 0.94)


# -----------------------------
# Rendering helpers
# -----------------------------

def _gl_matrix(rotation: np.ndarray) -> np.ndarray:
    m = np.eye(4, dtype=np.float32)
    m[:3, :3] = rotation
    # OpenGL expects column-major order
    return np.ascontiguousarray(m.T)


def _box_faces(hx: float, hy: float, hz: float):
    return [
        (Face.TOP, [(-hx, hy, -hz), (-hx, hy, hz), (hx, hy, hz), (hx, hy, -hz)]),
        (Face.BOT, [(-hx, -hy, -hz), (hx, -hy, -hz), (hx, -hy, hz), (-hx, -hy, hz)]),
        (Face.FRONT, [(-hx, -hy, hz), (hx, -hy, hz), (hx, hy, hz), (-hx, hy, hz)]),
        (Face.BACK, [(hx, -hy, -hz), (-hx, -hy, -hz), (-hx, hy, -hz), (hx, hy, -hz)]),
        (Face.RIGHT, [(hx, -hy, hz), (hx, -hy, -hz), (hx, hy, -hz), (hx, hy, hz)]),
        (Face.LEFT, [(-hx, -hy, -hz), (-hx, -hy, hz), (-hx, hy, hz), (-hx, hy, -hz)]),
    ]


# Texture coordinates matching the vertex order of _box_faces
TEX_COORDS = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


class Renderer:
    def __init__(self) -> None:
        self._textures: Dict[int, int] = {}

    def _texture(self, surface: pygame.Surface) -> int:
        key = id(surface)
        if key not in self._textures:
            data = pygame.image.tostring(surface, "RGBA", True)
            tex = glGenTextures(1)
            glBindTexture(GL_TEXTURE_2D, tex)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
            glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, surface.get_width(), surface.get_height(),
                         0, GL_RGBA, GL_UNSIGNED_BYTE, data)
            self._textures[key] = tex
        return self._textures[key]

    def _set_material(self, material: Any) -> bool:
        """Bind a face material; returns True when a texture is in use."""
        if isinstance(material, pygame.Surface):
            glEnable(GL_TEXTURE_2D)
            glBindTexture(GL_TEXTURE_2D, self._texture(material))
            white = (GLfloat * 4)(1.0, 1.0, 1.0, 1.0)
            glMaterialfv(GL_FRONT, GL_DIFFUSE, white)
            glMaterialfv(GL_FRONT, GL_AMBIENT, white)
            return True
        glDisable(GL_TEXTURE_2D)
        r, g, b = material
        glMaterialfv(GL_FRONT, GL_DIFFUSE, (GLfloat * 4)(r, g, b, 1.0))
        glMaterialfv(GL_FRONT, GL_AMBIENT, (GLfloat * 4)(r * 0.3, g * 0.3, b * 0.3, 1.0))
        return False

    def draw_element(self, element: Element) -> None:
        hx, hy, hz = (s * ELEMENT_FILL / 2.0 for s in element.size)
        for face, vertices in _box_faces(hx, hy, hz):
            textured = self._set_material(element.material(face))
            glBegin(GL_QUADS)
            glNormal3f(*FACE_NORMAL[face])
            for uv, vertex in zip(TEX_COORDS, vertices):
                if textured:
                    glTexCoord2f(*uv)
                glVertex3f(*vertex)
            glEnd()
        glDisable(GL_TEXTURE_2D)

    def draw_object(self, obj, placement, animator: TweenAnimator) -> None:
        glPushMatrix()
        glTranslatef(*placement.position)
        glScalef(placement.scale, placement.scale, placement.scale)
        if isinstance(obj, SingleAxisLattice):
            glMultMatrixf(_gl_matrix(obj.body.orientation))
        for element in obj.elements:
            glPushMatrix()
            tween = animator.tween_for(element)
            if tween is not None:
                self._apply_tween(tween)
            if element.owner is not None:
                self._apply_node(element.owner)
            glTranslatef(*element.position)
            self.draw_element(element)
            glPopMatrix()
        glPopMatrix()

    @staticmethod
    def _apply_node(node: Node) -> None:
        glTranslatef(*node.offset)
        glMultMatrixf(_gl_matrix(node.orientation))
        glScalef(node.scale, node.scale, node.scale)

    @staticmethod
    def _apply_tween(tween: Tween) -> None:
        scale = tween.scale
        glTranslatef(*tween.offset)
        glRotatef(np.degrees(tween.angle), *AXIS[tween.direction])
        glScalef(scale, scale, scale)
        glTranslatef(*(-tween.offset))


# -----------------------------
# App / Main Loop
# -----------------------------
class App:
    def __init__(self, assets: Optional[str] = None) -> None:
        pygame.init()
        self.window_w = int(config.WIDTH * config.WINDOW_SCALE)
        self.window_h = int(config.HEIGHT * config.WINDOW_SCALE)
        pygame.display.set_mode((self.window_w, self.window_h), DOUBLEBUF | OPENGL)
        pygame.display.set_caption("CubeOS")
        self.clock = pygame.time.Clock()

        self.animator = TweenAnimator()
        self.scene = HomeScene(self.animator)
        self.scene.apply_textures(ImageLibrary(assets) if assets else ColorLibrary())
        self.renderer = Renderer()

        self.drag_start: Optional[Tuple[float, float]] = None
        self._setup_gl()

    def _setup_gl(self) -> None:
        glViewport(0, 0, self.window_w, self.window_h)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(config.CAMERA_FOV, self.window_w / float(self.window_h), 0.1, 100.0)
        glMatrixMode(GL_MODELVIEW)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_CULL_FACE)
        glCullFace(GL_BACK)
        glClearColor(*config.CLEAR_COLOR)
        glEnable(GL_MULTISAMPLE)
        glEnable(GL_NORMALIZE)

        # Light (omni light above and in front of the scene)
        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glLightfv(GL_LIGHT0, GL_AMBIENT, (GLfloat * 4)(0.3, 0.3, 0.3, 1.0))
        glLightfv(GL_LIGHT0, GL_DIFFUSE, (GLfloat * 4)(0.8, 0.8, 0.8, 1.0))
        glLightfv(GL_LIGHT0, GL_POSITION, (GLfloat * 4)(0.0, 15.0, 15.0, 1.0))
        glDisable(GL_COLOR_MATERIAL)  # we'll set colors directly

    def _to_points(self, pos) -> Tuple[float, float]:
        return pos[0] / config.WINDOW_SCALE, pos[1] / config.WINDOW_SCALE

    def run(self) -> None:
        running = True
        try:
            while running:
                dt = self.clock.tick(int(config.FPS)) / 1000.0
                for event in pygame.event.get():
                    if event.type == QUIT:
                        running = False
                    elif event.type == KEYDOWN and event.key in (K_ESCAPE, K_q):
                        running = False
                    elif event.type == MOUSEBUTTONDOWN and event.button == 1:
                        self.drag_start = self._to_points(event.pos)
                    elif event.type == MOUSEMOTION and self.drag_start is not None:
                        self.scene.router.on_changed(self.drag_start, self._to_points(event.pos))
                    elif event.type == MOUSEBUTTONUP and event.button == 1:
                        self.drag_start = None
                        self.scene.router.on_ended()

                self.animator.update(dt)
                self._render()
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        glDisable(GL_LIGHTING)
        glDisable(GL_LIGHT0)
        glDisable(GL_DEPTH_TEST)
        pygame.quit()

    def _apply_camera(self) -> None:
        glLoadIdentity()
        x, y, z = config.CAMERA_POS
        gluLookAt(x, y, z, x, y, 0.0, 0, 1, 0)

    def _render(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()
        for zone, obj in self.scene.objects.items():
            self.renderer.draw_object(obj, self.scene.placements[zone], self.animator)
        pygame.display.flip()
