"""
Eased playback of settle corrections for on-screen hosts.

The lattice state is committed at once; a Tween only remembers how far the
display still lags behind it and shrinks that lag to zero over its duration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .geometry import Direction
from .model import Animator, Element


@dataclass
class Tween:
    members: Tuple[Element, ...]
    direction: Direction
    offset: np.ndarray
    residual: float     # rotation still to be eased out, radians
    scale_from: float
    duration: float
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)

    @property
    def done(self) -> bool:
        return self.progress >= 1.0

    @property
    def angle(self) -> float:
        """Extra rotation to draw the members with right now."""
        return self.residual * (1.0 - self.progress)

    @property
    def scale(self) -> float:
        return self.scale_from + (1.0 - self.scale_from) * self.progress


class TweenAnimator(Animator):
    """Commits transforms at once and replays timed rotations over time."""

    def __init__(self) -> None:
        self.tweens: List[Tween] = []
        self._by_element: Dict[int, Tween] = {}

    def rotate(self, node, direction, radians, duration=0.0, members=()):
        scale_from = node.scale
        super().rotate(node, direction, radians, duration, members)
        if duration > 0:
            tween = Tween(tuple(members), direction, node.offset.copy(), -radians, scale_from, duration)
            self.tweens.append(tween)
            for element in tween.members:
                self._by_element[id(element)] = tween

    def update(self, dt: float) -> None:
        for tween in self.tweens:
            tween.elapsed += dt
        for tween in [t for t in self.tweens if t.done]:
            self.tweens.remove(tween)
            for element in tween.members:
                if self._by_element.get(id(element)) is tween:
                    del self._by_element[id(element)]

    def tween_for(self, element: Element) -> Optional[Tween]:
        return self._by_element.get(id(element))
