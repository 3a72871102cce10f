"""
GestureRouter: turns raw screen drags into start_drag / rotate / settle calls.

One drag may drive at most one move. When the pointer leaves the zone of the
object it is turning, that object is settled on the spot and the rest of the
drag is ignored.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from .geometry import Boundary
from .model import Rotatable

logger = logging.getLogger(__name__)


class RouterState(Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    SUPPRESSED = "suppressed"


class GestureRouter:
    """Maps screen zones to lattice objects and sequences their moves.

    ``zones`` is an ordered list of ``(Boundary, Rotatable)`` pairs; the first
    boundary containing a point wins. Points outside ``view`` never resolve.
    """

    def __init__(self, zones: Sequence[Tuple[Boundary, Rotatable]], view: Boundary) -> None:
        self.zones = list(zones)
        self.view = view
        self.current: Optional[Rotatable] = None
        self.suppressed = False

    @property
    def state(self) -> RouterState:
        if self.suppressed:
            return RouterState.SUPPRESSED
        if self.current is not None:
            return RouterState.TRACKING
        return RouterState.IDLE

    def which_zone(self, pos: Sequence[float]) -> Tuple[Optional[Rotatable], Boundary]:
        if not self.view.contains(pos):
            return None, self.view
        for bound, target in self.zones:
            if bound.contains(pos):
                return target, bound
        return None, self.view

    def on_changed(self, start_location: Sequence[float], location: Sequence[float]) -> None:
        """Handle a drag update; both points are in screen coordinates."""
        if self.suppressed:
            return
        target, bound = self.which_zone(location)

        if self.current is not None:
            if target is not self.current:
                logger.debug("drag left %s, settling early", self.current.name)
                self._abandon()
                return
        elif target is None:
            self.suppressed = True
            return
        else:
            target.start_drag(bound.to_local(start_location), bound.to_local(location))
            self.current = target

        self.current.rotate(bound.to_local(location))

    def on_ended(self) -> None:
        if self.suppressed:
            self.suppressed = False
            return
        if self.current is None:
            return
        current, self.current = self.current, None
        current.settle()

    def _abandon(self) -> None:
        current, self.current = self.current, None
        self.suppressed = True
        current.settle()
