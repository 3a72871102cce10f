"""Slice-rotation core for a twisty-puzzle home screen."""
from .cube import AxisRotatingLattice
from .errors import InvariantError, LatticeError, ProtocolViolation
from .geometry import Boundary, Direction, Face, Point2D, RIGHT_ANGLE
from .model import Animator, Element, MoveState, PivotAxis, Rotatable, SettleResult
from .prism import SingleAxisLattice
from .router import GestureRouter, RouterState

__version__ = "1.0.0"

__all__ = [
    "Animator",
    "AxisRotatingLattice",
    "Boundary",
    "Direction",
    "Element",
    "Face",
    "GestureRouter",
    "InvariantError",
    "LatticeError",
    "MoveState",
    "PivotAxis",
    "Point2D",
    "ProtocolViolation",
    "RIGHT_ANGLE",
    "Rotatable",
    "RouterState",
    "SettleResult",
    "SingleAxisLattice",
]
