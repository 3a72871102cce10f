"""Exceptions raised by the lattice objects."""


class LatticeError(Exception):
    """Base class for errors raised by lattice objects."""


class ProtocolViolation(LatticeError):
    """A call arrived in the wrong move state, e.g. rotate() with no active move.

    This always points at a bug in the caller, so it is raised rather than
    ignored.
    """


class InvariantError(LatticeError):
    """Internal consistency check failed (bad snap angle, element off the grid)."""
