"""Exception types raised by the composer core."""

from __future__ import annotations

import enum


class PlacementFailure(enum.Enum):
    """Why a gate could not be placed on the grid."""

    OCCUPIED_SLOT = "occupied_slot"
    INVALID_TARGET = "invalid_target"
    UNKNOWN_GATE = "unknown_gate"


class QComposerError(Exception):
    """Base class for all qcomposer errors."""


class PlacementError(QComposerError, ValueError):
    """
    A gate insertion was rejected.

    The circuit the insertion was attempted on is left untouched; callers
    inspect ``reason`` to tell the user what went wrong.
    """

    def __init__(self, reason: PlacementFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ParseError(QComposerError, ValueError):
    """Circuit text could not be turned into any meaningful circuit."""
