"""
Limits, defaults and environment settings for the composer.
"""

from __future__ import annotations

import logging
import os

import torch

# The state vector has 2**n amplitudes; the composer stays small.
MAX_QUBITS = 5

# A fresh composer starts with this grid
DEFAULT_QUBITS = 3
DEFAULT_TIMESTEPS = 25

# Imported circuits are never displayed narrower than this
MIN_DISPLAY_TIMESTEPS = 10

# Below this Bloch radius the direction is undefined
BLOCH_EPSILON = 1e-9

DEFAULT_DTYPE = torch.complex128

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

LOG_LEVEL_ENV_VAR = "QCOMPOSER_LOG_LEVEL"
DEBUG_ENV_VAR = "QCOMPOSER_DEBUG"


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch such as ``QCOMPOSER_DEBUG=1`` from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def initial_log_level() -> int:
    """Return the level named by ``QCOMPOSER_LOG_LEVEL``, WARNING if unset or unknown."""
    raw = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.WARNING
