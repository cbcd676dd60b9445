"""Debug mode for the simulator.

With debug mode on, :func:`check_state` verifies the norm of the state
vector after every gate the backend applies, so a broken gate formula fails
at the gate that broke it instead of showing up later as probabilities that
do not sum to one. It starts from ``QCOMPOSER_DEBUG`` and can be toggled at
runtime.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import torch

from qcomposer.config import DEBUG_ENV_VAR, env_flag

from .core import assert_normalized

_debug_enabled: bool = env_flag(DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return whether per-gate state checks are on."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = bool(enabled)


def check_state(state: torch.Tensor, atol: float = 1e-6) -> torch.Tensor:
    """
    Return ``state`` unchanged, asserting unit norm first when debug mode is on.

    Raises
    ------
    ValueError
        In debug mode, if the state is not normalized within ``atol``.
    """
    if _debug_enabled:
        assert_normalized(state, atol=atol)
    return state


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Turn the per-gate checks on or off inside a block.

    Example
    -------
    >>> with debug_context(True):
    ...     state = simulate(circuit)
    """
    prev = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(prev)
