"""Diagnostics and debugging utilities for qcomposer."""

from .core import (
    assert_hermitian,
    assert_normalized,
    is_hermitian,
    state_norm,
)
from .debug_mode import (
    check_state,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "assert_normalized",
    "is_hermitian",
    "assert_hermitian",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "check_state",
]
