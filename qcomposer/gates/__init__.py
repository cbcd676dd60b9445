"""Gate catalog."""

from .catalog import (
    GATES,
    GateKind,
    GateSpec,
    lookup_by_label,
    lookup_by_name,
    resolve_gate,
    spec_for,
)

__all__ = [
    "GATES",
    "GateKind",
    "GateSpec",
    "spec_for",
    "lookup_by_name",
    "lookup_by_label",
    "resolve_gate",
]
