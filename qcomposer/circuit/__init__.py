"""Circuit IR for the composer grid."""

from .core import Circuit, GateInstance, ordered_gates

__all__ = ["Circuit", "GateInstance", "ordered_gates"]
