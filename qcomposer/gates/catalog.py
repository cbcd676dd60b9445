"""The fixed gate library offered by the composer.

Each :class:`GateKind` has exactly one :class:`GateSpec` entry carrying the
name used in QASM/Qiskit mnemonics, the short label drawn on the grid, and
the number of qubits the gate occupies. Lookups are case-insensitive and
return ``None`` for unknown tokens instead of raising, so that the text
importers can skip lines they do not understand.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class GateKind(enum.Enum):
    """Supported gate kinds."""

    HADAMARD = "H"
    PAULI_X = "X"
    PAULI_Y = "Y"
    PAULI_Z = "Z"
    PHASE_S = "S"
    PHASE_T = "T"
    CONTROLLED_NOT = "CNOT"
    MEASURE = "Measure"

    @property
    def spec(self) -> "GateSpec":
        return spec_for(self)

    @property
    def arity(self) -> int:
        return spec_for(self).arity


@dataclass(frozen=True)
class GateSpec:
    """
    Static description of a gate kind.

    Attributes
    ----------
    kind:
        The gate kind this entry describes.
    name:
        Canonical name, e.g. "H", "CNOT", "Measure".
    label:
        Short grid label, e.g. "H", "CX", "M".
    description:
        Human readable tooltip text.
    arity:
        Number of qubit lanes the gate occupies (1 or 2).
    """

    kind: GateKind
    name: str
    label: str
    description: str
    arity: int


# Palette order
GATES: Tuple[GateSpec, ...] = (
    GateSpec(GateKind.HADAMARD, "H", "H", "Hadamard Gate", 1),
    GateSpec(GateKind.PAULI_X, "X", "X", "Pauli-X Gate (NOT)", 1),
    GateSpec(GateKind.PAULI_Y, "Y", "Y", "Pauli-Y Gate", 1),
    GateSpec(GateKind.PAULI_Z, "Z", "Z", "Pauli-Z Gate", 1),
    GateSpec(GateKind.PHASE_S, "S", "S", "S Gate (Phase)", 1),
    GateSpec(GateKind.PHASE_T, "T", "T", "T Gate (π/8)", 1),
    GateSpec(GateKind.CONTROLLED_NOT, "CNOT", "CX", "Controlled-NOT Gate", 2),
    GateSpec(GateKind.MEASURE, "Measure", "M", "Measurement", 1),
)

_BY_KIND: Dict[GateKind, GateSpec] = {g.kind: g for g in GATES}
_BY_NAME: Dict[str, GateSpec] = {g.name.lower(): g for g in GATES}
_BY_LABEL: Dict[str, GateSpec] = {g.label.lower(): g for g in GATES}


def spec_for(kind: GateKind) -> GateSpec:
    """Return the catalog entry for ``kind``."""
    return _BY_KIND[kind]


def lookup_by_name(token: str) -> Optional[GateSpec]:
    """Find a gate by its canonical name, ignoring case."""
    return _BY_NAME.get(token.strip().lower())


def lookup_by_label(token: str) -> Optional[GateSpec]:
    """Find a gate by its grid label, ignoring case."""
    return _BY_LABEL.get(token.strip().lower())


def resolve_gate(token: str) -> Optional[GateSpec]:
    """
    Resolve a mnemonic to a gate, trying the name first and then the label.

    ``"h"``, ``"cnot"``, ``"cx"`` and ``"m"`` all resolve; anything else
    yields ``None``.
    """
    return lookup_by_name(token) or lookup_by_label(token)


__all__ = [
    "GateKind",
    "GateSpec",
    "GATES",
    "spec_for",
    "lookup_by_name",
    "lookup_by_label",
    "resolve_gate",
]
