"""Derived views pushed to the chart, matrix and Bloch-sphere widgets.

Everything here is recomputed from scratch for each circuit; at five qubits
a full simulation is only 32 amplitudes.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, List, Optional, Tuple

import torch

from qcomposer.backend import (
    bloch_angles,
    probabilities,
    purity,
    reduced_density_matrix,
    simulate,
)
from qcomposer.circuit import Circuit


@dataclass(frozen=True)
class VisualizationFeed:
    """
    Snapshot of a circuit's simulated state.

    Attributes
    ----------
    probabilities:
        ``(basis label, probability)`` for every basis state, index order.
    density_matrix:
        2×2 complex tensor for ``selected_qubit``.
    bloch_angles:
        ``(theta, phi)`` of ``selected_qubit``.
    selected_qubit:
        Qubit the density matrix and angles describe.
    state:
        The full state vector the rest was derived from.
    """

    probabilities: List[Tuple[str, float]]
    density_matrix: torch.Tensor
    bloch_angles: Tuple[float, float]
    selected_qubit: int
    state: torch.Tensor

    @property
    def purity(self) -> float:
        return purity(self.density_matrix)


def build_feed(circuit: Circuit, qubit: Optional[int] = None) -> VisualizationFeed:
    """
    Simulate ``circuit`` and derive every view for ``qubit``.

    A missing or out-of-range selection falls back to qubit 0.
    """
    if qubit is None or qubit < 0 or qubit >= circuit.n_qubits:
        qubit = 0

    state = simulate(circuit)
    rho = reduced_density_matrix(state, circuit.n_qubits, qubit)
    return VisualizationFeed(
        probabilities=probabilities(state, circuit.n_qubits),
        density_matrix=rho,
        bloch_angles=bloch_angles(rho),
        selected_qubit=qubit,
        state=state,
    )


def print_feed(feed: VisualizationFeed, file: Optional[IO[str]] = None) -> None:
    """
    Pretty-print a feed to stdout or a file.

    This is a utility function for human-readable output, so it uses print()
    intentionally.
    """
    if file is None:
        file = sys.stdout

    print("State Probabilities", file=file)
    print("=" * 50, file=file)
    for label, prob in feed.probabilities:
        bar = "#" * int(round(prob * 40))
        print(f"|{label}⟩ {prob:6.3f} {bar}", file=file)

    print(f"\nDensity Matrix (qubit {feed.selected_qubit})", file=file)
    for row in feed.density_matrix.tolist():
        cells = "  ".join(f"{c.real:+.3f}{c.imag:+.3f}i" for c in row)
        print(f"  {cells}", file=file)

    theta, phi = feed.bloch_angles
    print(f"\nBloch angles: theta={theta:.4f} phi={phi:.4f}", file=file)
    print(f"Purity: {feed.purity:.4f}", file=file)


__all__ = ["VisualizationFeed", "build_feed", "print_feed"]
