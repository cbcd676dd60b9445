"""Simulation backend: state vectors and single-qubit reductions."""

from .density import bloch_angles, bloch_vector, purity, reduced_density_matrix
from .statevector import (
    apply_cnot,
    apply_h,
    apply_instance,
    apply_x,
    apply_y,
    apply_z,
    basis_label,
    measure_probs,
    probabilities,
    run_gates,
    simulate,
    zero_state,
)

__all__ = [
    "zero_state",
    "apply_x",
    "apply_y",
    "apply_z",
    "apply_h",
    "apply_cnot",
    "apply_instance",
    "run_gates",
    "simulate",
    "measure_probs",
    "basis_label",
    "probabilities",
    "reduced_density_matrix",
    "bloch_vector",
    "bloch_angles",
    "purity",
]
