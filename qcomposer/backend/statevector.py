"""Statevector backend for the composer's gate set.

Gates are applied with bit arithmetic on basis indices rather than by
building matrices: every gate of the catalog is either a permutation of
amplitudes (X, CNOT), a sign flip (Z), or a pairwise mix of the two
amplitudes that differ only in the target bit (H, Y). Each function takes a
state tensor and returns a new one; inputs are never written to.

Convention: qubit 0 is the least significant bit of the basis index, so the
amplitude at index ``i`` belongs to the basis state whose qubit ``q`` value
is ``(i >> q) & 1``.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import torch

from qcomposer.circuit import Circuit, GateInstance, ordered_gates
from qcomposer.config import DEFAULT_DTYPE
from qcomposer.diagnostics import check_state
from qcomposer.gates import GateKind
from qcomposer.logging import get_logger

logger = get_logger(__name__)

_SQRT2_INV = 1.0 / math.sqrt(2.0)


def zero_state(
    n_qubits: int,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    Create the all-zero basis state |0...0⟩.

    Args:
        n_qubits: Number of qubits. Zero gives the trivial one-amplitude
            state ``[1]``.
        dtype: Complex dtype. Defaults to ``DEFAULT_DTYPE`` (complex128).
        device: Torch device. Defaults to CPU.

    Returns:
        A complex tensor of shape (2**n_qubits,).

    Raises:
        ValueError: If n_qubits is negative.
    """
    if n_qubits < 0:
        raise ValueError(f"n_qubits must be >= 0, got {n_qubits}")
    if dtype is None:
        dtype = DEFAULT_DTYPE
    if device is None:
        device = torch.device("cpu")

    state = torch.zeros(2**n_qubits, dtype=dtype, device=device)
    state[0] = 1.0 + 0.0j
    return state


def _n_qubits_of(state: torch.Tensor) -> int:
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    if state.dim() != 1:
        raise ValueError(f"state must be 1-D, got shape {tuple(state.shape)}")
    dim = state.shape[0]
    n_qubits = dim.bit_length() - 1
    if 2**n_qubits != dim:
        raise ValueError(f"state dimension {dim} is not a power of 2.")
    return n_qubits


def _check_qubit(qubit: int, n_qubits: int, what: str = "qubit") -> None:
    if qubit < 0 or qubit >= n_qubits:
        raise ValueError(f"{what} index {qubit} out of range [0, {n_qubits})")


def _indices(state: torch.Tensor) -> torch.Tensor:
    return torch.arange(state.shape[0], device=state.device)


def apply_x(state: torch.Tensor, qubit: int) -> torch.Tensor:
    """Pauli-X: swap each amplitude pair that differs only in ``qubit``."""
    _check_qubit(qubit, _n_qubits_of(state))
    idx = _indices(state)
    return state[idx ^ (1 << qubit)]


def apply_y(state: torch.Tensor, qubit: int) -> torch.Tensor:
    """Pauli-Y: ``a0 ← -i·a1`` and ``a1 ← i·a0`` on each pair."""
    _check_qubit(qubit, _n_qubits_of(state))
    idx = _indices(state)
    partner = state[idx ^ (1 << qubit)]
    bit_set = ((idx >> qubit) & 1).bool()
    return torch.where(bit_set, 1j * partner, -1j * partner)


def apply_z(state: torch.Tensor, qubit: int) -> torch.Tensor:
    """Pauli-Z: negate the amplitudes whose ``qubit`` bit is 1."""
    _check_qubit(qubit, _n_qubits_of(state))
    idx = _indices(state)
    bit_set = ((idx >> qubit) & 1).bool()
    return torch.where(bit_set, -state, state)


def apply_h(state: torch.Tensor, qubit: int) -> torch.Tensor:
    """
    Hadamard on ``qubit``.

    For each pair (i, j = i | 2**qubit) the new amplitudes are
    ``(a_i + a_j)/√2`` at i and ``(a_i - a_j)/√2`` at j. Both are read from
    the untouched input, so no half-updated value leaks into the pair.
    """
    _check_qubit(qubit, _n_qubits_of(state))
    idx = _indices(state)
    partner = state[idx ^ (1 << qubit)]
    bit_set = ((idx >> qubit) & 1).bool()
    mixed = torch.where(bit_set, partner - state, state + partner)
    return mixed * _SQRT2_INV


def apply_cnot(state: torch.Tensor, control: int, target: int) -> torch.Tensor:
    """Controlled-NOT: flip ``target`` on every basis state whose ``control`` bit is 1."""
    n_qubits = _n_qubits_of(state)
    _check_qubit(control, n_qubits, "control")
    _check_qubit(target, n_qubits, "target")
    if control == target:
        raise ValueError(
            f"control and target must be distinct, got {control} and {target}"
        )

    idx = _indices(state)
    control_set = ((idx >> control) & 1).bool()
    source = torch.where(control_set, idx ^ (1 << target), idx)
    return state[source]


def _identity(state: torch.Tensor, qubit: int) -> torch.Tensor:
    return state


# S and T are accepted on the grid and in text but carry no phase here;
# Measure is a marker and never collapses the state.
_SINGLE_QUBIT_ACTIONS: Dict[GateKind, Callable[[torch.Tensor, int], torch.Tensor]] = {
    GateKind.HADAMARD: apply_h,
    GateKind.PAULI_X: apply_x,
    GateKind.PAULI_Y: apply_y,
    GateKind.PAULI_Z: apply_z,
    GateKind.PHASE_S: _identity,
    GateKind.PHASE_T: _identity,
    GateKind.MEASURE: _identity,
}


def apply_instance(state: torch.Tensor, gate: GateInstance) -> torch.Tensor:
    """Apply one placed gate to ``state`` and return the new state."""
    if gate.kind is GateKind.CONTROLLED_NOT:
        new_state = apply_cnot(state, gate.qubit, gate.target)
    else:
        try:
            action = _SINGLE_QUBIT_ACTIONS[gate.kind]
        except KeyError:
            raise ValueError(f"Unsupported gate kind {gate.kind!r}.") from None
        new_state = action(state, gate.qubit)

    return check_state(new_state)


def run_gates(
    n_qubits: int,
    gates: Iterable[GateInstance],
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    Evolve |0...0⟩ through ``gates`` in timestep order.

    Gates sharing a timestep act on disjoint lanes, so their relative order
    does not change the result; the stable sort keeps it reproducible anyway.
    """
    state = zero_state(n_qubits, dtype=dtype, device=device)
    for gate in ordered_gates(gates):
        state = apply_instance(state, gate)
    return state


def simulate(
    circuit: Circuit,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    Simulate ``circuit`` from the all-zero state.

    Returns
    -------
    state:
        Complex tensor of shape (2**n_qubits,).
    """
    state = run_gates(circuit.n_qubits, circuit.gates, dtype=dtype, device=device)
    logger.debug(
        "Simulated %d gates on %d qubits", len(circuit), circuit.n_qubits
    )
    return state


def measure_probs(state: torch.Tensor) -> torch.Tensor:
    """
    Born-rule probabilities ``|a_i|²`` for every basis state.

    The result is not renormalised: it sums to one exactly when the state
    is normalised.
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    return (state.abs() ** 2).contiguous()


def basis_label(index: int, n_qubits: int) -> str:
    """Bit string of ``index`` padded to ``n_qubits``, highest qubit first."""
    if n_qubits == 0:
        return ""
    return format(index, f"0{n_qubits}b")


def probabilities(state: torch.Tensor, n_qubits: int) -> List[Tuple[str, float]]:
    """Return ``(basis label, probability)`` for every basis state in index order."""
    probs = measure_probs(state).tolist()
    return [(basis_label(i, n_qubits), float(p)) for i, p in enumerate(probs)]


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
]
