"""Single-qubit reduced density matrices and Bloch coordinates.

The reduced state of one qubit is the partial trace of |ψ⟩⟨ψ| over all
other qubits. For a normalised joint state the result is Hermitian with unit
trace, so no renormalisation is applied.

Bloch angles are extracted from the matrix as a direction only. When the
qubit is entangled with others its Bloch vector is shorter than one; the
direction is still reported and is what the composer draws.
"""

from __future__ import annotations

import math
from typing import Tuple

import torch

from qcomposer.config import BLOCH_EPSILON


def reduced_density_matrix(
    state: torch.Tensor,
    n_qubits: int,
    qubit: int,
) -> torch.Tensor:
    """
    Compute the 2×2 reduced density matrix of ``qubit``.

    For every pair of basis indices (i, j) that agree on all bits except
    ``qubit``, ``a_i * conj(a_j)`` is accumulated into
    ``rho[bit_i, bit_j]``.

    Parameters
    ----------
    state:
        Statevector tensor of shape (2**n_qubits,).
    n_qubits:
        Total number of qubits. Zero yields the all-zero matrix.
    qubit:
        Index of the qubit to keep (0-indexed, 0 = LSB).

    Returns
    -------
    torch.Tensor
        Complex tensor of shape (2, 2).
    """
    if n_qubits == 0:
        return torch.zeros((2, 2), dtype=state.dtype, device=state.device)

    if state.shape != (2**n_qubits,):
        raise ValueError(
            f"state must have shape (2**n_qubits,), got {tuple(state.shape)}"
        )
    if qubit < 0 or qubit >= n_qubits:
        raise ValueError(f"qubit index {qubit} out of range [0, {n_qubits})")

    # Put the kept qubit on its own axis: (high, bit, low), then
    # rho[b, b'] = sum_{high, low} psi[high, b, low] * conj(psi[high, b', low]).
    high = 2 ** (n_qubits - 1 - qubit)
    low = 2**qubit
    psi = state.reshape(high, 2, low)
    return torch.einsum("hal,hbl->ab", psi, psi.conj())


def bloch_vector(rho: torch.Tensor) -> Tuple[float, float, float]:
    """
    Bloch components ``(x, y, z)`` of a single-qubit density matrix.

        x = Re ρ01 + Re ρ10
        y = Im ρ01 − Im ρ10
        z = Re ρ00 − Re ρ11
    """
    if rho.shape != (2, 2):
        raise ValueError(f"rho must have shape (2, 2), got {tuple(rho.shape)}")

    r01 = complex(rho[0, 1].item())
    r10 = complex(rho[1, 0].item())
    x = r01.real + r10.real
    y = r01.imag - r10.imag
    z = complex(rho[0, 0].item()).real - complex(rho[1, 1].item()).real
    return (float(x), float(y), float(z))


def bloch_angles(rho: torch.Tensor) -> Tuple[float, float]:
    """
    Polar and azimuthal Bloch angles ``(theta, phi)`` of ``rho``.

    A vector shorter than ``BLOCH_EPSILON`` has no direction and maps to
    ``(0.0, 0.0)``.
    """
    x, y, z = bloch_vector(rho)
    r = math.sqrt(x * x + y * y + z * z)
    if r < BLOCH_EPSILON:
        return (0.0, 0.0)

    cos_theta = max(-1.0, min(1.0, z / r))
    return (math.acos(cos_theta), math.atan2(y, x))


def purity(rho: torch.Tensor) -> float:
    """Return Tr(ρ²); 1 for a pure qubit, 1/2 for a maximally mixed one."""
    return float(torch.trace(rho @ rho).real.item())


__all__ = [
    "reduced_density_matrix",
    "bloch_vector",
    "bloch_angles",
    "purity",
]
