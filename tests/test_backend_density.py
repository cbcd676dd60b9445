"""Tests for reduced density matrices and Bloch angles."""

from __future__ import annotations

import math

import pytest
import torch

from qcomposer.backend import (
    apply_h,
    apply_x,
    apply_y,
    bloch_angles,
    bloch_vector,
    purity,
    reduced_density_matrix,
    simulate,
    zero_state,
)
from qcomposer.circuit import Circuit
from qcomposer.diagnostics import is_hermitian
from qcomposer.gates import GateKind


def _random_state(n_qubits: int, generator: torch.Generator) -> torch.Tensor:
    real = torch.randn(2**n_qubits, dtype=torch.float64, generator=generator)
    imag = torch.randn(2**n_qubits, dtype=torch.float64, generator=generator)
    state = torch.complex(real, imag)
    return state / torch.linalg.vector_norm(state)


def _brute_force_rdm(state: torch.Tensor, n_qubits: int, qubit: int) -> torch.Tensor:
    rho = torch.zeros((2, 2), dtype=state.dtype)
    mask = 1 << qubit
    for i in range(2**n_qubits):
        for j in range(2**n_qubits):
            if (i & ~mask) != (j & ~mask):
                continue
            rho[(i >> qubit) & 1, (j >> qubit) & 1] += state[i] * state[j].conj()
    return rho


def test_ground_state() -> None:
    rho = reduced_density_matrix(zero_state(1), 1, 0)

    expected = torch.tensor([[1, 0], [0, 0]], dtype=torch.complex128)
    assert torch.allclose(rho, expected)
    assert bloch_angles(rho) == (0.0, 0.0)


@pytest.mark.parametrize("n_qubits", [1, 2, 3, 4])
def test_matches_brute_force_partial_trace(torch_rng, n_qubits: int) -> None:
    state = _random_state(n_qubits, torch_rng)
    for qubit in range(n_qubits):
        rho = reduced_density_matrix(state, n_qubits, qubit)
        expected = _brute_force_rdm(state, n_qubits, qubit)
        assert torch.allclose(rho, expected, atol=1e-12)


def test_hermitian_with_unit_trace(torch_rng) -> None:
    state = _random_state(3, torch_rng)
    for qubit in range(3):
        rho = reduced_density_matrix(state, 3, qubit)
        assert is_hermitian(rho)
        assert abs(complex(torch.trace(rho).item()) - 1.0) < 1e-12


def test_bell_pair_is_maximally_mixed() -> None:
    circuit = (
        Circuit(2, 5)
        .place(GateKind.HADAMARD, 0, 0)
        .place(GateKind.CONTROLLED_NOT, 0, 1, target=1)
    )
    state = simulate(circuit)

    for qubit in range(2):
        rho = reduced_density_matrix(state, 2, qubit)
        expected = 0.5 * torch.eye(2, dtype=torch.complex128)
        assert torch.allclose(rho, expected, atol=1e-12)
        assert bloch_angles(rho) == (0.0, 0.0)
        assert abs(purity(rho) - 0.5) < 1e-12


def test_qubit_selection_uses_lsb_order() -> None:
    # |q1 q0> = |10>
    state = apply_x(zero_state(2), 1)

    rho0 = reduced_density_matrix(state, 2, 0)
    rho1 = reduced_density_matrix(state, 2, 1)

    assert abs(complex(rho0[0, 0].item()) - 1.0) < 1e-12
    assert abs(complex(rho1[1, 1].item()) - 1.0) < 1e-12


def test_plus_state_angles() -> None:
    rho = reduced_density_matrix(apply_h(zero_state(1), 0), 1, 0)
    theta, phi = bloch_angles(rho)
    assert abs(theta - math.pi / 2) < 1e-9
    assert abs(phi) < 1e-9


def test_minus_state_angles() -> None:
    rho = reduced_density_matrix(apply_h(apply_x(zero_state(1), 0), 0), 1, 0)
    theta, phi = bloch_angles(rho)
    assert abs(theta - math.pi / 2) < 1e-9
    # atan2 may land on either side of the branch cut
    assert abs(abs(phi) - math.pi) < 1e-9


def test_one_state_points_south() -> None:
    rho = reduced_density_matrix(apply_x(zero_state(1), 0), 1, 0)
    theta, _ = bloch_angles(rho)
    assert abs(theta - math.pi) < 1e-9


def test_y_eigenstate_vector() -> None:
    # Y|+> = -i|->, still on the equator
    state = apply_y(apply_h(zero_state(1), 0), 0)
    x, y, z = bloch_vector(reduced_density_matrix(state, 1, 0))
    assert abs(x + 1.0) < 1e-9
    assert abs(y) < 1e-9
    assert abs(z) < 1e-9


def test_pure_state_has_unit_purity() -> None:
    rho = reduced_density_matrix(apply_h(zero_state(3), 2), 3, 2)
    assert abs(purity(rho) - 1.0) < 1e-12


def test_zero_qubits_gives_zero_matrix() -> None:
    rho = reduced_density_matrix(zero_state(0), 0, 0)
    assert rho.shape == (2, 2)
    assert torch.count_nonzero(rho) == 0
    assert bloch_angles(rho) == (0.0, 0.0)


def test_out_of_range_qubit_raises() -> None:
    with pytest.raises(ValueError):
        reduced_density_matrix(zero_state(2), 2, 2)


def test_wrong_state_shape_raises() -> None:
    with pytest.raises(ValueError):
        reduced_density_matrix(zero_state(2), 3, 0)


def test_bloch_vector_shape_check() -> None:
    with pytest.raises(ValueError):
        bloch_vector(torch.zeros((3, 3), dtype=torch.complex128))
