"""Tests for diagnostics helpers and debug mode."""

from __future__ import annotations

import pytest
import torch

from qcomposer.backend import apply_instance, zero_state
from qcomposer.circuit import GateInstance
from qcomposer.config import env_flag
from qcomposer.diagnostics import (
    assert_hermitian,
    assert_normalized,
    check_state,
    debug_context,
    is_debug_enabled,
    is_hermitian,
    set_debug_enabled,
    state_norm,
)
from qcomposer.gates import GateKind


def test_state_norm() -> None:
    state = torch.tensor([3.0, 4.0j], dtype=torch.complex128)
    assert abs(float(state_norm(state)) - 5.0) < 1e-12


def test_state_norm_rejects_scalars() -> None:
    with pytest.raises(ValueError):
        state_norm(torch.tensor(1.0 + 0j))


def test_assert_normalized() -> None:
    assert_normalized(zero_state(3))
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(torch.tensor([1.0, 1.0], dtype=torch.complex128))


def test_assert_normalized_rejects_nan() -> None:
    with pytest.raises(ValueError, match="non-finite"):
        assert_normalized(torch.tensor([float("nan"), 0.0], dtype=torch.complex128))


def test_hermitian_checks() -> None:
    rho = torch.tensor([[0.5, 0.5j], [-0.5j, 0.5]], dtype=torch.complex128)
    assert is_hermitian(rho)
    assert_hermitian(rho)

    skew = torch.tensor([[0.0, 1.0], [0.0, 0.0]], dtype=torch.complex128)
    assert not is_hermitian(skew)
    assert not is_hermitian(torch.zeros(3, dtype=torch.complex128))
    with pytest.raises(ValueError):
        assert_hermitian(skew)


def test_debug_context_restores_previous_value() -> None:
    previous = is_debug_enabled()
    with debug_context(True):
        assert is_debug_enabled()
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    assert is_debug_enabled() == previous


def test_set_debug_enabled() -> None:
    previous = is_debug_enabled()
    try:
        set_debug_enabled(True)
        assert is_debug_enabled()
        set_debug_enabled(False)
        assert not is_debug_enabled()
    finally:
        set_debug_enabled(previous)


def test_debug_mode_catches_unnormalized_input() -> None:
    state = torch.tensor([2.0, 0.0], dtype=torch.complex128)
    gate = GateInstance(GateKind.PAULI_X, 0, 0)

    with debug_context(False):
        apply_instance(state, gate)
    with debug_context(True):
        with pytest.raises(ValueError):
            apply_instance(state, gate)


def test_check_state_only_checks_in_debug_mode() -> None:
    state = torch.tensor([1.0, 1.0], dtype=torch.complex128)

    with debug_context(False):
        assert check_state(state) is state
    with debug_context(True):
        assert check_state(zero_state(2)).shape == (4,)
        with pytest.raises(ValueError, match="not normalized"):
            check_state(state)


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("true", True), (" ON ", True), ("0", False), ("no", False)],
)
def test_env_flag(monkeypatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("QCOMPOSER_TEST_FLAG", raw)
    assert env_flag("QCOMPOSER_TEST_FLAG") is expected


def test_env_flag_default(monkeypatch) -> None:
    monkeypatch.delenv("QCOMPOSER_TEST_FLAG", raising=False)
    assert env_flag("QCOMPOSER_TEST_FLAG") is False
    assert env_flag("QCOMPOSER_TEST_FLAG", default=True) is True
