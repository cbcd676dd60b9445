"""Pytest configuration and shared fixtures for qcomposer tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A factory for random circuits that respect the no-overlap invariant
"""

import os
from typing import Callable, List, Sequence

import numpy as np
import pytest
import torch

from qcomposer.circuit import Circuit, GateInstance
from qcomposer.gates import GateKind


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    generator = torch.Generator(device="cpu")
    generator.manual_seed(seed)
    return generator


def _random_circuit(
    rng: np.random.Generator,
    n_qubits: int,
    n_timesteps: int,
    kinds: Sequence[GateKind],
    fill: float = 0.7,
) -> Circuit:
    gates: List[GateInstance] = []
    for t in range(n_timesteps):
        free = [int(q) for q in rng.permutation(n_qubits)]
        while free:
            q = free.pop()
            if rng.random() > fill:
                continue
            kind = kinds[int(rng.integers(len(kinds)))]
            if kind is GateKind.CONTROLLED_NOT:
                if not free:
                    continue
                gates.append(GateInstance(kind, q, t, free.pop()))
            else:
                gates.append(GateInstance(kind, q, t))
    return Circuit(n_qubits, n_timesteps, gates)


@pytest.fixture(scope="function")
def random_circuit(rng: np.random.Generator) -> Callable[..., Circuit]:
    """Factory building random valid circuits from the seeded numpy RNG.

    Usage: ``random_circuit(n_qubits, n_timesteps, kinds=None)``; ``kinds``
    defaults to the whole catalog.
    """

    def make(n_qubits: int, n_timesteps: int, kinds: Sequence[GateKind] = None) -> Circuit:
        if kinds is None:
            kinds = list(GateKind)
        return _random_circuit(rng, n_qubits, n_timesteps, list(kinds))

    return make


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch RNGs for every test."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    np.random.seed(seed)
    torch.manual_seed(seed)
