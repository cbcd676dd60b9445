"""Sanity checks for state vectors and density matrices."""

from __future__ import annotations

import torch


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a state vector.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch
        element.

    Raises
    ------
    ValueError
        If state has fewer than 1 dimension.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-6,
) -> None:
    """
    Assert that a state vector has norm ~1 within a tolerance.

    Raises
    ------
    ValueError
        If the state is not normalized within the tolerance.
    """
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        raise ValueError("State norm contains non-finite values.")

    if not torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {norms.detach().cpu().tolist()}"
        )


def is_hermitian(
    mat: torch.Tensor,
    atol: float = 1e-9,
) -> bool:
    """Check whether a square matrix equals its conjugate transpose."""
    if mat.dim() < 2 or mat.shape[-1] != mat.shape[-2]:
        return False

    diff = mat - mat.conj().transpose(-2, -1)
    max_dev = diff.abs().max()
    if not torch.isfinite(max_dev):
        return False

    return bool(max_dev <= atol)


def assert_hermitian(
    mat: torch.Tensor,
    atol: float = 1e-9,
) -> None:
    """
    Assert that a matrix is Hermitian.

    Raises
    ------
    ValueError
        If the matrix is not Hermitian within the tolerance.
    """
    if not is_hermitian(mat, atol=atol):
        raise ValueError(
            f"Matrix is not Hermitian within tolerance {atol}."
        )
