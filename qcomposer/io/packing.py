"""Timestep inference for imported circuit text.

Circuit text only records the order of instructions, not the timestep each
gate sits in. :class:`LanePacker` rebuilds a grid layout greedily: every
qubit lane keeps a "next free" timestep, a single-qubit gate takes its
lane's next free slot, and a two-qubit gate takes the later of its two
lanes' slots and then advances both lanes past it. A gate on one lane never
waits for an unrelated lane, and two gates can never land on the same lane
at the same timestep.
"""

from __future__ import annotations

from typing import List, Tuple


class LanePacker:
    """
    Per-qubit next-free-timestep counters.

    Parameters
    ----------
    n_qubits:
        Number of lanes; all counters start at zero.
    """

    def __init__(self, n_qubits: int) -> None:
        if n_qubits < 0:
            raise ValueError(f"n_qubits must be >= 0, got {n_qubits}")
        self._next_free: List[int] = [0] * n_qubits

    @property
    def n_qubits(self) -> int:
        return len(self._next_free)

    def next_free(self, qubit: int) -> int:
        """Return the first timestep not yet used on ``qubit``."""
        return self._next_free[qubit]

    def place_single(self, qubit: int) -> int:
        """Reserve the next free slot on ``qubit`` and return its timestep."""
        timestep = self._next_free[qubit]
        self._next_free[qubit] = timestep + 1
        return timestep

    def place_pair(self, control: int, target: int) -> int:
        """
        Reserve one timestep shared by two lanes and return it.

        The slot is the later of the two lanes' next free timesteps; both
        lanes continue right after it.
        """
        if control == target:
            raise ValueError("A two-qubit gate needs two distinct lanes.")
        timestep = max(self._next_free[control], self._next_free[target])
        self._next_free[control] = timestep + 1
        self._next_free[target] = timestep + 1
        return timestep

    def horizon(self) -> int:
        """Return the largest next free timestep over all lanes (0 when empty)."""
        return max(self._next_free, default=0)

    def snapshot(self) -> Tuple[int, ...]:
        """Return the counters as an immutable tuple, lane 0 first."""
        return tuple(self._next_free)

    def display_width(self, prior_timesteps: int = 0, minimum: int = 0) -> int:
        """Grid width covering every placed gate, the prior width and ``minimum``."""
        return max(self.horizon(), prior_timesteps, minimum)


__all__ = ["LanePacker"]
