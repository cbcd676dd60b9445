"""Core circuit IR: placed gate instances on a qubit × timestep grid."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

from qcomposer.config import DEFAULT_QUBITS, DEFAULT_TIMESTEPS, MAX_QUBITS
from qcomposer.errors import PlacementError, PlacementFailure
from qcomposer.gates import GateKind, spec_for


def _new_gate_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class GateInstance:
    """
    A gate kind placed at one timestep on one qubit lane.

    For two-qubit gates ``qubit`` is the control and ``target`` the target
    lane; single-qubit gates leave ``target`` as None. The ``id`` only
    exists so that an editor can point at an instance for removal; it plays
    no role in simulation and is ignored by equality.
    """

    kind: GateKind
    qubit: int
    timestep: int
    target: Optional[int] = None
    id: str = field(default_factory=_new_gate_id, compare=False)

    @property
    def arity(self) -> int:
        return spec_for(self.kind).arity

    @property
    def lanes(self) -> Tuple[int, ...]:
        """Qubit lanes this instance occupies at its timestep."""
        if self.target is None:
            return (self.qubit,)
        return (self.qubit, self.target)

    def with_id(self, gate_id: Optional[str] = None) -> "GateInstance":
        """Return a copy with a fresh (or given) identifier."""
        return replace(self, id=gate_id if gate_id is not None else _new_gate_id())


def ordered_gates(gates: Iterable[GateInstance]) -> List[GateInstance]:
    """
    Return gates in execution order.

    Sorting is by timestep only and Python's sort is stable, so gates that
    share a timestep keep their insertion order.
    """
    return sorted(gates, key=lambda g: g.timestep)


def _check_instance(gate: GateInstance, n_qubits: int) -> None:
    """Validate a single instance against arity and register size."""
    if not isinstance(gate.kind, GateKind):
        raise PlacementError(
            PlacementFailure.UNKNOWN_GATE,
            f"Unknown gate kind {gate.kind!r}.",
        )
    if gate.timestep < 0:
        raise PlacementError(
            PlacementFailure.INVALID_TARGET,
            f"Timestep {gate.timestep} is negative.",
        )

    if gate.arity == 2:
        if gate.target is None:
            raise PlacementError(
                PlacementFailure.INVALID_TARGET,
                f"{spec_for(gate.kind).name} requires a target qubit.",
            )
        if gate.target == gate.qubit:
            raise PlacementError(
                PlacementFailure.INVALID_TARGET,
                "Control and target qubits cannot be the same.",
            )
    elif gate.target is not None:
        raise PlacementError(
            PlacementFailure.INVALID_TARGET,
            f"{spec_for(gate.kind).name} acts on a single qubit and takes no target.",
        )

    for q in gate.lanes:
        if q < 0 or q >= n_qubits:
            raise PlacementError(
                PlacementFailure.INVALID_TARGET,
                f"Qubit index {q} is out of range for this circuit "
                f"(n_qubits={n_qubits}).",
            )


class Circuit:
    """
    Immutable composer circuit.

    A circuit is a register of ``n_qubits`` lanes, an advisory display width
    ``n_timesteps`` and an unordered collection of :class:`GateInstance`.
    Every mutator returns a new circuit and leaves the receiver untouched;
    no two gates at the same timestep ever share a lane.
    """

    __slots__ = ("_n_qubits", "_n_timesteps", "_gates")

    def __init__(
        self,
        n_qubits: int = DEFAULT_QUBITS,
        n_timesteps: int = DEFAULT_TIMESTEPS,
        gates: Iterable[GateInstance] = (),
    ) -> None:
        if n_qubits <= 0:
            raise ValueError("Circuit requires n_qubits >= 1.")
        if n_qubits > MAX_QUBITS:
            raise ValueError(
                f"Circuit supports at most {MAX_QUBITS} qubits, got {n_qubits}."
            )

        gates = tuple(gates)
        occupied: Dict[Tuple[int, int], GateInstance] = {}
        for gate in gates:
            _check_instance(gate, n_qubits)
            for q in gate.lanes:
                if (gate.timestep, q) in occupied:
                    raise PlacementError(
                        PlacementFailure.OCCUPIED_SLOT,
                        f"Qubit {q} is occupied at timestep {gate.timestep}.",
                    )
                occupied[(gate.timestep, q)] = gate

        self._n_qubits = int(n_qubits)
        self._gates: Tuple[GateInstance, ...] = gates
        used = max((g.timestep + 1 for g in gates), default=0)
        self._n_timesteps = max(int(n_timesteps), used)

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def n_timesteps(self) -> int:
        """Return the advisory display width in timesteps."""
        return self._n_timesteps

    @property
    def gates(self) -> Tuple[GateInstance, ...]:
        """Return the gate instances in insertion order."""
        return self._gates

    def ordered(self) -> List[GateInstance]:
        """Return the gate instances in execution order."""
        return ordered_gates(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return (
            self._n_qubits == other._n_qubits
            and self._n_timesteps == other._n_timesteps
            and self._gates == other._gates
        )

    def __hash__(self) -> int:
        return hash((self._n_qubits, self._n_timesteps, self._gates))

    def __repr__(self) -> str:
        return (
            f"Circuit(n_qubits={self._n_qubits}, n_timesteps={self._n_timesteps}, "
            f"gates={len(self._gates)})"
        )

    def occupant(self, qubit: int, timestep: int) -> Optional[GateInstance]:
        """Return the gate holding ``qubit`` at ``timestep``, if any."""
        for gate in self._gates:
            if gate.timestep == timestep and qubit in gate.lanes:
                return gate
        return None

    def insert(self, gate: GateInstance) -> "Circuit":
        """
        Return a new circuit with ``gate`` added.

        Raises
        ------
        PlacementError
            ``UNKNOWN_GATE`` for a kind outside the catalog,
            ``INVALID_TARGET`` for a missing, out-of-range or self-targeting
            lane, ``OCCUPIED_SLOT`` when one of the lanes is already taken
            at that timestep.
        """
        _check_instance(gate, self._n_qubits)
        for q in gate.lanes:
            if self.occupant(q, gate.timestep) is not None:
                raise PlacementError(
                    PlacementFailure.OCCUPIED_SLOT,
                    f"Qubit {q} is occupied at timestep {gate.timestep}.",
                )
        return Circuit(self._n_qubits, self._n_timesteps, self._gates + (gate,))

    def place(
        self,
        kind: GateKind,
        qubit: int,
        timestep: int,
        target: Optional[int] = None,
    ) -> "Circuit":
        """Shorthand for ``insert(GateInstance(kind, qubit, timestep, target))``."""
        return self.insert(GateInstance(kind, qubit, timestep, target))

    def remove(self, gate_id: str) -> "Circuit":
        """Return a new circuit without the gate ``gate_id``; no-op if absent."""
        kept = tuple(g for g in self._gates if g.id != gate_id)
        if len(kept) == len(self._gates):
            return self
        return Circuit(self._n_qubits, self._n_timesteps, kept)

    def clear(self) -> "Circuit":
        """Return an empty circuit with the same register and width."""
        return Circuit(self._n_qubits, self._n_timesteps)

    def with_qubits(self, n_qubits: int) -> "Circuit":
        """
        Return a copy resized to ``n_qubits`` lanes.

        Shrinking drops every gate whose control or target refers to a
        removed lane. The remaining gates are a subset of a valid layout, so
        the no-overlap invariant still holds.
        """
        kept = tuple(
            g for g in self._gates if all(q < n_qubits for q in g.lanes)
        )
        return Circuit(n_qubits, self._n_timesteps, kept)

    def replace_gates(
        self,
        gates: Iterable[GateInstance],
        n_qubits: Optional[int] = None,
        n_timesteps: Optional[int] = None,
    ) -> "Circuit":
        """
        Return a circuit holding exactly ``gates``.

        The display width is re-derived so that it covers every used
        timestep. Invalid layouts raise :class:`PlacementError`.
        """
        return Circuit(
            self._n_qubits if n_qubits is None else n_qubits,
            self._n_timesteps if n_timesteps is None else n_timesteps,
            gates,
        )

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate names to their counts."""
        counts: Dict[str, int] = {}
        for gate in self._gates:
            name = spec_for(gate.kind).name
            counts[name] = counts.get(name, 0) + 1
        return counts

    def depth(self) -> int:
        """Number of timesteps actually used (last used timestep + 1)."""
        return max((g.timestep + 1 for g in self._gates), default=0)

    def to_text_diagram(self) -> str:
        """
        Return an ASCII rendering of the grid.

        Each qubit is a row and each used timestep a three character column.
        Single-qubit gates show their label (first character for multi-letter
        labels), CNOT uses '●' for the control and '⊕' for the target.
        """
        width = self.depth()
        rows: List[List[str]] = [["───"] * width for _ in range(self._n_qubits)]

        for gate in self._gates:
            if gate.kind is GateKind.CONTROLLED_NOT:
                rows[gate.qubit][gate.timestep] = "─●─"
                rows[gate.target][gate.timestep] = "─⊕─"
            else:
                label = spec_for(gate.kind).label
                rows[gate.qubit][gate.timestep] = f"─{label[0]}─"

        return "\n".join(
            f"q{q}: " + "".join(rows[q]) for q in range(self._n_qubits)
        )
