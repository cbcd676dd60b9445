"""Composer session: the single owner of the circuit being edited.

The session ties the pure pieces together. Every change, whether it comes
from grid placement, the text editor or the assistant, replaces the circuit
and rebuilds the visualization feed. Changes that did not come from the
editor also rewrite the editor text, so both views always show the same
circuit. A session is not thread-safe; one coordinator drives it.
"""

from __future__ import annotations

from typing import Optional, Union

from qcomposer.circuit import Circuit, GateInstance
from qcomposer.config import DEFAULT_QUBITS, DEFAULT_TIMESTEPS, MAX_QUBITS
from qcomposer.errors import ParseError, PlacementError
from qcomposer.gates import GateKind
from qcomposer.io import Dialect, from_text, to_text
from qcomposer.logging import get_logger
from qcomposer.viz import VisualizationFeed, build_feed

logger = get_logger(__name__)


class ComposerSession:
    """
    Mutable editing session around an immutable :class:`Circuit`.

    Parameters
    ----------
    n_qubits:
        Initial register size.
    n_timesteps:
        Initial grid width.
    dialect:
        Notation used for the editor text.
    """

    def __init__(
        self,
        n_qubits: int = DEFAULT_QUBITS,
        n_timesteps: int = DEFAULT_TIMESTEPS,
        dialect: Union[Dialect, str] = Dialect.QASM,
    ) -> None:
        self._dialect = Dialect.coerce(dialect)
        self._selected: Optional[int] = 0
        self._circuit = Circuit(n_qubits, n_timesteps)
        self._feed: VisualizationFeed = build_feed(self._circuit, 0)
        self._editor_text = to_text(self._circuit, self._dialect)

    @property
    def circuit(self) -> Circuit:
        return self._circuit

    @property
    def feed(self) -> VisualizationFeed:
        return self._feed

    @property
    def editor_text(self) -> str:
        return self._editor_text

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def selected_qubit(self) -> Optional[int]:
        return self._selected

    def _commit(self, circuit: Circuit, from_editor: bool = False) -> None:
        self._circuit = circuit
        if self._selected is not None and self._selected >= circuit.n_qubits:
            self._selected = 0
        self._feed = build_feed(circuit, self._selected)
        if not from_editor:
            self._editor_text = to_text(circuit, self._dialect)

    def place(
        self,
        kind: GateKind,
        qubit: int,
        timestep: int,
        target: Optional[int] = None,
    ) -> GateInstance:
        """
        Place a gate on the grid and return the new instance.

        Raises
        ------
        PlacementError
            If the slot is taken or the lanes are invalid; the circuit is
            left as it was.
        """
        gate = GateInstance(kind, qubit, timestep, target)
        try:
            circuit = self._circuit.insert(gate)
        except PlacementError as e:
            logger.debug("Rejected %r at q%d t%d: %s", kind, qubit, timestep, e)
            raise
        logger.debug("Placed %s at q%d t%d", kind.value, qubit, timestep)
        self._commit(circuit)
        return gate

    def remove(self, gate_id: str) -> None:
        """Remove the gate with ``gate_id``; unknown ids are ignored."""
        self._commit(self._circuit.remove(gate_id))

    def clear(self) -> None:
        self._commit(self._circuit.clear())

    def add_qubit(self) -> None:
        """Grow the register by one lane, up to ``MAX_QUBITS``."""
        if self._circuit.n_qubits >= MAX_QUBITS:
            raise ValueError(f"A maximum of {MAX_QUBITS} qubits is allowed.")
        self._commit(self._circuit.with_qubits(self._circuit.n_qubits + 1))

    def remove_qubit(self) -> None:
        """Drop the highest lane and every gate touching it; a one-qubit circuit is kept."""
        if self._circuit.n_qubits <= 1:
            return
        self._commit(self._circuit.with_qubits(self._circuit.n_qubits - 1))

    def select_qubit(self, qubit: Optional[int]) -> None:
        """Choose which qubit the density matrix and Bloch angles describe."""
        if qubit is not None and (qubit < 0 or qubit >= self._circuit.n_qubits):
            raise ValueError(
                f"qubit index {qubit} out of range [0, {self._circuit.n_qubits})"
            )
        self._selected = qubit
        self._feed = build_feed(self._circuit, qubit)

    def set_dialect(self, dialect: Union[Dialect, str]) -> None:
        """Switch the editor notation and rewrite the editor text."""
        self._dialect = Dialect.coerce(dialect)
        self._editor_text = to_text(self._circuit, self._dialect)

    def edit_text(self, text: str) -> None:
        """
        Apply text typed in the editor.

        The editor keeps the text exactly as typed. Lines the importer does
        not understand are dropped from the circuit, not from the text.

        Raises
        ------
        ParseError
            If the text yields no usable circuit; the circuit is unchanged.
        """
        self._editor_text = text
        try:
            circuit = from_text(
                text,
                self._dialect,
                fallback_qubits=self._circuit.n_qubits,
                prior_timesteps=self._circuit.n_timesteps,
            )
        except ParseError as e:
            logger.warning("%s editor text rejected: %s", self._dialect.value, e)
            raise
        self._commit(circuit, from_editor=True)

    def load_text(self, text: str, dialect: Union[Dialect, str] = Dialect.QASM) -> None:
        """
        Replace the circuit with one parsed from ``text``.

        Unlike :meth:`edit_text` the editor is rewritten afterwards, in the
        session's own dialect.
        """
        circuit = from_text(
            text,
            dialect,
            fallback_qubits=self._circuit.n_qubits,
            prior_timesteps=self._circuit.n_timesteps,
        )
        self._selected = None
        self._commit(circuit)
