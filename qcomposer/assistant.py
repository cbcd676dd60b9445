"""Boundary to the natural-language circuit assistant.

The assistant itself (a remote language model) lives outside this package.
It is described here only by the two calls the composer makes, and by the
glue that turns its answers into composer data: generated circuits arrive
as QASM text and go through the normal importer, while suggestions are
free-form advice that is displayed and never parsed.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from qcomposer.circuit import Circuit
from qcomposer.io import Dialect, from_text, to_text
from qcomposer.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class CircuitAssistant(Protocol):
    """What the composer needs from an assistant backend."""

    def generate_circuit(self, description: str) -> str:
        """Return OpenQASM 2.0 text for a circuit matching ``description``."""
        ...

    def suggest_next_gate(self, circuit_text: str, goal: str) -> str:
        """Return advice on the next gate(s) towards ``goal`` for the QASM ``circuit_text``."""
        ...


def circuit_from_description(
    assistant: CircuitAssistant,
    description: str,
    fallback_qubits: Optional[int] = None,
    prior_timesteps: int = 0,
) -> Circuit:
    """
    Ask the assistant for a circuit and import its QASM answer.

    Raises
    ------
    ParseError
        If the answer contains no usable register declaration and no
        fallback is given.
    """
    qasm = assistant.generate_circuit(description)
    logger.debug("Assistant returned %d characters of QASM", len(qasm))
    return from_text(
        qasm,
        Dialect.QASM,
        fallback_qubits=fallback_qubits,
        prior_timesteps=prior_timesteps,
    )


def suggest_for(assistant: CircuitAssistant, circuit: Circuit, goal: str) -> str:
    """Send ``circuit`` as QASM with ``goal`` and return the advice unchanged."""
    return assistant.suggest_next_gate(to_text(circuit, Dialect.QASM), goal)


__all__ = ["CircuitAssistant", "circuit_from_description", "suggest_for"]
