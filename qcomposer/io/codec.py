"""Dialect dispatch for circuit text import/export."""

from __future__ import annotations

import enum
import os
from typing import Callable, Dict, Optional, Union

from qcomposer.circuit import Circuit

from .qasm2 import export_circuit_to_qasm, parse_qasm_string
from .qiskit import export_circuit_to_qiskit, parse_qiskit_string


class Dialect(enum.Enum):
    """Supported circuit text notations."""

    QASM = "qasm"
    QISKIT = "qiskit"

    @classmethod
    def coerce(cls, value: Union["Dialect", str]) -> "Dialect":
        """Accept a Dialect or its (case-insensitive) string value."""
        if isinstance(value, Dialect):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = [d.value for d in cls]
            raise ValueError(
                f"Unsupported dialect {value!r}. Supported dialects: {supported}"
            ) from None


_EXPORTERS: Dict[Dialect, Callable[[Circuit], str]] = {
    Dialect.QASM: export_circuit_to_qasm,
    Dialect.QISKIT: export_circuit_to_qiskit,
}

_PARSERS: Dict[Dialect, Callable[..., Circuit]] = {
    Dialect.QASM: parse_qasm_string,
    Dialect.QISKIT: parse_qiskit_string,
}

_EXTENSIONS: Dict[str, Dialect] = {
    ".qasm": Dialect.QASM,
    ".py": Dialect.QISKIT,
}


def to_text(circuit: Circuit, dialect: Union[Dialect, str] = Dialect.QASM) -> str:
    """Serialise ``circuit`` in ``dialect``."""
    return _EXPORTERS[Dialect.coerce(dialect)](circuit)


def from_text(
    text: str,
    dialect: Union[Dialect, str] = Dialect.QASM,
    fallback_qubits: Optional[int] = None,
    prior_timesteps: int = 0,
) -> Circuit:
    """
    Parse ``text`` written in ``dialect``.

    Unrecognised lines are skipped. Raises
    :class:`~qcomposer.errors.ParseError` only when no usable qubit count
    exists.
    """
    parser = _PARSERS[Dialect.coerce(dialect)]
    return parser(text, fallback_qubits=fallback_qubits, prior_timesteps=prior_timesteps)


def dialect_for_path(path: str) -> Dialect:
    """Infer the dialect from a file extension (.qasm or .py)."""
    ext = os.path.splitext(path)[1].lower()
    try:
        return _EXTENSIONS[ext]
    except KeyError:
        raise ValueError(
            f"Cannot infer circuit dialect from extension {ext!r} of {path!r}; "
            "pass the dialect explicitly."
        ) from None


def load_circuit(
    path: str,
    dialect: Optional[Union[Dialect, str]] = None,
    fallback_qubits: Optional[int] = None,
) -> Circuit:
    """
    Read a circuit file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ParseError
        If the file has no usable qubit count.
    """
    resolved = dialect_for_path(path) if dialect is None else Dialect.coerce(dialect)
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    return from_text(content, resolved, fallback_qubits=fallback_qubits)


def dump_circuit(
    circuit: Circuit,
    path: str,
    dialect: Optional[Union[Dialect, str]] = None,
) -> None:
    """Write ``circuit`` to ``path`` in the given or inferred dialect."""
    resolved = dialect_for_path(path) if dialect is None else Dialect.coerce(dialect)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_text(circuit, resolved))


__all__ = [
    "Dialect",
    "to_text",
    "from_text",
    "dialect_for_path",
    "load_circuit",
    "dump_circuit",
]
