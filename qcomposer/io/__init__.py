"""I/O modules for the QASM and Qiskit circuit dialects."""

from .codec import Dialect, dialect_for_path, dump_circuit, from_text, load_circuit, to_text
from .packing import LanePacker
from .qasm2 import export_circuit_to_qasm, parse_qasm_string
from .qiskit import export_circuit_to_qiskit, parse_qiskit_string

__all__ = [
    "Dialect",
    "to_text",
    "from_text",
    "dialect_for_path",
    "load_circuit",
    "dump_circuit",
    "LanePacker",
    "parse_qasm_string",
    "export_circuit_to_qasm",
    "parse_qiskit_string",
    "export_circuit_to_qiskit",
]
