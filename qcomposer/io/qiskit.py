"""Qiskit-style script reader and writer for composer circuits.

The dialect is the short Python script a Qiskit user would type::

    from qiskit import QuantumCircuit, execute, Aer

    qc = QuantumCircuit(2, 2)

    qc.h(0)
    qc.cx(0, 1)
    qc.measure(0, 0)

Nothing is executed: lines are matched textually. The qubit count comes
from the first ``QuantumCircuit(n`` call, and only lines that call a method
on the circuit variable (``qc`` unless the script binds another name) are
read as instructions.
"""

from __future__ import annotations

import re
from typing import List, Optional

from qcomposer.circuit import Circuit
from qcomposer.gates import GateKind, spec_for

from .utils import MEASURE, PAIR, SINGLE, Instruction, assemble_circuit, register_size

_CONSTRUCTOR_RE = re.compile(r"QuantumCircuit\(\s*(\d+)")
_VARIABLE_RE = re.compile(r"^\s*(\w+)\s*=\s*QuantumCircuit\(", re.MULTILINE)

_PAIR_RE = re.compile(r"^(cx|cnot)\(\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)
_MEASURE_RE = re.compile(r"^measure\(\s*(\d+)\s*(?:,\s*\d+\s*)?\)", re.IGNORECASE)
_SINGLE_RE = re.compile(r"^(\w+)\(\s*(\d+)\s*\)")

_RUN_RECIPE = (
    "# To run the circuit:",
    "# simulator = Aer.get_backend('qasm_simulator')",
    "# result = execute(qc, simulator).result()",
    "# counts = result.get_counts(qc)",
    "# print(counts)",
)


def parse_qiskit_string(
    source: str,
    fallback_qubits: Optional[int] = None,
    prior_timesteps: int = 0,
) -> Circuit:
    """
    Parse a Qiskit-style script into a Circuit.

    Parameters
    ----------
    source : str
        Script text.
    fallback_qubits : int, optional
        Qubit count to use when the script never calls ``QuantumCircuit(n)``.
    prior_timesteps : int
        Grid width of the circuit being replaced; the result is never
        narrower.

    Raises
    ------
    ParseError
        If no qubit count can be determined or it is out of range.
    """
    lines = [line.split("#", 1)[0].strip() for line in source.split("\n")]
    code = "\n".join(lines)

    n_qubits = register_size(code, _CONSTRUCTOR_RE, fallback_qubits, "Qiskit")
    var_match = _VARIABLE_RE.search(code)
    variable = var_match.group(1) if var_match else "qc"

    instructions: List[Instruction] = []
    prefix = f"{variable}."
    for line_no, line in enumerate(lines, start=1):
        if not line.startswith(prefix):
            continue
        instr = _match_call(line[len(prefix):], line_no)
        if instr is not None:
            instructions.append(instr)

    return assemble_circuit(instructions, n_qubits, prior_timesteps)


def export_circuit_to_qiskit(circuit: Circuit) -> str:
    """Export a Circuit as a Qiskit-style script."""
    n = circuit.n_qubits
    lines = [
        "from qiskit import QuantumCircuit, execute, Aer",
        "",
        f"qc = QuantumCircuit({n}, {n})",
        "",
    ]

    for gate in circuit.ordered():
        if gate.kind is GateKind.CONTROLLED_NOT:
            lines.append(f"qc.cx({gate.qubit}, {gate.target})")
        elif gate.kind is GateKind.MEASURE:
            lines.append(f"qc.measure({gate.qubit}, {gate.qubit})")
        else:
            lines.append(f"qc.{spec_for(gate.kind).name.lower()}({gate.qubit})")

    lines.append("")
    lines.extend(_RUN_RECIPE)
    return "\n".join(lines) + "\n"


def _match_call(call: str, line_no: int) -> Optional[Instruction]:
    match = _PAIR_RE.match(call)
    if match:
        return Instruction(
            PAIR, match.group(1), (int(match.group(2)), int(match.group(3))), line_no
        )

    match = _MEASURE_RE.match(call)
    if match:
        return Instruction(MEASURE, "measure", (int(match.group(1)),), line_no)

    match = _SINGLE_RE.match(call)
    if match:
        return Instruction(SINGLE, match.group(1), (int(match.group(2)),), line_no)

    return None


__all__ = ["parse_qiskit_string", "export_circuit_to_qiskit"]
