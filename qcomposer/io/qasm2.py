"""OpenQASM 2.0 reader and writer for composer circuits.

Supported QASM 2.0 subset:
    - OPENQASM 2.0; header and include "qelib1.inc"; (ignored on import)
    - one qreg declaration, which sets the qubit count
    - creg and barrier statements (ignored)
    - single-qubit gates: h, x, y, z, s, t
    - controlled-NOT: cx (cnot is accepted on import)
    - measure q[i] -> c[j];
    - comments: // and /* */

Statements the importer does not recognise are skipped rather than
rejected, so a half-typed document still yields the circuit it describes so
far.
"""

from __future__ import annotations

import re
from typing import List, Optional

from qcomposer.circuit import Circuit
from qcomposer.gates import GateKind, spec_for

from .utils import MEASURE, PAIR, SINGLE, Instruction, assemble_circuit, register_size

_QREG_RE = re.compile(r"qreg\s+\w+\s*\[\s*(\d+)\s*\]")
_QREG_NAME_RE = re.compile(r"qreg\s+(\w+)\s*\[")

_PAIR_RE = re.compile(
    r"^(cx|cnot)\s+(\w+)\s*\[\s*(\d+)\s*\]\s*,\s*(\w+)\s*\[\s*(\d+)\s*\]$",
    re.IGNORECASE,
)
_MEASURE_RE = re.compile(
    r"^measure\s+(\w+)\s*\[\s*(\d+)\s*\](?:\s*->\s*\w+\s*\[\s*\d+\s*\])?$",
    re.IGNORECASE,
)
_SINGLE_RE = re.compile(r"^(\w+)\s+(\w+)\s*\[\s*(\d+)\s*\]$")

_HEADER_PREFIXES = ("openqasm", "include", "qreg", "creg", "barrier")


def parse_qasm_string(
    qasm: str,
    fallback_qubits: Optional[int] = None,
    prior_timesteps: int = 0,
) -> Circuit:
    """
    Parse OpenQASM 2.0 text into a Circuit.

    Parameters
    ----------
    qasm : str
        OpenQASM 2.0 source code.
    fallback_qubits : int, optional
        Qubit count to use when the text has no qreg declaration.
    prior_timesteps : int
        Grid width of the circuit being replaced; the result is never
        narrower.

    Returns
    -------
    Circuit
        Parsed circuit with timesteps inferred per qubit lane.

    Raises
    ------
    ParseError
        If no qubit count can be determined or it is out of range.
    """
    lines = _strip_comments(qasm)
    code = "\n".join(lines)
    n_qubits = register_size(code, _QREG_RE, fallback_qubits, "QASM")
    name_match = _QREG_NAME_RE.search(code)
    register = name_match.group(1) if name_match else "q"

    instructions = _scan_statements(lines, register)
    return assemble_circuit(instructions, n_qubits, prior_timesteps)


def export_circuit_to_qasm(circuit: Circuit) -> str:
    """
    Export a Circuit to OpenQASM 2.0.

    Gates are written in timestep order; gates sharing a timestep keep
    their insertion order.
    """
    n = circuit.n_qubits
    lines = [
        "OPENQASM 2.0;",
        'include "qelib1.inc";',
        f"qreg q[{n}];",
        f"creg c[{n}];",
        "",
    ]

    for gate in circuit.ordered():
        if gate.kind is GateKind.CONTROLLED_NOT:
            lines.append(f"cx q[{gate.qubit}],q[{gate.target}];")
        elif gate.kind is GateKind.MEASURE:
            lines.append(f"measure q[{gate.qubit}] -> c[{gate.qubit}];")
        else:
            lines.append(f"{spec_for(gate.kind).name.lower()} q[{gate.qubit}];")

    return "\n".join(lines) + "\n"


def _strip_comments(qasm: str) -> List[str]:
    """Remove // and /* */ comments, keeping one entry per source line."""
    lines = []
    in_block_comment = False

    for line in qasm.split("\n"):
        if in_block_comment:
            if "*/" in line:
                line = line[line.index("*/") + 2 :]
                in_block_comment = False
            else:
                lines.append("")
                continue

        line = re.sub(r"/\*.*?\*/", "", line)
        if "/*" in line:
            line = line[: line.index("/*")]
            in_block_comment = True

        if "//" in line:
            line = line[: line.index("//")]

        lines.append(line.strip())

    return lines


def _scan_statements(lines: List[str], register: str) -> List[Instruction]:
    """Turn comment-free source lines into gate instructions, skipping everything else."""
    instructions: List[Instruction] = []

    for line_no, line in enumerate(lines, start=1):
        for stmt in line.split(";"):
            stmt = stmt.strip()
            if not stmt or stmt.lower().startswith(_HEADER_PREFIXES):
                continue
            instr = _match_statement(stmt, register, line_no)
            if instr is not None:
                instructions.append(instr)

    return instructions


def _match_statement(stmt: str, register: str, line_no: int) -> Optional[Instruction]:
    match = _PAIR_RE.match(stmt)
    if match:
        if match.group(2) != register or match.group(4) != register:
            return None
        return Instruction(
            PAIR, match.group(1), (int(match.group(3)), int(match.group(5))), line_no
        )

    match = _MEASURE_RE.match(stmt)
    if match:
        if match.group(1) != register:
            return None
        return Instruction(MEASURE, "measure", (int(match.group(2)),), line_no)

    match = _SINGLE_RE.match(stmt)
    if match:
        if match.group(2) != register:
            return None
        return Instruction(SINGLE, match.group(1), (int(match.group(3)),), line_no)

    return None


__all__ = ["parse_qasm_string", "export_circuit_to_qasm"]
