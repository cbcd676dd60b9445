"""Tests for the OpenQASM 2.0 dialect."""

from __future__ import annotations

import pytest

from qcomposer.circuit import Circuit
from qcomposer.errors import ParseError
from qcomposer.gates import GateKind
from qcomposer.io import export_circuit_to_qasm, parse_qasm_string


def _placed(circuit: Circuit):
    return [(g.kind, g.qubit, g.timestep, g.target) for g in circuit.ordered()]


def test_export_bell_circuit() -> None:
    circuit = (
        Circuit(2, 25)
        .place(GateKind.HADAMARD, 0, 0)
        .place(GateKind.CONTROLLED_NOT, 0, 1, target=1)
        .place(GateKind.MEASURE, 1, 2)
    )

    assert export_circuit_to_qasm(circuit) == (
        "OPENQASM 2.0;\n"
        'include "qelib1.inc";\n'
        "qreg q[2];\n"
        "creg c[2];\n"
        "\n"
        "h q[0];\n"
        "cx q[0],q[1];\n"
        "measure q[1] -> c[1];\n"
    )


def test_export_empty_circuit() -> None:
    text = export_circuit_to_qasm(Circuit(3, 25))
    assert text.endswith("qreg q[3];\ncreg c[3];\n\n")


def test_export_uses_lowercase_mnemonics() -> None:
    circuit = Circuit(1, 5)
    for t, kind in enumerate(
        [GateKind.PAULI_X, GateKind.PAULI_Y, GateKind.PAULI_Z, GateKind.PHASE_S, GateKind.PHASE_T]
    ):
        circuit = circuit.place(kind, 0, t)

    body = export_circuit_to_qasm(circuit).split("\n\n", 1)[1]
    assert body == "x q[0];\ny q[0];\nz q[0];\ns q[0];\nt q[0];\n"


def test_parse_bell_circuit() -> None:
    qasm = (
        "OPENQASM 2.0;\n"
        'include "qelib1.inc";\n'
        "qreg q[2];\n"
        "creg c[2];\n"
        "h q[0];\n"
        "cx q[0],q[1];\n"
        "measure q[0] -> c[0];\n"
    )

    circuit = parse_qasm_string(qasm)

    assert circuit.n_qubits == 2
    assert _placed(circuit) == [
        (GateKind.HADAMARD, 0, 0, None),
        (GateKind.CONTROLLED_NOT, 0, 1, 1),
        (GateKind.MEASURE, 0, 2, None),
    ]


def test_parse_skips_unknown_and_invalid_lines() -> None:
    qasm = (
        "qreg q[2];\n"
        "rx(0.5) q[0];\n"
        "u3 q[1];\n"
        "h q[7];\n"
        "cx q[1],q[1];\n"
        "h q[0],q[1];\n"
        "this is not qasm\n"
        "x q[1];\n"
    )

    circuit = parse_qasm_string(qasm)

    assert _placed(circuit) == [(GateKind.PAULI_X, 1, 0, None)]


def test_parse_ignores_comments() -> None:
    qasm = (
        "// leading comment\n"
        "qreg q[1];\n"
        "/* h q[0];\n"
        "   x q[0]; */\n"
        "z q[0]; // trailing\n"
        "/* inline */ s q[0];\n"
    )

    circuit = parse_qasm_string(qasm)

    assert [g.kind for g in circuit.ordered()] == [GateKind.PAULI_Z, GateKind.PHASE_S]


def test_commented_register_is_not_read() -> None:
    with pytest.raises(ParseError):
        parse_qasm_string("// qreg q[2];\nh q[0];\n")


def test_parse_multiple_statements_per_line() -> None:
    circuit = parse_qasm_string("qreg q[2]; h q[0]; h q[1]; cx q[1],q[0];")
    assert _placed(circuit) == [
        (GateKind.HADAMARD, 0, 0, None),
        (GateKind.HADAMARD, 1, 0, None),
        (GateKind.CONTROLLED_NOT, 1, 1, 0),
    ]


def test_parse_accepts_cnot_and_mixed_case() -> None:
    circuit = parse_qasm_string("qreg q[2];\nCNOT q[0],q[1];\nH q[1];\n")
    assert _placed(circuit) == [
        (GateKind.CONTROLLED_NOT, 0, 0, 1),
        (GateKind.HADAMARD, 1, 1, None),
    ]


def test_parse_measure_without_classical_target() -> None:
    circuit = parse_qasm_string("qreg q[1];\nmeasure q[0];\n")
    assert _placed(circuit) == [(GateKind.MEASURE, 0, 0, None)]


def test_other_register_name() -> None:
    circuit = parse_qasm_string("qreg r[2];\nh r[1];\nh q[0];\n")
    assert _placed(circuit) == [(GateKind.HADAMARD, 1, 0, None)]


def test_missing_register_uses_fallback() -> None:
    circuit = parse_qasm_string("h q[2];\n", fallback_qubits=3)
    assert circuit.n_qubits == 3
    assert _placed(circuit) == [(GateKind.HADAMARD, 2, 0, None)]


def test_missing_register_without_fallback_raises() -> None:
    with pytest.raises(ParseError):
        parse_qasm_string("h q[0];\n")


@pytest.mark.parametrize("size", [0, 6])
def test_register_out_of_range_raises(size: int) -> None:
    with pytest.raises(ParseError):
        parse_qasm_string(f"qreg q[{size}];\n")


def test_empty_document_with_fallback() -> None:
    circuit = parse_qasm_string("", fallback_qubits=2)
    assert circuit.n_qubits == 2
    assert len(circuit) == 0
