"""Helpers shared by the QASM and Qiskit dialects.

Both importers reduce their text to a list of :class:`Instruction` records
and hand them to :func:`assemble_circuit`, which resolves mnemonics against
the gate catalog, drops instructions that cannot be placed, and assigns
timesteps through :class:`~qcomposer.io.packing.LanePacker`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from qcomposer.circuit import Circuit, GateInstance
from qcomposer.config import MAX_QUBITS, MIN_DISPLAY_TIMESTEPS
from qcomposer.errors import ParseError
from qcomposer.gates import GateKind, resolve_gate
from qcomposer.logging import get_logger

from .packing import LanePacker

logger = get_logger(__name__)

# Instruction shapes, in matching precedence
PAIR = "pair"
MEASURE = "measure"
SINGLE = "single"


@dataclass(frozen=True)
class Instruction:
    """
    One gate instruction recognised in circuit text.

    Attributes
    ----------
    shape:
        ``PAIR``, ``MEASURE`` or ``SINGLE``.
    mnemonic:
        Gate token as written, e.g. "h", "cx", "measure".
    qubits:
        Qubit operands; (control, target) for ``PAIR``.
    line_no:
        1-based source line, for log messages.
    """

    shape: str
    mnemonic: str
    qubits: Tuple[int, ...]
    line_no: int = 0


def register_size(
    text: str,
    pattern: "re.Pattern[str]",
    fallback: Optional[int],
    dialect: str,
) -> int:
    """
    Read the qubit count from the first ``pattern`` match in ``text``.

    Falls back to ``fallback`` when the text declares no register.

    Raises
    ------
    ParseError
        If there is neither a declaration nor a fallback, or the count is
        outside ``1..MAX_QUBITS``.
    """
    match = pattern.search(text)
    if match:
        n_qubits = int(match.group(1))
    elif fallback is not None:
        n_qubits = int(fallback)
    else:
        raise ParseError(
            f"No register declaration found in {dialect} text and no fallback "
            "qubit count given."
        )

    if n_qubits < 1 or n_qubits > MAX_QUBITS:
        raise ParseError(
            f"{dialect} register of {n_qubits} qubits is outside the supported "
            f"range 1..{MAX_QUBITS}."
        )
    return n_qubits


def _resolve(instr: Instruction, n_qubits: int) -> Optional[Tuple[GateKind, int, Optional[int]]]:
    """Map an instruction to (kind, qubit, target) or None if it cannot be placed."""
    if any(q < 0 or q >= n_qubits for q in instr.qubits):
        logger.debug(
            "line %d: qubit out of range in %r, skipped", instr.line_no, instr.mnemonic
        )
        return None

    if instr.shape == MEASURE:
        return (GateKind.MEASURE, instr.qubits[0], None)

    spec = resolve_gate(instr.mnemonic)
    if spec is None:
        logger.debug("line %d: unknown gate %r, skipped", instr.line_no, instr.mnemonic)
        return None

    if instr.shape == PAIR:
        if spec.arity != 2:
            logger.debug(
                "line %d: %r is not a two-qubit gate, skipped", instr.line_no, instr.mnemonic
            )
            return None
        control, target = instr.qubits
        if control == target:
            logger.debug(
                "line %d: %r targets its own control, skipped", instr.line_no, instr.mnemonic
            )
            return None
        return (spec.kind, control, target)

    if spec.arity != 1:
        logger.debug(
            "line %d: %r needs two qubits, skipped", instr.line_no, instr.mnemonic
        )
        return None
    return (spec.kind, instr.qubits[0], None)


def assemble_circuit(
    instructions: Iterable[Instruction],
    n_qubits: int,
    prior_timesteps: int = 0,
) -> Circuit:
    """
    Place ``instructions`` on a fresh grid of ``n_qubits`` lanes.

    Instructions that name unknown gates, refer to qubits outside the
    register or have the wrong number of operands are skipped. The grid
    width is the largest of the packed width, ``prior_timesteps`` and
    ``MIN_DISPLAY_TIMESTEPS``.
    """
    packer = LanePacker(n_qubits)
    gates: List[GateInstance] = []
    skipped = 0

    for instr in instructions:
        resolved = _resolve(instr, n_qubits)
        if resolved is None:
            skipped += 1
            continue
        kind, qubit, target = resolved
        if target is None:
            timestep = packer.place_single(qubit)
        else:
            timestep = packer.place_pair(qubit, target)
        gates.append(GateInstance(kind, qubit, timestep, target))

    width = packer.display_width(prior_timesteps, MIN_DISPLAY_TIMESTEPS)
    logger.info(
        "Imported %d gates on %d qubits (%d instructions skipped)",
        len(gates),
        n_qubits,
        skipped,
    )
    return Circuit(n_qubits, width, gates)


__all__ = [
    "Instruction",
    "PAIR",
    "MEASURE",
    "SINGLE",
    "register_size",
    "assemble_circuit",
]
