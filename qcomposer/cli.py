"""Command line entry point: ``qcomposer simulate|convert|diagram FILE``."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from qcomposer.errors import QComposerError
from qcomposer.io import Dialect, dump_circuit, load_circuit, to_text
from qcomposer.logging import configure_logging, get_logger
from qcomposer.viz import build_feed, print_feed

logger = get_logger(__name__)

_DIALECTS = [d.value for d in Dialect]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qcomposer",
        description="Simulate and convert small quantum circuits written in QASM or Qiskit style",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR); defaults to QCOMPOSER_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Print probabilities, density matrix and Bloch angles")
    sim.add_argument("path")
    sim.add_argument("--dialect", choices=_DIALECTS)
    sim.add_argument("--qubit", type=int, default=0, help="Qubit to reduce to")

    conv = sub.add_parser("convert", help="Rewrite a circuit file in another dialect")
    conv.add_argument("path")
    conv.add_argument("--dialect", choices=_DIALECTS, help="Dialect of the input file")
    conv.add_argument("--to", dest="target", choices=_DIALECTS, required=True)
    conv.add_argument("-o", "--output", help="Output file (default: stdout)")

    diag = sub.add_parser("diagram", help="Draw the circuit grid as text")
    diag.add_argument("path")
    diag.add_argument("--dialect", choices=_DIALECTS)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.log_level is not None:
        configure_logging(level=args.log_level)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        circuit = load_circuit(args.path, args.dialect)

        if args.command == "simulate":
            if args.qubit < 0 or args.qubit >= circuit.n_qubits:
                raise ValueError(
                    f"qubit index {args.qubit} out of range [0, {circuit.n_qubits})"
                )
            print_feed(build_feed(circuit, args.qubit))
        elif args.command == "convert":
            if args.output:
                dump_circuit(circuit, args.output, args.target)
                logger.info("Wrote %s", args.output)
            else:
                sys.stdout.write(to_text(circuit, args.target))
        else:
            print(circuit.to_text_diagram())
    except (QComposerError, OSError, ValueError) as e:
        print(f"qcomposer: error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
