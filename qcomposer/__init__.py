"""qcomposer - simulation and text codec engine for a small quantum circuit composer."""

__version__ = "0.1.0"

# Gate catalog
from .gates import GATES, GateKind, GateSpec, lookup_by_label, lookup_by_name, resolve_gate

# Circuit IR
from .circuit import Circuit, GateInstance, ordered_gates

# Errors
from .errors import ParseError, PlacementError, PlacementFailure, QComposerError

# Backend operations
from .backend import (
    bloch_angles,
    bloch_vector,
    measure_probs,
    probabilities,
    purity,
    reduced_density_matrix,
    run_gates,
    simulate,
    zero_state,
)

# Text dialects
from .io import Dialect, LanePacker, dump_circuit, from_text, load_circuit, to_text

# Visualization feed
from .viz import VisualizationFeed, build_feed

# Orchestration
from .session import ComposerSession
from .assistant import CircuitAssistant, circuit_from_description, suggest_for

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    "GATES",
    "GateKind",
    "GateSpec",
    "lookup_by_name",
    "lookup_by_label",
    "resolve_gate",
    "Circuit",
    "GateInstance",
    "ordered_gates",
    "QComposerError",
    "PlacementError",
    "PlacementFailure",
    "ParseError",
    "zero_state",
    "run_gates",
    "simulate",
    "measure_probs",
    "probabilities",
    "reduced_density_matrix",
    "bloch_vector",
    "bloch_angles",
    "purity",
    "Dialect",
    "LanePacker",
    "to_text",
    "from_text",
    "load_circuit",
    "dump_circuit",
    "VisualizationFeed",
    "build_feed",
    "ComposerSession",
    "CircuitAssistant",
    "circuit_from_description",
    "suggest_for",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
