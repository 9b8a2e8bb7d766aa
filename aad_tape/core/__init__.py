# aad_tape/core/__init__.py

"""
Core public API for the tape-based AAD package.

Exports:
    Variable         : Immutable (index, value) handle for one tape node.
    GradientTape     : First-order tape; reverse sweep gives the gradient.
    HessianTape      : Second-order tape; edge-pushing gives gradient and Hessian.
    REAL, COMPLEX    : Numeric traits (float64 / complex128).
    AutoDiffError, TapeUsageError, LogNodesCancelled : error hierarchy.
    grad, grad_and_hessian, value : one-shot helpers on a fresh tape.
    graph_stats, graph_summary    : tape diagnostics.
"""

from .var import Variable
from .node import GradientNode, HessianNode
from .numerics import Numerics, RealNumerics, ComplexNumerics, REAL, COMPLEX
from .errors import AutoDiffError, TapeUsageError, LogNodesCancelled
from .tape import Tape
from .gradient_tape import GradientTape
from .hessian_tape import HessianTape
from .seeds import grad, grad_and_hessian, value
from .graph_utils import graph_stats, graph_summary, log_nodes

__all__ = [
    "Variable", "GradientNode", "HessianNode",
    "Numerics", "RealNumerics", "ComplexNumerics", "REAL", "COMPLEX",
    "AutoDiffError", "TapeUsageError", "LogNodesCancelled",
    "Tape", "GradientTape", "HessianTape",
    "grad", "grad_and_hessian", "value",
    "graph_stats", "graph_summary", "log_nodes",
]
