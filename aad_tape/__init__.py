# aad_tape/__init__.py
# Tape-based adjoint algorithmic differentiation

from .core.var import Variable
from .core.numerics import Numerics, REAL, COMPLEX
from .core.errors import AutoDiffError, TapeUsageError, LogNodesCancelled
from .core.gradient_tape import GradientTape
from .core.hessian_tape import HessianTape
from .core.seeds import grad, grad_and_hessian, value
from .core.graph_utils import graph_stats, graph_summary

# Vector-calculus helpers
from . import calculus

__version__ = "0.1.0"

__all__ = [
    # Core
    'Variable',
    'GradientTape',
    'HessianTape',
    # Numerics
    'Numerics',
    'REAL',
    'COMPLEX',
    # Errors
    'AutoDiffError',
    'TapeUsageError',
    'LogNodesCancelled',
    # Helpers
    'grad',
    'grad_and_hessian',
    'value',
    'graph_stats',
    'graph_summary',
    'calculus',
]
