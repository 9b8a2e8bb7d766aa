# aad_tape/calculus.py
"""
Vector-calculus helpers on top of the tapes.

Every helper takes a tape whose roots `x` were already created, records
the component function(s) on it and runs one reverse sweep per component
starting from that component's output node. Components share the roots,
so all their graphs live on the same tape.

A component is a callable `f(tape, x) -> Variable`.

    tape = HessianTape()
    x = [tape.create_variable(v) for v in (1.0, 2.0, 3.0)]
    laplacian(tape, lambda t, x: t.multiply(x[0], t.multiply(x[1], x[2])), x)
"""

from typing import Callable, List, Sequence

import numpy as np

from .core.hessian_tape import HessianTape
from .core.seeds import accumulate
from .core.var import Variable

Component = Callable[..., Variable]


def _check_point(x: Sequence[Variable]) -> None:
    if not x:
        raise ValueError("x must contain at least one root Variable")


def _partials(tape, f: Component, x: Sequence[Variable]) -> np.ndarray:
    """∂f/∂x_j for the roots in `x`, in the order of `x`."""
    out = f(tape, x)
    if out.index < tape.variable_count:
        g = np.zeros(tape.variable_count, dtype=tape.numerics.dtype)
        g[out.index] = tape.numerics.one
    else:
        g = tape.gradient(index=out.index)
    return g[[xi.index for xi in x]]


def _require_hessian_tape(tape, name: str) -> None:
    if not isinstance(tape, HessianTape):
        raise TypeError(f"{name} needs a HessianTape, got {type(tape).__name__}")


# ------------------------------ scalar fields ------------------------------ #
def gradient(tape, f: Component, x: Sequence[Variable]) -> np.ndarray:
    """∇f(x)."""
    _check_point(x)
    return _partials(tape, f, x)


def hessian(tape, f: Component, x: Sequence[Variable]) -> np.ndarray:
    """∇²f(x); needs a HessianTape."""
    _require_hessian_tape(tape, "hessian")
    _check_point(x)
    _, H = accumulate(tape, f(tape, x))
    idx = [xi.index for xi in x]
    return H[np.ix_(idx, idx)]


def directional_derivative(tape, v, f: Component, x: Sequence[Variable]):
    """∇f(x)·v."""
    _check_point(x)
    v = np.asarray(v)
    if v.shape != (len(x),):
        raise ValueError(f"direction has shape {v.shape}, expected ({len(x)},)")
    return np.dot(_partials(tape, f, x), v)


def laplacian(tape, f: Component, x: Sequence[Variable]):
    """Δf(x), the trace of the Hessian; needs a HessianTape."""
    return np.trace(hessian(tape, f, x))


# ------------------------------ vector fields ------------------------------ #
def jacobian(tape, fs: Sequence[Component], x: Sequence[Variable]) -> np.ndarray:
    """
    Jacobian of the vector field (f_0, ..., f_{m-1}).

    Returns
    -------
    ndarray of shape (len(fs), len(x)); row i is ∇f_i(x).
    """
    _check_point(x)
    if not fs:
        raise ValueError("fs must contain at least one component")
    rows: List[np.ndarray] = [_partials(tape, f, x) for f in fs]
    return np.vstack(rows)


def divergence(tape, fs: Sequence[Component], x: Sequence[Variable]):
    """∇·F(x) = Σ ∂f_i/∂x_i."""
    _check_point(x)
    if len(fs) != len(x):
        raise ValueError(f"divergence needs as many components as roots, got {len(fs)} and {len(x)}")
    total = tape.numerics.zero
    for i, f in enumerate(fs):
        total += _partials(tape, f, x)[i]
    return total


def curl(tape, fs: Sequence[Component], x: Sequence[Variable]) -> np.ndarray:
    """∇×F(x) for a field in three dimensions."""
    if len(fs) != 3 or len(x) != 3:
        raise ValueError(f"curl is defined for 3 components of 3 variables, got {len(fs)} and {len(x)}")
    df1, df2, df3 = (_partials(tape, f, x) for f in fs)
    return np.array([
        df3[1] - df2[2],
        df1[2] - df3[0],
        df2[0] - df1[1],
    ])


def jvp(tape, fs: Sequence[Component], x: Sequence[Variable], v) -> np.ndarray:
    """Jacobian-vector product J(x)·v."""
    v = np.asarray(v)
    if v.shape != (len(x),):
        raise ValueError(f"v has shape {v.shape}, expected ({len(x)},)")
    return jacobian(tape, fs, x) @ v


def vjp(tape, v, fs: Sequence[Component], x: Sequence[Variable]) -> np.ndarray:
    """Vector-Jacobian product vᵀ·J(x)."""
    v = np.asarray(v)
    if v.shape != (len(fs),):
        raise ValueError(f"v has shape {v.shape}, expected ({len(fs)},)")
    return v @ jacobian(tape, fs, x)
