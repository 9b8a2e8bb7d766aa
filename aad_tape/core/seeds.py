# aad_tape/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let derivatives grow
# backwards through the tape. Every helper here runs on its own fresh tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Iterable, List, Tuple
import numpy as np

from .var import Variable
from .numerics import Numerics, REAL
from .gradient_tape import GradientTape
from .hessian_tape import HessianTape


def value(x: Any) -> Any:
    """Return the numeric value of a Variable; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Variable) else x


def accumulate(tape, y: Variable):
    """
    Run `reverse_accumulate` from `y`.

    A root has no derived node to start from: its gradient is the unit
    vector of that root and its Hessian is zero.
    """
    if y.index >= tape.variable_count:
        return tape.reverse_accumulate(index=y.index)
    k = tape.variable_count
    g = np.zeros(k, dtype=tape.numerics.dtype)
    g[y.index] = tape.numerics.one
    if isinstance(tape, HessianTape):
        return g, np.zeros((k, k), dtype=tape.numerics.dtype)
    return g


def _record(tape, f: Callable, x0: Iterable) -> Variable:
    xs: List[Variable] = [tape.create_variable(v) for v in x0]
    y = f(tape, xs)
    if not isinstance(y, Variable):
        raise TypeError("f(tape, xs) must return a Variable recorded on the tape.")
    return y


def grad(f: Callable[[Any, List[Variable]], Variable],
         x0: Iterable, *, numerics: Numerics = REAL) -> np.ndarray:
    """
    Gradient of a scalar-output function y = f(tape, xs) at x0.

    Example
    -------
    f = lambda t, xs: t.add(t.multiply(xs[0], xs[0]), t.multiply(3.0, xs[1]))
    grad(f, [2.0, 4.0]) -> array([4., 3.])
    """
    tape = GradientTape(numerics=numerics)
    y = _record(tape, f, x0)
    return accumulate(tape, y)


def grad_and_hessian(f: Callable[[Any, List[Variable]], Variable],
                     x0: Iterable, *, numerics: Numerics = REAL) -> Tuple[Any, np.ndarray, np.ndarray]:
    """
    Value, gradient and Hessian of y = f(tape, xs) at x0 in one edge-pushing sweep.

    Returns
    -------
    (value, gradient, hessian)
    """
    tape = HessianTape(numerics=numerics)
    y = _record(tape, f, x0)
    g, H = accumulate(tape, y)
    return y.value, g, H
