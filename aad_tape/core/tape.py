# aad_tape/core/tape.py
"""
The tape contract shared by GradientTape and HessianTape.

A tape owns one append-only list of nodes. Each elementary operation
evaluates its primal through the tape's numeric trait, asks the matching
rule in `aad_tape.ops` for the local partials, appends exactly one node and
returns a new Variable pointing at it. Parents are referenced by arena index
only, so the creation order is already a valid reverse-topological order.

Concrete tapes decide what a node stores (`_root_node`, `_unary_node`,
`_binary_node`) and how the backward sweep runs (`reverse_accumulate`).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import Event
from typing import Any, Callable, List, Optional, Sequence, Union

import numpy as np

from .. import ops
from ..ops import UnaryPartials, BinaryPartials
from .errors import TapeUsageError
from .numerics import Numerics, REAL
from .var import Variable

logger = logging.getLogger(__name__)

Operand = Union[Variable, int, float, complex, np.number]


class Tape(ABC):
    """
    Append-only computation-graph recorder.

    Parameters
    ----------
    capacity : int
        Expected number of nodes. Python lists grow on demand, so this is
        only a hint kept for API parity with the capacity-aware tapes.
    numerics : Numerics
        Number representation (default: REAL, numpy float64).
    is_tracking : bool
        When False, operations compute primal values only and append nothing.
    """

    # Derivative order the rules are asked for while tracking.
    _order = 2

    def __init__(self, capacity: int = 0, *, numerics: Numerics = REAL, is_tracking: bool = True):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.numerics = numerics
        self.is_tracking = is_tracking
        self.capacity = capacity
        self._nodes: List[Any] = []
        self._variable_count = 0

    # ---------------- bookkeeping ---------------- #
    @property
    def node_count(self) -> int:
        """Number of nodes (roots included) recorded on the tape."""
        return len(self._nodes)

    @property
    def variable_count(self) -> int:
        """Number of root variables."""
        return self._variable_count

    @property
    def nodes(self) -> Sequence:
        """The node arena, in creation order. Treat as read-only."""
        return self._nodes

    def reset(self) -> None:
        """Drop every node, roots included."""
        self._nodes.clear()
        self._variable_count = 0

    def __repr__(self):
        return (f"{type(self).__name__}(nodes={len(self._nodes)}, "
                f"roots={self._variable_count}, numerics={self.numerics.name}, "
                f"tracking={self.is_tracking})")

    def create_variable(self, value) -> Variable:
        """Create a root variable for the tape to differentiate against."""
        if len(self._nodes) > self._variable_count:
            raise TapeUsageError(
                "Root variables must be created before any operation is recorded."
            )
        index = self._variable_count
        self._nodes.append(self._root_node(index))
        self._variable_count += 1
        return Variable(index, self.numerics.coerce(value))

    def log_nodes(self, logger: logging.Logger, cancel: Optional[Event] = None, limit: int = 100) -> None:
        """Log up to `limit` nodes at INFO level; see graph_utils.log_nodes."""
        from .graph_utils import log_nodes
        log_nodes(self, logger, cancel, limit)

    # ---------------- node construction (per tape kind) ---------------- #
    @abstractmethod
    def _root_node(self, index: int):
        ...

    @abstractmethod
    def _unary_node(self, p: UnaryPartials, px: int, py: int):
        ...

    @abstractmethod
    def _binary_node(self, p: BinaryPartials, px: int, py: int):
        ...

    # ---------------- accumulation ---------------- #
    @abstractmethod
    def reverse_accumulate(self, seed=None, index: Optional[int] = None):
        """Run the backward sweep from node `index` (default: the last node)."""

    def gradient(self, seed=None, index: Optional[int] = None) -> np.ndarray:
        """First-order reverse sweep only; returns ∂out/∂roots in root order."""
        index = self._check_start(index)
        adjoint = self._new_adjoint(seed, index)
        nodes = self._nodes
        for i in range(index, self._variable_count - 1, -1):
            node = nodes[i]
            vbar = adjoint[i]
            adjoint[node.px] += vbar * node.dx
            adjoint[node.py] += vbar * node.dy
        return adjoint[:self._variable_count].copy()

    def _check_start(self, index: Optional[int]) -> int:
        if self._variable_count == 0:
            raise TapeUsageError(f"The {type(self).__name__} contains no root nodes.")
        if index is None:
            index = len(self._nodes) - 1
        if not self._variable_count <= index < len(self._nodes):
            raise IndexError(
                f"start index {index} is not a derived node; expected "
                f"{self._variable_count} <= index < {len(self._nodes)}"
            )
        logger.debug("%s: reverse sweep from node %d of %d",
                     type(self).__name__, index, len(self._nodes))
        return index

    def _new_adjoint(self, seed, index: int) -> np.ndarray:
        adjoint = np.zeros(index + 1, dtype=self.numerics.dtype)
        adjoint[index] = self.numerics.one if seed is None else seed
        return adjoint

    # ---------------- recording helpers ---------------- #
    def _unary(self, rule: Callable, x: Variable, *consts) -> Variable:
        nm = self.numerics
        if not self.is_tracking:
            return Variable(len(self._nodes), rule(nm, x.value, *consts, order=0).value)
        p = rule(nm, x.value, *consts, order=self._order)
        return self._push_unary(p, x.index)

    def _unary_const(self, rule: Callable, c, x: Variable) -> Variable:
        """Unary node whose constant argument comes before the variable."""
        nm = self.numerics
        c = nm.coerce(c)
        if not self.is_tracking:
            return Variable(len(self._nodes), rule(nm, c, x.value, order=0).value)
        return self._push_unary(rule(nm, c, x.value, order=self._order), x.index)

    def _binary(self, rule: Callable, x: Operand, y: Operand) -> Variable:
        """
        Record a binary primitive. Either operand may be an untracked
        constant; the node then keeps only the partials of the tracked side
        and points its spare parent at the sentinel slot.
        """
        nm = self.numerics
        x_tracked = isinstance(x, Variable)
        y_tracked = isinstance(y, Variable)
        if not (x_tracked or y_tracked):
            raise TypeError(f"{rule.__name__}: at least one operand must be a Variable")

        xv = x.value if x_tracked else nm.coerce(x)
        yv = y.value if y_tracked else nm.coerce(y)
        if not self.is_tracking:
            return Variable(len(self._nodes), rule(nm, xv, yv, order=0).value)

        p = rule(nm, xv, yv, order=self._order)
        if x_tracked and y_tracked:
            index = len(self._nodes)
            self._nodes.append(self._binary_node(p, x.index, y.index))
            return Variable(index, p.value)
        if x_tracked:
            return self._push_unary(p.left(), x.index)
        return self._push_unary(p.right(), y.index)

    def _push_unary(self, p: UnaryPartials, px: int) -> Variable:
        # the spare parent is the slot being written: its partial is zero
        index = len(self._nodes)
        self._nodes.append(self._unary_node(p, px, index))
        return Variable(index, p.value)

    def _require_real(self, opname: str) -> None:
        if not self.numerics.is_real:
            raise TypeError(f"{opname} is only defined on tapes over real numbers")

    # ---------------- basic operations ---------------- #
    def add(self, x: Operand, y: Operand) -> Variable:
        """x + y; either operand may be a constant."""
        return self._binary(ops.add, x, y)

    def subtract(self, x: Operand, y: Operand) -> Variable:
        """x - y; either operand may be a constant."""
        return self._binary(ops.sub, x, y)

    def multiply(self, x: Operand, y: Operand) -> Variable:
        """x * y; either operand may be a constant."""
        return self._binary(ops.mul, x, y)

    def divide(self, x: Operand, y: Operand) -> Variable:
        """x / y; either operand may be a constant."""
        return self._binary(ops.div, x, y)

    def modulo(self, x: Operand, y: Operand) -> Variable:
        """Floored remainder x mod y (real tapes only)."""
        self._require_real("modulo")
        return self._binary(ops.mod, x, y)

    def negate(self, x: Variable) -> Variable:
        return self._unary(ops.neg, x)

    # ---------------- exponential ---------------- #
    def exp(self, x: Variable) -> Variable:
        return self._unary(ops.exp, x)

    def exp2(self, x: Variable) -> Variable:
        return self._unary(ops.exp2, x)

    def exp10(self, x: Variable) -> Variable:
        return self._unary(ops.exp10, x)

    # ---------------- hyperbolic ---------------- #
    def acosh(self, x: Variable) -> Variable:
        return self._unary(ops.acosh, x)

    def asinh(self, x: Variable) -> Variable:
        return self._unary(ops.asinh, x)

    def atanh(self, x: Variable) -> Variable:
        return self._unary(ops.atanh, x)

    def cosh(self, x: Variable) -> Variable:
        return self._unary(ops.cosh, x)

    def sinh(self, x: Variable) -> Variable:
        return self._unary(ops.sinh, x)

    def tanh(self, x: Variable) -> Variable:
        return self._unary(ops.tanh, x)

    # ---------------- logarithmic ---------------- #
    def ln(self, x: Variable) -> Variable:
        """Natural logarithm."""
        return self._unary(ops.ln, x)

    def log(self, x: Variable, b: Variable) -> Variable:
        """Logarithm of `x` in base `b`, both tracked."""
        return self._binary(ops.log, x, b)

    def log2(self, x: Variable) -> Variable:
        return self._unary(ops.log2, x)

    def log10(self, x: Variable) -> Variable:
        return self._unary(ops.log10, x)

    # ---------------- power / root ---------------- #
    def pow(self, x: Operand, n: Operand) -> Variable:
        """x**n; either the base or the exponent may be a constant."""
        if isinstance(x, Variable) and isinstance(n, Variable):
            return self._binary(ops.pow, x, n)
        if isinstance(x, Variable):
            return self._unary(ops.pow_const_exponent, x, self.numerics.coerce(n))
        if isinstance(n, Variable):
            return self._unary_const(ops.pow_const_base, x, n)
        raise TypeError("pow: at least one operand must be a Variable")

    def cbrt(self, x: Variable) -> Variable:
        return self._unary(ops.cbrt, x)

    def root(self, x: Variable, n: Variable) -> Variable:
        """The `n`-th root of `x`, both tracked."""
        return self._binary(ops.root, x, n)

    def sqrt(self, x: Variable) -> Variable:
        return self._unary(ops.sqrt, x)

    # ---------------- trigonometric ---------------- #
    def acos(self, x: Variable) -> Variable:
        return self._unary(ops.acos, x)

    def asin(self, x: Variable) -> Variable:
        return self._unary(ops.asin, x)

    def atan(self, x: Variable) -> Variable:
        return self._unary(ops.atan, x)

    def atan2(self, y: Variable, x: Variable) -> Variable:
        """Two-argument arctangent of y/x (real tapes only)."""
        self._require_real("atan2")
        return self._binary(ops.atan2, y, x)

    def cos(self, x: Variable) -> Variable:
        return self._unary(ops.cos, x)

    def sin(self, x: Variable) -> Variable:
        return self._unary(ops.sin, x)

    def tan(self, x: Variable) -> Variable:
        return self._unary(ops.tan, x)

    # ---------------- special ---------------- #
    def erf(self, x: Variable) -> Variable:
        return self._unary(ops.erf, x)

    def norm_cdf(self, x: Variable) -> Variable:
        """Standard normal CDF (real tapes only)."""
        self._require_real("norm_cdf")
        return self._unary(ops.norm_cdf, x)

    # ---------------- custom ---------------- #
    @abstractmethod
    def custom_operation(self, x: Variable, *args) -> Variable:
        """Record a user-supplied function together with its analytic derivatives."""
