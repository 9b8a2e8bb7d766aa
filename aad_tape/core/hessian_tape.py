# aad_tape/core/hessian_tape.py
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

import numpy as np

from ..edge_pushing import DenseWeights, SymmSparseWeights, pushing_stage, creating_stage
from ..ops import UnaryPartials, BinaryPartials
from .node import HessianNode
from .tape import Tape
from .var import Variable

logger = logging.getLogger(__name__)


class HessianTape(Tape):
    """
    Second-order reverse-mode tape.

    Every node stores the first partials (dx, dy) and the second partials
    (dxx, dxy, dyy) of its operation. `reverse_accumulate` returns the
    gradient and the full Hessian of one scalar output in a single backward
    sweep using edge-pushing.

    Tracking can be switched off (`tape.is_tracking = False`) to re-evaluate
    the same expression for its primal value only; nothing is appended while
    it is off. Variables produced in that mode point at an unwritten slot
    and must not be fed into operations once tracking is back on.
    """

    _order = 2

    def _root_node(self, index: int) -> HessianNode:
        return HessianNode.root(index, self.numerics.zero)

    def _unary_node(self, p: UnaryPartials, px: int, py: int) -> HessianNode:
        return HessianNode.unary(p.dx, p.dxx, px, py, self.numerics.zero)

    def _binary_node(self, p: BinaryPartials, px: int, py: int) -> HessianNode:
        return HessianNode(p.dx, p.dxx, p.dxy, p.dy, p.dyy, px, py)

    # ---------------- accumulation ---------------- #
    def reverse_accumulate(self, seed=None, index: Optional[int] = None, *,
                           sparse: bool = False) -> Tuple[np.ndarray, np.ndarray]:
        """
        Edge-pushing reverse sweep.

        Parameters
        ----------
        seed : scalar, optional
            Adjoint of the starting node (default: one).
        index : int, optional
            Starting node (default: the last node recorded).
        sparse : bool, default False
            Keep the pair weights in a SymmSparseWeights store instead of a
            dense (index+1)² matrix. Same result, memory proportional to the
            live weights rather than the square of the tape length.

        Returns
        -------
        (gradient, hessian) : ndarray of shape (k,), ndarray of shape (k, k)
            with k = variable_count; the Hessian is symmetric.

        Raises
        ------
        TapeUsageError : the tape has no root variables.
        IndexError     : `index` does not refer to a derived node.
        """
        index = self._check_start(index)
        nodes = self._nodes
        k = self._variable_count
        dtype = self.numerics.dtype

        adjoint = self._new_adjoint(seed, index)
        if sparse:
            W = SymmSparseWeights(index + 1, dtype=dtype)
        else:
            W = DenseWeights(index + 1, dtype=dtype)

        for i in range(index, k - 1, -1):
            node = nodes[i]
            vbar = adjoint[i]

            pushing_stage(W, node, i)
            creating_stage(W, node, vbar)

            adjoint[node.px] += vbar * node.dx
            adjoint[node.py] += vbar * node.dy

        if sparse:
            logger.debug("sparse edge-pushing finished with %d non-zero weights", W.nnz())
        return adjoint[:k].copy(), W.to_dense(k)

    def hessian(self, seed=None, index: Optional[int] = None, *, sparse: bool = False) -> np.ndarray:
        """Hessian only; see reverse_accumulate."""
        return self.reverse_accumulate(seed, index, sparse=sparse)[1]

    # ---------------- custom ---------------- #
    def custom_operation(self, x: Variable, *args) -> Variable:
        """
        Record a custom primitive with its analytic derivatives.

            custom_operation(x, f, dfx, dfxx)
            custom_operation(x, y, f, dfx, dfxx, dfxy, dfy, dfyy)
        """
        if args and isinstance(args[0], Variable):
            y, f, dfx, dfxx, dfxy, dfy, dfyy = args
            return self._custom_binary(x, y, f, dfx, dfxx, dfxy, dfy, dfyy)
        f, dfx, dfxx = args
        return self._custom_unary(x, f, dfx, dfxx)

    def _custom_unary(self, x: Variable, f: Callable, dfx: Callable, dfxx: Callable) -> Variable:
        value = self.numerics.coerce(f(x.value))
        if not self.is_tracking:
            return Variable(len(self._nodes), value)
        return self._push_unary(UnaryPartials(value, dfx(x.value), dfxx(x.value)), x.index)

    def _custom_binary(self, x: Variable, y: Variable, f: Callable,
                       dfx: Callable, dfxx: Callable, dfxy: Callable,
                       dfy: Callable, dfyy: Callable) -> Variable:
        xv, yv = x.value, y.value
        value = self.numerics.coerce(f(xv, yv))
        if not self.is_tracking:
            return Variable(len(self._nodes), value)
        index = len(self._nodes)
        self._nodes.append(HessianNode(dfx(xv, yv), dfxx(xv, yv), dfxy(xv, yv),
                                       dfy(xv, yv), dfyy(xv, yv), x.index, y.index))
        return Variable(index, value)
