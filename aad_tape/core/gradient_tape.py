# aad_tape/core/gradient_tape.py
from __future__ import annotations
from typing import Callable, Optional

import numpy as np

from ..ops import UnaryPartials, BinaryPartials
from .node import GradientNode
from .tape import Tape
from .var import Variable


class GradientTape(Tape):
    """
    First-order reverse-mode tape.

    Nodes keep only first partials and parent indices; `reverse_accumulate`
    is a single linear backward sweep.

        tape = GradientTape()
        x = tape.create_variable(3.0)
        y = tape.create_variable(4.0)
        tape.multiply(x, y)
        tape.reverse_accumulate()   # -> array([4., 3.])
    """

    _order = 1

    def _root_node(self, index: int) -> GradientNode:
        return GradientNode.root(index, self.numerics.zero)

    def _unary_node(self, p: UnaryPartials, px: int, py: int) -> GradientNode:
        return GradientNode.unary(p.dx, px, py, self.numerics.zero)

    def _binary_node(self, p: BinaryPartials, px: int, py: int) -> GradientNode:
        return GradientNode(p.dx, p.dy, px, py)

    def reverse_accumulate(self, seed=None, index: Optional[int] = None) -> np.ndarray:
        """
        Reverse accumulation over the tape.

        Args:
            seed: adjoint of the starting node (default: one).
            index: starting node (default: the last node recorded).

        Returns:
            The gradient with respect to the root variables, in creation order.

        Raises:
            TapeUsageError: the tape has no root variables.
            IndexError: `index` does not refer to a derived node.
        """
        return self.gradient(seed, index)

    def custom_operation(self, x: Variable, *args) -> Variable:
        """
        Record a custom primitive.

            custom_operation(x, f, dfx)              unary:  f(x), f'(x)
            custom_operation(x, y, f, dfx, dfy)      binary: f(x, y), ∂f/∂x, ∂f/∂y
        """
        if args and isinstance(args[0], Variable):
            y, f, dfx, dfy = args
            return self._custom_binary(x, y, f, dfx, dfy)
        f, dfx = args
        return self._custom_unary(x, f, dfx)

    def _custom_unary(self, x: Variable, f: Callable, dfx: Callable) -> Variable:
        value = self.numerics.coerce(f(x.value))
        if not self.is_tracking:
            return Variable(len(self._nodes), value)
        return self._push_unary(UnaryPartials(value, dfx(x.value)), x.index)

    def _custom_binary(self, x: Variable, y: Variable, f: Callable, dfx: Callable, dfy: Callable) -> Variable:
        value = self.numerics.coerce(f(x.value, y.value))
        if not self.is_tracking:
            return Variable(len(self._nodes), value)
        index = len(self._nodes)
        self._nodes.append(GradientNode(dfx(x.value, y.value), dfy(x.value, y.value), x.index, y.index))
        return Variable(index, value)
