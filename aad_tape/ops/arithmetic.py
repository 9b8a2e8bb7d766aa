# aad_tape/ops/arithmetic.py
"""
Closed-form local derivatives of the arithmetic primitives.

Every rule takes the numeric trait first, then the primal operand values,
and returns the primal result together with its local partials:

    UnaryPartials(value, dx, dxx)
    BinaryPartials(value, dx, dxx, dxy, dy, dyy)

`order=0` asks for the primal value only (the partial fields stay None);
any other order fills every field. Tapes decide which fields to keep.
"""
from typing import Any, NamedTuple


class UnaryPartials(NamedTuple):
    value: Any
    dx: Any = None
    dxx: Any = None


class BinaryPartials(NamedTuple):
    value: Any
    dx: Any = None
    dxx: Any = None
    dxy: Any = None
    dy: Any = None
    dyy: Any = None

    def left(self) -> UnaryPartials:
        """Partials w.r.t. the left operand when the right one is a constant."""
        return UnaryPartials(self.value, self.dx, self.dxx)

    def right(self) -> UnaryPartials:
        """Partials w.r.t. the right operand when the left one is a constant."""
        return UnaryPartials(self.value, self.dy, self.dyy)


def add(nm, x, y, order=2):
    if order == 0:
        return BinaryPartials(x + y)
    return BinaryPartials(x + y, nm.one, nm.zero, nm.zero, nm.one, nm.zero)


def sub(nm, x, y, order=2):
    if order == 0:
        return BinaryPartials(x - y)
    return BinaryPartials(x - y, nm.one, nm.zero, nm.zero, -nm.one, nm.zero)


def mul(nm, x, y, order=2):
    if order == 0:
        return BinaryPartials(x * y)
    return BinaryPartials(x * y, y, nm.zero, nm.one, x, nm.zero)


def div(nm, x, y, order=2):
    u = nm.one / y
    if order == 0:
        return BinaryPartials(x * u)
    dxy = -u * u
    return BinaryPartials(x * u, u, nm.zero, dxy, x * dxy, -2.0 * u * x * dxy)


def mod(nm, x, y, order=2):
    """Floored remainder (sign follows the divisor); real numbers only."""
    r = x % y
    if order == 0:
        return BinaryPartials(r)
    return BinaryPartials(r, nm.one, nm.zero, nm.zero, -nm.floor(x / y), nm.zero)


def neg(nm, x, order=2):
    if order == 0:
        return UnaryPartials(-x)
    return UnaryPartials(-x, -nm.one, nm.zero)
