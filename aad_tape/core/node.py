# aad_tape/core/node.py
from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class GradientNode:
    """
    One recorded operation on a GradientTape.

    Attributes
    ----------
    dx : Any   ∂out/∂(left operand)
    dy : Any   ∂out/∂(right operand); zero for unary and constant-operand ops
    px : int   arena index of the left parent
    py : int   arena index of the right parent

    Roots point both parents at themselves. Unary nodes point `py` at their
    own slot; with `dy == 0` that edge never contributes.
    """
    dx: Any
    dy: Any
    px: int
    py: int

    LOG_TEMPLATE = "%s: %d\n    Weights: [%s, %s]\n    Parents: [%d, %d]"

    @classmethod
    def root(cls, index: int, zero) -> "GradientNode":
        return cls(zero, zero, index, index)

    @classmethod
    def unary(cls, dx, px: int, py: int, zero) -> "GradientNode":
        return cls(dx, zero, px, py)

    def log_args(self) -> Tuple:
        return (self.dx, self.dy, self.px, self.py)


@dataclass(frozen=True)
class HessianNode:
    """
    One recorded operation on a HessianTape: first partials plus the second
    partials edge-pushing needs (`dxx`, `dxy`, `dyy`).
    """
    dx: Any
    dxx: Any
    dxy: Any
    dy: Any
    dyy: Any
    px: int
    py: int

    LOG_TEMPLATE = (
        "%s: %d\n"
        "    Weights: [[%s, %s, %s],\n"
        "              [%s, %s, %s]]\n"
        "    Parents: [%d, %d]"
    )

    @classmethod
    def root(cls, index: int, zero) -> "HessianNode":
        return cls(zero, zero, zero, zero, zero, index, index)

    @classmethod
    def unary(cls, dx, dxx, px: int, py: int, zero) -> "HessianNode":
        return cls(dx, dxx, zero, zero, zero, px, py)

    def log_args(self) -> Tuple:
        return (self.dx, self.dxx, self.dxy, self.dy, self.dyy, self.dxy, self.px, self.py)
