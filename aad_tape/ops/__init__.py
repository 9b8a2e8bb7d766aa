# aad_tape/ops/__init__.py

# Derivative rules shared by GradientTape and HessianTape.
from .arithmetic import UnaryPartials, BinaryPartials
from .arithmetic import add, sub, mul, div, mod, neg
from .transcendental import (
    exp, exp2, exp10,
    ln, log, log2, log10,
    pow, pow_const_exponent, pow_const_base,
    sqrt, cbrt, root,
)
from .trigonometric import (
    sin, cos, tan, asin, acos, atan, atan2,
    sinh, cosh, tanh, asinh, acosh, atanh,
)
from .special import erf, norm_cdf

__all__ = [
    "UnaryPartials", "BinaryPartials",
    "add", "sub", "mul", "div", "mod", "neg",
    "exp", "exp2", "exp10",
    "ln", "log", "log2", "log10",
    "pow", "pow_const_exponent", "pow_const_base",
    "sqrt", "cbrt", "root",
    "sin", "cos", "tan", "asin", "acos", "atan", "atan2",
    "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    "erf", "norm_cdf",
]
