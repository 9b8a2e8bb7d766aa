# aad_tape/core/numerics.py
"""
Number representations the tapes can be parameterized over.

A `Numerics` object supplies the primal arithmetic type (`dtype`, `coerce`,
`zero`, `one`) and the elementary functions the derivative rules in
`aad_tape.ops` are written against. The tapes never call numpy directly for
primal values; swapping `REAL` for `COMPLEX` is enough to differentiate
holomorphic expressions of complex numbers with the same tape code.

Exports:
    Numerics        : abstract numeric trait
    RealNumerics    : float64 implementation (numpy / scipy.special)
    ComplexNumerics : complex128 implementation
    REAL, COMPLEX   : shared singletons
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from scipy import special

SQRT_TWO_PI = np.sqrt(2.0 * np.pi)


class Numerics(ABC):
    """
    Abstract numeric trait.

    Attributes
    ----------
    name    : str        Short label used in reprs and log lines.
    dtype   : np.dtype   Buffer dtype for adjoints and Hessian weights.
    is_real : bool       Whether real-only functions (floor, atan2, norm_cdf) exist.
    """

    name: str = "abstract"
    dtype: np.dtype = np.dtype(np.float64)
    is_real: bool = True

    def coerce(self, x: Any):
        """Convert a Python/numpy scalar into this representation."""
        return self.dtype.type(x)

    @property
    def zero(self):
        return self.dtype.type(0)

    @property
    def one(self):
        return self.dtype.type(1)

    @property
    def ln2(self):
        return self.dtype.type(np.log(2.0))

    @property
    def ln10(self):
        return self.dtype.type(np.log(10.0))

    # ---------------- exponential / logarithmic ---------------- #
    def exp(self, x):
        return np.exp(x)

    def exp2(self, x):
        return np.exp(x * self.ln2)

    def exp10(self, x):
        return np.exp(x * self.ln10)

    def ln(self, x):
        return np.log(x)

    def log(self, x, b):
        """Logarithm of `x` in base `b`."""
        return np.log(x) / np.log(b)

    def log2(self, x):
        return np.log(x) / self.ln2

    def log10(self, x):
        return np.log(x) / self.ln10

    # ---------------- power / root ---------------- #
    def pow(self, x, n):
        return np.power(x, n)

    def sqrt(self, x):
        return np.sqrt(x)

    @abstractmethod
    def cbrt(self, x):
        ...

    def root(self, x, n):
        """The `n`-th root of `x`, i.e. x**(1/n)."""
        return np.power(x, self.one / n)

    # ---------------- trigonometric ---------------- #
    def sin(self, x):
        return np.sin(x)

    def cos(self, x):
        return np.cos(x)

    def tan(self, x):
        return np.tan(x)

    def asin(self, x):
        return np.arcsin(x)

    def acos(self, x):
        return np.arccos(x)

    def atan(self, x):
        return np.arctan(x)

    # ---------------- hyperbolic ---------------- #
    def sinh(self, x):
        return np.sinh(x)

    def cosh(self, x):
        return np.cosh(x)

    def tanh(self, x):
        return np.tanh(x)

    def asinh(self, x):
        return np.arcsinh(x)

    def acosh(self, x):
        return np.arccosh(x)

    def atanh(self, x):
        return np.arctanh(x)

    # ---------------- special ---------------- #
    def erf(self, x):
        return self.coerce(special.erf(x))

    # Real-only functions; complex representations raise TypeError.
    @abstractmethod
    def floor(self, x):
        ...

    @abstractmethod
    def atan2(self, y, x):
        ...

    @abstractmethod
    def norm_cdf(self, x):
        ...

    @abstractmethod
    def norm_pdf(self, x):
        ...

    def __repr__(self):
        return f"{type(self).__name__}({self.name})"


class RealNumerics(Numerics):
    """float64 numbers; elementary functions from numpy and scipy.special."""

    name = "real"
    dtype = np.dtype(np.float64)
    is_real = True

    def cbrt(self, x):
        return np.cbrt(x)

    def floor(self, x):
        return np.floor(x)

    def atan2(self, y, x):
        return np.arctan2(y, x)

    def norm_cdf(self, x):
        return self.coerce(special.ndtr(x))

    def norm_pdf(self, x):
        return np.exp(-0.5 * x * x) / SQRT_TWO_PI


class ComplexNumerics(Numerics):
    """complex128 numbers; principal branches throughout."""

    name = "complex"
    dtype = np.dtype(np.complex128)
    is_real = False

    def cbrt(self, x):
        # np.cbrt has no complex loop
        return np.power(x, self.one / 3.0)

    def _real_only(self, fname: str):
        raise TypeError(f"{fname} is only defined for real numbers")

    def floor(self, x):
        self._real_only("floor")

    def atan2(self, y, x):
        self._real_only("atan2")

    def norm_cdf(self, x):
        self._real_only("norm_cdf")

    def norm_pdf(self, x):
        self._real_only("norm_pdf")


REAL = RealNumerics()
COMPLEX = ComplexNumerics()
