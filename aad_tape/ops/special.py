# aad_tape/ops/special.py
import numpy as np
from .arithmetic import UnaryPartials

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)


def erf(nm, x, order=2):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    erf'(x)  = (2/√π) e^(-x²)
    erf''(x) = -2x erf'(x)
    """
    e = nm.erf(x)
    if order == 0:
        return UnaryPartials(e)
    df = TWO_OVER_SQRT_PI * nm.exp(-x * x)
    return UnaryPartials(e, df, -2.0 * x * df)


def norm_cdf(nm, x, order=2):
    """
    Standard normal CDF N(x); local partials are the density and its slope:
    N'(x) = phi(x), N''(x) = -x phi(x). Real numbers only.
    """
    val = nm.norm_cdf(x)
    if order == 0:
        return UnaryPartials(val)
    pdf = nm.norm_pdf(x)
    return UnaryPartials(val, pdf, -x * pdf)
