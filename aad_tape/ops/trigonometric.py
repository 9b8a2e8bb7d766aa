# aad_tape/ops/trigonometric.py
# Circular and hyperbolic functions and their inverses.
from .arithmetic import UnaryPartials, BinaryPartials


def sin(nm, x, order=2):
    s = nm.sin(x)
    if order == 0:
        return UnaryPartials(s)
    return UnaryPartials(s, nm.cos(x), -s)


def cos(nm, x, order=2):
    c = nm.cos(x)
    if order == 0:
        return UnaryPartials(c)
    return UnaryPartials(c, -nm.sin(x), -c)


def tan(nm, x, order=2):
    t = nm.tan(x)
    if order == 0:
        return UnaryPartials(t)
    sec = nm.one / nm.cos(x)
    df = sec * sec
    return UnaryPartials(t, df, 2.0 * df * t)


def asin(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.asin(x))
    u = nm.one - x * x
    return UnaryPartials(nm.asin(x), nm.one / nm.sqrt(u), x * nm.pow(u, -1.5))


def acos(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.acos(x))
    u = nm.one - x * x
    return UnaryPartials(nm.acos(x), -nm.one / nm.sqrt(u), -x * nm.pow(u, -1.5))


def atan(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.atan(x))
    df = nm.one / (nm.one + x * x)
    return UnaryPartials(nm.atan(x), df, -2.0 * df * x * df)


def atan2(nm, y, x, order=2):
    """atan2(y, x); the left operand is `y`. Real numbers only."""
    if order == 0:
        return BinaryPartials(nm.atan2(y, x))
    u = y * y
    v = x * x
    a = nm.one / (u + v)
    b = a * a
    dfyy = -2.0 * x * b * y
    return BinaryPartials(nm.atan2(y, x), x * a, dfyy, (u - v) * b, -y * a, -dfyy)


def sinh(nm, x, order=2):
    s = nm.sinh(x)
    if order == 0:
        return UnaryPartials(s)
    return UnaryPartials(s, nm.cosh(x), s)


def cosh(nm, x, order=2):
    c = nm.cosh(x)
    if order == 0:
        return UnaryPartials(c)
    return UnaryPartials(c, nm.sinh(x), c)


def tanh(nm, x, order=2):
    t = nm.tanh(x)
    if order == 0:
        return UnaryPartials(t)
    u = nm.one / nm.cosh(x)
    df = u * u
    return UnaryPartials(t, df, -2.0 * df * t)


def asinh(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.asinh(x))
    u = nm.one + x * x
    return UnaryPartials(nm.asinh(x), nm.one / nm.sqrt(u), -x * nm.pow(u, -1.5))


def acosh(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.acosh(x))
    u = x - nm.one
    v = x + nm.one
    return UnaryPartials(
        nm.acosh(x),
        nm.one / (nm.sqrt(u) * nm.sqrt(v)),
        -x * nm.pow(u, -1.5) * nm.pow(v, -1.5),
    )


def atanh(nm, x, order=2):
    if order == 0:
        return UnaryPartials(nm.atanh(x))
    df = nm.one / (nm.one - x * x)
    return UnaryPartials(nm.atanh(x), df, 2.0 * df * x * df)
