import numpy as np
import pytest

from aad_tape import GradientTape


def _primal(f, x0):
    """f(tape, xs).value on a tape that records nothing past the roots."""
    tape = GradientTape()
    xs = [tape.create_variable(v) for v in x0]
    tape.is_tracking = False
    return f(tape, xs).value


def _tape_gradient(f, x0):
    tape = GradientTape()
    xs = [tape.create_variable(v) for v in x0]
    out = f(tape, xs)
    return tape.reverse_accumulate(index=out.index)


def _fd_gradient(f, x0, h=1e-6):
    """Central differences of the primal."""
    x0 = np.asarray(x0, dtype=np.float64)
    g = np.zeros_like(x0)
    for j in range(x0.size):
        e = np.zeros_like(x0)
        e[j] = h
        g[j] = (_primal(f, x0 + e) - _primal(f, x0 - e)) / (2 * h)
    return g


def _fd_hessian(f, x0, h=1e-5):
    """Central differences of the first-order tape gradient, symmetrised."""
    x0 = np.asarray(x0, dtype=np.float64)
    n = x0.size
    H = np.zeros((n, n))
    for j in range(n):
        e = np.zeros_like(x0)
        e[j] = h
        H[:, j] = (_tape_gradient(f, x0 + e) - _tape_gradient(f, x0 - e)) / (2 * h)
    return 0.5 * (H + H.T)


@pytest.fixture
def primal():
    return _primal


@pytest.fixture
def fd_gradient():
    return _fd_gradient


@pytest.fixture
def fd_hessian():
    return _fd_hessian


@pytest.fixture
def rosenbrock():
    """(1 - x)² + 100 (y - x²)² recorded with tape operations."""

    def f(t, xs):
        x, y = xs
        a = t.subtract(1.0, x)
        b = t.subtract(y, t.multiply(x, x))
        return t.add(t.multiply(a, a), t.multiply(100.0, t.multiply(b, b)))

    return f
