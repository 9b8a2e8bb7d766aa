"""Every tape operation checked against finite differences on both tapes."""

import numpy as np
import pytest

from aad_tape import GradientTape, HessianTape


def _of_product(name):
    """name(x * y): the product makes every rule feed a cross derivative."""
    return lambda t, xs: getattr(t, name)(t.multiply(xs[0], xs[1]))


# (operation, point u where the unary op is evaluated)
UNARY = [
    ("negate", 0.8),
    ("exp", 0.7),
    ("exp2", 0.7),
    ("exp10", 0.4),
    ("ln", 1.3),
    ("log2", 1.3),
    ("log10", 1.3),
    ("sqrt", 2.0),
    ("cbrt", 2.0),
    ("sin", 0.4),
    ("cos", 0.4),
    ("tan", 0.4),
    ("asin", 0.3),
    ("acos", 0.3),
    ("atan", 0.7),
    ("sinh", 0.6),
    ("cosh", 0.6),
    ("tanh", 0.6),
    ("asinh", 0.5),
    ("acosh", 1.5),
    ("atanh", 0.4),
    ("erf", 0.6),
    ("norm_cdf", 0.3),
]

BINARY = [
    ("add_vv", lambda t, xs: t.add(xs[0], xs[1]), [1.2, 0.7]),
    ("add_vc", lambda t, xs: t.add(t.sin(xs[0]), 2.0), [1.2]),
    ("add_cv", lambda t, xs: t.add(2.0, t.sin(xs[0])), [1.2]),
    ("sub_vv", lambda t, xs: t.subtract(t.exp(xs[0]), xs[1]), [0.3, 0.7]),
    ("sub_cv", lambda t, xs: t.subtract(1.0, t.exp(xs[0])), [0.3]),
    ("mul_vv", lambda t, xs: t.multiply(xs[0], xs[1]), [1.5, -2.0]),
    ("mul_same", lambda t, xs: t.multiply(xs[0], xs[0]), [1.5]),
    ("mul_vc", lambda t, xs: t.multiply(t.sin(xs[0]), 3.0), [0.9]),
    ("div_vv", lambda t, xs: t.divide(xs[0], xs[1]), [6.0, 2.0]),
    ("div_vc", lambda t, xs: t.divide(t.exp(xs[0]), 4.0), [0.5]),
    ("div_cv", lambda t, xs: t.divide(1.0, xs[0]), [1.7]),
    ("mod_vv", lambda t, xs: t.modulo(t.multiply(xs[0], xs[1]), xs[1]), [2.65, 2.0]),
    ("mod_vc", lambda t, xs: t.modulo(t.multiply(xs[0], xs[0]), 2.0), [2.3]),
    ("mod_cv", lambda t, xs: t.modulo(7.5, xs[0]), [2.0]),
    ("log_vv", lambda t, xs: t.log(xs[0], xs[1]), [5.0, 3.0]),
    ("pow_vv", lambda t, xs: t.pow(xs[0], xs[1]), [1.5, 2.3]),
    ("pow_vc", lambda t, xs: t.pow(t.multiply(xs[0], xs[1]), 3.0), [1.2, 0.8]),
    ("pow_cv", lambda t, xs: t.pow(2.0, t.multiply(xs[0], xs[1])), [1.2, 0.8]),
    ("root_vv", lambda t, xs: t.root(xs[0], xs[1]), [8.0, 3.0]),
    ("atan2_vv", lambda t, xs: t.atan2(xs[0], xs[1]), [0.7, 1.2]),
    ("atan2_mixed", lambda t, xs: t.atan2(t.multiply(xs[0], xs[1]), xs[0]), [0.7, -1.2]),
]

CASES = (
    [pytest.param(_of_product(name), [u / 2.0, 2.0], id=name) for name, u in UNARY]
    + [pytest.param(f, x0, id=name) for name, f, x0 in BINARY]
)


@pytest.mark.parametrize("f, x0", CASES)
def test_gradient_matches_finite_differences(f, x0, fd_gradient):
    tape = GradientTape()
    xs = [tape.create_variable(v) for v in x0]
    out = f(tape, xs)
    g = tape.reverse_accumulate(index=out.index)
    np.testing.assert_allclose(g, fd_gradient(f, x0), rtol=1e-6, atol=1e-7)


@pytest.mark.parametrize("f, x0", CASES)
def test_hessian_matches_finite_differences(f, x0, fd_gradient, fd_hessian):
    tape = HessianTape()
    xs = [tape.create_variable(v) for v in x0]
    out = f(tape, xs)
    g, H = tape.reverse_accumulate(index=out.index)
    np.testing.assert_allclose(g, fd_gradient(f, x0), rtol=1e-6, atol=1e-7)
    np.testing.assert_allclose(H, fd_hessian(f, x0), rtol=1e-5, atol=1e-6)
    np.testing.assert_array_equal(H, H.T)


@pytest.mark.parametrize("f, x0", CASES)
def test_untracked_primal_matches_tracked(f, x0):
    tracked = GradientTape()
    out = f(tracked, [tracked.create_variable(v) for v in x0])

    quiet = HessianTape()
    xs = [quiet.create_variable(v) for v in x0]
    quiet.is_tracking = False
    value = f(quiet, xs).value

    assert quiet.node_count == len(x0)
    np.testing.assert_allclose(value, out.value, rtol=1e-14)


def test_modulo_follows_divisor_sign():
    tape = GradientTape()
    x = tape.create_variable(-7.0)
    y = tape.create_variable(3.0)
    r = tape.modulo(x, y)
    assert r.value == 2.0
    # d/dy (x - y*floor(x/y)) = -floor(-7/3) = 3
    np.testing.assert_allclose(tape.reverse_accumulate(), [1.0, 3.0])


def test_both_constant_operands_rejected():
    tape = GradientTape()
    tape.create_variable(1.0)
    with pytest.raises(TypeError):
        tape.add(1.0, 2.0)
    with pytest.raises(TypeError):
        tape.pow(2.0, 3.0)
    assert tape.node_count == 1


def test_untracked_pow_with_constant_base_points_at_next_slot():
    tape = GradientTape()
    n = tape.create_variable(3.0)
    tape.is_tracking = False
    out = tape.pow(2.0, n)
    assert out.index == tape.node_count
    assert out.value == 8.0
