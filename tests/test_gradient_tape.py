import numpy as np
import pytest

from aad_tape import GradientTape, TapeUsageError, Variable
from aad_tape.core.node import GradientNode


def test_product_gradient():
    tape = GradientTape()
    x = tape.create_variable(3.0)
    y = tape.create_variable(4.0)
    out = tape.multiply(x, y)
    assert out.value == 12.0
    np.testing.assert_allclose(tape.reverse_accumulate(), [4.0, 3.0])


def test_sine_gradient_at_zero():
    tape = GradientTape()
    x = tape.create_variable(0.0)
    tape.sin(x)
    np.testing.assert_allclose(tape.reverse_accumulate(), [1.0])


def test_quotient_value_and_gradient():
    tape = GradientTape()
    x = tape.create_variable(6.0)
    y = tape.create_variable(2.0)
    out = tape.divide(x, y)
    assert out.value == 3.0
    np.testing.assert_allclose(tape.reverse_accumulate(), [0.5, -1.5])


def test_square_uses_both_parent_slots():
    tape = GradientTape()
    x = tape.create_variable(1.5)
    tape.multiply(x, x)
    node = tape.nodes[-1]
    assert node.px == node.py == 0
    np.testing.assert_allclose(tape.reverse_accumulate(), [3.0])


def test_fan_out_accumulates(rosenbrock):
    tape = GradientTape()
    xs = [tape.create_variable(v) for v in (-1.2, 1.0)]
    rosenbrock(tape, xs)
    x, y = -1.2, 1.0
    expected = [-2 * (1 - x) - 400 * x * (y - x * x), 200 * (y - x * x)]
    np.testing.assert_allclose(tape.reverse_accumulate(), expected)


# ---------------- node layout ---------------- #
def test_roots_point_at_themselves():
    tape = GradientTape()
    for v in (1.0, 2.0, 3.0):
        tape.create_variable(v)
    for i, node in enumerate(tape.nodes):
        assert node == GradientNode(0.0, 0.0, i, i)
    assert tape.variable_count == 3


def test_unary_node_spare_parent_is_own_slot():
    tape = GradientTape()
    x = tape.create_variable(0.5)
    out = tape.exp(x)
    node = tape.nodes[out.index]
    assert (node.px, node.py) == (x.index, out.index)
    assert node.dy == 0.0


def test_constant_operand_records_one_partial():
    tape = GradientTape()
    x = tape.create_variable(2.0)
    left = tape.subtract(x, 5.0)
    right = tape.subtract(5.0, x)
    assert tape.nodes[left.index].dx == 1.0
    assert tape.nodes[right.index].dx == -1.0
    assert tape.nodes[right.index].py == right.index


def test_parents_never_point_forward(rosenbrock):
    tape = GradientTape()
    rosenbrock(tape, [tape.create_variable(v) for v in (0.3, 0.4)])
    for i, node in enumerate(tape.nodes):
        assert node.px <= i and node.py <= i


def test_each_operation_appends_one_node():
    tape = GradientTape()
    x = tape.create_variable(0.3)
    y = tape.create_variable(0.4)
    u = tape.add(x, y)
    v = tape.sin(u)
    w = tape.multiply(v, 2.0)
    assert [u.index, v.index, w.index] == [2, 3, 4]
    assert tape.node_count == 5


# ---------------- accumulation options ---------------- #
def test_start_from_intermediate_node():
    tape = GradientTape()
    x = tape.create_variable(3.0)
    y = tape.create_variable(4.0)
    u = tape.multiply(x, y)
    tape.sin(u)
    np.testing.assert_allclose(tape.reverse_accumulate(index=u.index), [4.0, 3.0])


def test_seed_scales_gradient():
    tape = GradientTape()
    x = tape.create_variable(3.0)
    y = tape.create_variable(4.0)
    tape.multiply(x, y)
    np.testing.assert_allclose(tape.reverse_accumulate(seed=2.0), [8.0, 6.0])


def test_accumulation_leaves_tape_intact():
    tape = GradientTape()
    x = tape.create_variable(3.0)
    tape.exp(x)
    first = tape.reverse_accumulate()
    second = tape.reverse_accumulate()
    np.testing.assert_array_equal(first, second)
    assert tape.node_count == 2


def test_unused_root_has_zero_gradient():
    tape = GradientTape()
    x = tape.create_variable(3.0)
    tape.create_variable(4.0)
    tape.sin(x)
    np.testing.assert_allclose(tape.reverse_accumulate(), [np.cos(3.0), 0.0])


# ---------------- errors ---------------- #
def test_empty_tape_raises():
    with pytest.raises(TapeUsageError):
        GradientTape().reverse_accumulate()


def test_roots_only_raises_index_error():
    tape = GradientTape()
    tape.create_variable(1.0)
    with pytest.raises(IndexError):
        tape.reverse_accumulate()


@pytest.mark.parametrize("index", [-1, 0, 1, 4])
def test_start_index_out_of_range(index):
    tape = GradientTape()
    x = tape.create_variable(1.0)
    y = tape.create_variable(2.0)
    tape.add(x, y)
    with pytest.raises(IndexError):
        tape.reverse_accumulate(index=index)


def test_root_after_operation_rejected():
    tape = GradientTape()
    x = tape.create_variable(1.0)
    tape.sin(x)
    with pytest.raises(TapeUsageError):
        tape.create_variable(2.0)
    assert tape.variable_count == 1


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        GradientTape(-1)


# ---------------- tracking ---------------- #
def test_untracked_operations_append_nothing():
    tape = GradientTape()
    x = tape.create_variable(0.5)
    tape.is_tracking = False
    for _ in range(5):
        out = tape.sin(x)
        assert out.index == tape.node_count == 1
    np.testing.assert_allclose(out.value, np.sin(0.5))


def test_tape_constructed_without_tracking():
    tape = GradientTape(is_tracking=False)
    x = tape.create_variable(2.0)
    y = tape.create_variable(3.0)
    assert tape.multiply(x, y).value == 6.0
    assert tape.node_count == 2


# ---------------- custom operations ---------------- #
def test_custom_unary_operation():
    tape = GradientTape()
    x = tape.create_variable(2.0)
    out = tape.custom_operation(x, lambda v: v ** 3, lambda v: 3 * v ** 2)
    assert out.value == 8.0
    np.testing.assert_allclose(tape.reverse_accumulate(), [12.0])


def test_custom_binary_operation():
    tape = GradientTape()
    x = tape.create_variable(2.0)
    y = tape.create_variable(5.0)
    tape.custom_operation(
        x, y,
        lambda a, b: a * a * b,
        lambda a, b: 2 * a * b,
        lambda a, b: a * a,
    )
    np.testing.assert_allclose(tape.reverse_accumulate(), [20.0, 4.0])


# ---------------- bookkeeping ---------------- #
def test_reset_clears_roots_and_nodes():
    tape = GradientTape()
    x = tape.create_variable(1.0)
    tape.exp(x)
    tape.reset()
    assert tape.node_count == tape.variable_count == 0
    tape.create_variable(2.0)
    assert tape.variable_count == 1


def test_repr_mentions_counts():
    tape = GradientTape()
    tape.create_variable(1.0)
    assert repr(tape) == "GradientTape(nodes=1, roots=1, numerics=real, tracking=True)"


def test_variable_is_a_value_object():
    v = Variable(3, 1.5)
    assert v == Variable(3, 1.5)
    assert repr(v) == "Variable(3, 1.5)"
    assert str(v) == "1.5"
    with pytest.raises(AttributeError):
        v.index = 4
