import pytest

from softmaxlib.nn import ShapeMismatchError, canonical_axis_index, coerce_2d, size_from_dim, size_to_dim


def test_coerce_2d_positive_axis():
    assert coerce_2d([2, 3, 4], 1) == (2, 12)


def test_coerce_2d_negative_axis():
    assert canonical_axis_index(-1, 3) == 2
    assert coerce_2d([2, 3, 4], -1) == (6, 4)


@pytest.mark.parametrize("axis,expected", [
    (0, (1, 24)),
    (2, (6, 4)),
    (3, (24, 1)),
    (-3, (1, 24)),
])
def test_coerce_2d_boundaries(axis, expected):
    assert coerce_2d((2, 3, 4), axis) == expected


def test_empty_products():
    assert size_to_dim((5, 7), 0) == 1
    assert size_from_dim((5, 7), 2) == 1
    assert coerce_2d((), 0) == (1, 1)


def test_zero_rows():
    assert coerce_2d((0, 5), 1) == (0, 5)
    assert coerce_2d((3, 0, 2), 1) == (3, 0)


@pytest.mark.parametrize("axis", [4, -4, 10])
def test_axis_out_of_range(axis):
    with pytest.raises(ShapeMismatchError):
        coerce_2d((2, 3, 4), axis)


def test_shape_mismatch_is_value_error():
    with pytest.raises(ValueError):
        canonical_axis_index(2, 1)
