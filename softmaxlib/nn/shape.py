import numpy as np


class ShapeMismatchError(ValueError):
    """
    Raised when an axis or buffer does not fit the declared shape.
    """
    pass


def canonical_axis_index(axis, ndim):
    """
    Resolve a signed axis against an array of rank `ndim`.

    :param axis: Signed axis, negative values count from the end
    :param ndim: Rank of the array
    :return: Axis in [0, ndim]
    """
    if axis < -ndim or axis > ndim:
        raise ShapeMismatchError(
            f"Axis {axis} is out of range for an array of rank {ndim}"
        )
    if axis < 0:
        return axis + ndim
    return axis


def size_to_dim(shape, k):
    # empty product is 1
    return int(np.prod(shape[:k], dtype=np.int64))


def size_from_dim(shape, k):
    return int(np.prod(shape[k:], dtype=np.int64))


def coerce_2d(shape, axis):
    """
    Split `shape` into the (N, D) view used by the softmax kernels.

    For shape [a_0, ..., a_{k-1}, a_k, ..., a_{n-1}] and canonical axis k,
    N = a_0 * ... * a_{k-1} and D = a_k * ... * a_{n-1}.

    :param shape: Sequence of dimension extents
    :param axis: Signed axis marking the N/D boundary
    :return: (N, D)
    """
    shape = tuple(shape)
    k = canonical_axis_index(axis, len(shape))
    return size_to_dim(shape, k), size_from_dim(shape, k)
