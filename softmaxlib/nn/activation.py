import numpy as np

from .cost import cost_inference_for_softmax
from .math import CPUContext
from .scratch import ScratchBuffer
from .shape import ShapeMismatchError, coerce_2d


def softmax_cpu(context, N, D, X, Y, scale, sum_multiplier, logarithmic, rowmax):
    """
    Row-wise softmax of the (N, D) matrix X into Y.

    :param X: Flat input buffer of at least N * D elements
    :param Y: Flat output buffer of at least N * D elements
    :param scale: Scratch of length N, receives the row sums of exp(x - max)
    :param sum_multiplier: Ones-vector of length D
    :param logarithmic: Write log-softmax instead of softmax
    :param rowmax: Scratch of length N, receives the row maxima
    """
    context.rowwise_max(N, D, X, rowmax)
    # Y holds X - max(X) until it is exponentiated
    context.copy(N * D, X, Y)
    context.gemm(False, False, N, D, 1, -1.0, rowmax, sum_multiplier, 1.0, Y)
    context.exp(N * D, Y, Y)
    context.gemv(False, N, D, 1.0, Y, sum_multiplier, 0.0, scale)

    y = Y[:N * D].reshape(N, D)
    if not logarithmic:
        y /= scale[:N, None]
    else:
        context.log(N, scale, scale)
        np.subtract(X[:N * D].reshape(N, D), rowmax[:N, None], out=y)
        y -= scale[:N, None]


def _output_like(context, X, out, inputs=()):
    if out is None:
        return context.empty_like(X)
    for array in (X,) + tuple(inputs):
        if np.shares_memory(out, array):
            raise ValueError("Output must not share memory with an input")
    if out.size != X.size:
        raise ShapeMismatchError(
            f"Output has {out.size} elements, expected {X.size}"
        )
    if out.dtype != context.dtype or not out.flags.c_contiguous:
        raise ValueError(f"Output must be a contiguous {context.dtype} array")
    return out.reshape(X.shape)


class Softmax:
    """
    Softmax over the 2D coercion of an n-dimensional array.

    An input of shape [a_0, ..., a_{k-1}, a_k, ..., a_{n-1}], with k the
    canonical `axis`, is treated as an (N, D) matrix with
    N = a_0 * ... * a_{k-1} and D = a_k * ... * a_{n-1}. Each of the N rows is
    normalized so its D elements lie in (0, 1) and sum to 1:

        softmax(x_i) = exp(x_i - max(x)) / sum_j exp(x_j - max(x))

    With the default axis=1, a_0 is the batch size and the remaining
    dimensions are flattened into the feature dimension.
    """
    def __init__(self, axis=1, context=None, logarithmic=False):
        """
        :param axis: Axis of the input when coerced to a 2D matrix (default: 1)
        :param context: CPUContext providing buffers and primitives (default: float32)
        :param logarithmic: Compute log-softmax instead of softmax
        """
        self.axis = axis
        self.context = context if context is not None else CPUContext()
        self.logarithmic = logarithmic

        self.scale = ScratchBuffer("scale", self.context)
        self.rowmax = ScratchBuffer("rowmax", self.context)
        self.sum_multiplier = ScratchBuffer("sum_multiplier", self.context)

        self.gradient = SoftmaxGradient(axis, self.context)
        self.Y = None

    @classmethod
    def from_config(cls, config):
        """
        :param config: dict with optional "axis", "logarithmic", "dtype", "verbose" keys
        """
        return cls(
            axis=config.get("axis", 1),
            context=CPUContext.from_config(config),
            logarithmic=config.get("logarithmic", False)
        )

    def forward(self, X, out=None):
        """
        :param X: Input array (*), coerced to (N, D) at `axis`
        :param out: Optional preallocated output with X's element count
        :return: Softmax output Y with the same shape as X
        """
        X = self.context.as_buffer(X)
        N, D = coerce_2d(X.shape, self.axis)
        Y = _output_like(self.context, X, out)
        self.Y = Y
        if N == 0 or D == 0:
            return Y

        self.scale.resize(N)
        self.rowmax.resize(N)
        self.sum_multiplier.resize_ones(D)

        softmax_cpu(
            self.context,
            N,
            D,
            X.reshape(-1),
            Y.reshape(-1),
            self.scale.data,
            self.sum_multiplier.data,
            self.logarithmic,
            self.rowmax.data
        )
        return Y

    def backward(self, dLdY):
        """
        :param dLdY: Gradient of loss wrt the last forward output
        :return: Gradient of loss wrt the last forward input
        """
        if self.Y is None:
            raise ValueError("forward must be called before backward")
        if self.logarithmic:
            raise ValueError("backward is not available for log-softmax")
        self.gradient.axis = self.axis
        return self.gradient.backward(self.Y, dLdY)

    def cost(self, shape):
        return cost_inference_for_softmax([shape], self.context.itemsize)


class SoftmaxGradient:
    """
    Gradient of Softmax given its output Y and the upstream gradient dY.

    Per row, dx = y * (dy - dot(dy, y)), the Jacobian-vector product of
    softmax since dy_j/dx_i = y_i * (delta_ij - y_j).
    """
    def __init__(self, axis=1, context=None):
        """
        :param axis: Axis used by the matching forward pass (default: 1)
        :param context: CPUContext providing buffers and primitives (default: float32)
        """
        self.axis = axis
        self.context = context if context is not None else CPUContext()

        self.scale = ScratchBuffer("scale", self.context)
        self.sum_multiplier = ScratchBuffer("sum_multiplier", self.context)

    @classmethod
    def from_config(cls, config):
        return cls(axis=config.get("axis", 1), context=CPUContext.from_config(config))

    def backward(self, Y, dY, out=None):
        """
        :param Y: Softmax output (*)
        :param dY: Gradient of loss wrt Y, same element count as Y
        :param out: Optional preallocated output with Y's element count
        :return: Gradient of loss wrt the softmax input, same shape as Y
        """
        context = self.context
        Y = context.as_buffer(Y)
        dY = context.as_buffer(dY)
        if dY.size != Y.size:
            raise ShapeMismatchError(
                f"dY has {dY.size} elements, expected {Y.size}"
            )
        N, D = coerce_2d(Y.shape, self.axis)
        dX = _output_like(context, Y, out, (dY,))
        if N == 0 or D == 0:
            return dX

        self.scale.resize(N)
        sum_multiplier = self.sum_multiplier.resize_ones(D)

        y = Y.reshape(-1)
        dy = dY.reshape(-1)
        dx = dX.reshape(-1)
        scale = self.scale.data

        context.copy(Y.size, dy, dx)
        for i in range(N):
            scale[i] = context.dot(D, y[i * D:], dy[i * D:])
        context.gemm(False, False, N, D, 1, -1.0, scale, sum_multiplier, 1.0, dx)
        context.mul(Y.size, dx, y, dx)
        return dX
