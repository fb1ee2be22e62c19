import numpy as np


class CPUContext:
    """
    BLAS-style primitives over flat numpy buffers.

    Every buffer argument is a contiguous 1-D array; only the leading
    elements named by the size arguments are read or written. Matrices are
    row-major views over those leading elements.
    """
    def __init__(self, dtype=np.float32, verbose=False):
        """
        :param dtype: Element type of every buffer this context allocates
        :param verbose: Print scratch allocation events
        """
        self.dtype = np.dtype(dtype)
        self.verbose = verbose

    @classmethod
    def from_config(cls, config):
        """
        :param config: dict with optional "dtype" and "verbose" keys
        """
        return cls(
            dtype=config.get("dtype", "float32"),
            verbose=config.get("verbose", False)
        )

    @property
    def itemsize(self):
        return self.dtype.itemsize

    def empty(self, n):
        return np.empty(n, dtype=self.dtype)

    def empty_like(self, array):
        return np.empty(np.shape(array), dtype=self.dtype)

    def as_buffer(self, array):
        """
        :param array: Array-like input
        :return: Contiguous array of this context's dtype, same shape
        """
        return np.ascontiguousarray(array, dtype=self.dtype)

    def set(self, n, alpha, y):
        y[:n] = alpha

    def copy(self, n, src, dst):
        dst[:n] = src[:n]

    def dot(self, n, a, b):
        return np.dot(a[:n], b[:n])

    def mul(self, n, a, b, y):
        np.multiply(a[:n], b[:n], out=y[:n])

    def exp(self, n, x, y):
        np.exp(x[:n], out=y[:n])

    def log(self, n, x, y):
        np.log(x[:n], out=y[:n])

    def rowwise_max(self, N, D, x, y):
        """
        y[i] = max(x[i, :]) for the (N, D) matrix x.
        """
        np.max(x[:N * D].reshape(N, D), axis=1, out=y[:N])

    def gemv(self, trans_a, M, N, alpha, A, x, beta, y):
        """
        y = alpha * op(A) @ x + beta * y, with A an (M, N) matrix.
        """
        a = A[:M * N].reshape(M, N)
        if trans_a:
            a = a.T
        out = y[:a.shape[0]]
        product = a @ x[:a.shape[1]]
        if beta == 0:
            out[...] = alpha * product
        else:
            out *= beta
            out += alpha * product

    def gemm(self, trans_a, trans_b, M, N, K, alpha, A, B, beta, C):
        """
        C = alpha * op(A) @ op(B) + beta * C, with C an (M, N) matrix.

        With K == 1 and B a ones-vector this is the rank-1 update that
        broadcasts a per-row scalar across all N columns.
        """
        a = A[:M * K].reshape((K, M) if trans_a else (M, K))
        if trans_a:
            a = a.T
        b = B[:K * N].reshape((N, K) if trans_b else (K, N))
        if trans_b:
            b = b.T
        c = C[:M * N].reshape(M, N)
        product = a @ b
        if beta == 0:
            # BLAS does not read C when beta is zero
            c[...] = alpha * product
        else:
            c *= beta
            c += alpha * product
