import numpy as np
import torch

from softmaxlib.nn import log_softmax, softmax, softmax_grad


def test_softmax_last_axis(rng):
    X = rng.standard_normal((2, 3, 4)).astype(np.float32)
    expected = torch.softmax(torch.from_numpy(X), dim=-1).numpy()
    assert np.allclose(softmax(X, axis=-1), expected, atol=1e-6)


def test_log_softmax_is_log_of_softmax(rng):
    X = rng.standard_normal((3, 5))
    assert np.allclose(log_softmax(X), np.log(softmax(X)), atol=1e-5)


def test_softmax_grad(rng):
    X = rng.standard_normal((3, 5)).astype(np.float32)
    dY = rng.standard_normal((3, 5)).astype(np.float32)
    Y = softmax(X)
    dX = softmax_grad(Y, dY)
    expected = Y * (dY - np.sum(dY * Y, axis=1, keepdims=True))
    assert np.allclose(dX, expected, atol=1e-6)
