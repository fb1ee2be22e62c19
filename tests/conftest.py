import numpy as np
import pytest

from softmaxlib.nn import CPUContext


@pytest.fixture
def rng():
    return np.random.default_rng(11785)


@pytest.fixture
def double_context():
    return CPUContext(dtype=np.float64)
