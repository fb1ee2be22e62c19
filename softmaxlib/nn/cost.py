from typing import NamedTuple, Sequence

import numpy as np


class OpCost(NamedTuple):
    flops: int
    bytes_read: int
    bytes_written: int
    params_bytes: int


def cost_inference_for_softmax(input_shapes: Sequence[Sequence[int]], itemsize: int = 4) -> OpCost:
    """
    Analytical cost of a Softmax forward pass.

    The flops of a non-linear op depend on the implementation, so the number
    of non-linear evaluations (one per element) stands in for them.

    Args:
        input_shapes: Shapes of the op inputs, exactly one for Softmax
        itemsize: Bytes per element
    Returns:
        OpCost proportional to the input element count, with no parameter bytes
    """
    if len(input_shapes) != 1:
        raise ValueError("Softmax requires one input")
    input_size = int(np.prod(input_shapes[0], dtype=np.int64))
    return OpCost(
        flops=input_size,
        bytes_read=input_size * itemsize,
        bytes_written=input_size * itemsize,
        params_bytes=0
    )
