from .activation import Softmax, SoftmaxGradient, softmax_cpu
from .cost import OpCost, cost_inference_for_softmax
from .functional import log_softmax, softmax, softmax_grad
from .math import CPUContext
from .scratch import ScratchBuffer
from .shape import ShapeMismatchError, canonical_axis_index, coerce_2d, size_from_dim, size_to_dim
