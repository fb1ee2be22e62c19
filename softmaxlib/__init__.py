from . import nn
from .nn import CPUContext, ShapeMismatchError, Softmax, SoftmaxGradient

__version__ = "0.1.0"
