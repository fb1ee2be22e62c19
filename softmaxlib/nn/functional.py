from .activation import Softmax, SoftmaxGradient


def softmax(X, axis=1, context=None):
    """
    One-shot softmax; allocates fresh scratch on every call.
    Hold a Softmax instance instead when calling repeatedly.
    """
    return Softmax(axis, context).forward(X)


def log_softmax(X, axis=1, context=None):
    return Softmax(axis, context, logarithmic=True).forward(X)


def softmax_grad(Y, dY, axis=1, context=None):
    """
    :param Y: Softmax output
    :param dY: Gradient of loss wrt Y
    :return: Gradient of loss wrt the softmax input
    """
    return SoftmaxGradient(axis, context).backward(Y, dY)
