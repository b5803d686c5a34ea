import math


def identity(x):
    return x


def sigmoid(x):
    # exp() only ever sees a non-positive argument, so it cannot overflow
    if x >= 0:
        z = math.exp(-x)
        return 1 / (1 + z)
    z = math.exp(x)
    return z / (1 + z)


def relu(x):
    if x != x:
        return x
    return x if x > 0 else 0.0


rectifier = relu


def tanh(x):
    return math.tanh(x)


ACTIVATIONS = {
    "identity": identity,
    "linear": identity,
    "sigmoid": sigmoid,
    "relu": relu,
    "rectifier": relu,
    "tanh": tanh,
}


def get_activation(selector):
    """Resolve an activation selector (a name or a callable) to a function."""
    if callable(selector):
        return selector
    try:
        return ACTIVATIONS[selector.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"unknown activation: {selector!r}") from None


def activation_name(func):
    for name, candidate in ACTIVATIONS.items():
        if candidate is func:
            return name
    return getattr(func, "__name__", repr(func))
