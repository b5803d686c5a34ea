"""Small training sets used by the command line and HTTP drivers."""

# y is roughly linear in (x1, x2); fitted by an identity neuron
LINEAR = [
    ([1.0, 5.0], 3.2),
    ([2.0, 8.0], 4.5),
    ([4.0, 6.0], 5.0),
    ([5.0, 9.0], 6.8),
    ([9.0, 8.0], 8.2),
    ([8.0, 5.0], 6.0),
]

# 1 when x1 dominates x2, 0 otherwise; fitted by a sigmoid neuron
THRESHOLD = [
    ([6.0, 1.0], 1.0),
    ([5.0, 0.0], 1.0),
    ([4.0, 1.0], 1.0),
    ([1.0, 4.0], 0.0),
    ([1.0, 2.0], 0.0),
    ([2.0, 3.0], 0.0),
]

DATASETS = {
    "linear": {"samples": LINEAR, "activation": "identity"},
    "threshold": {"samples": THRESHOLD, "activation": "sigmoid"},
}


def load_dataset(name):
    try:
        entry = DATASETS[name]
    except KeyError:
        raise ValueError(f"unknown dataset: {name!r}") from None
    return [(list(x), y) for x, y in entry["samples"]], entry["activation"]


def input_arity(samples):
    """Return the shared input dimension of `samples`."""
    samples = list(samples)
    if not samples:
        raise ValueError("training set is empty")
    arity = len(samples[0][0])
    for x, _ in samples:
        if len(x) != arity:
            raise ValueError(
                f"training inputs have mixed dimensions ({arity} and {len(x)})"
            )
    return arity
