"""Cost functions over a training set."""


class EmptyTrainingSetError(ValueError):
    """Raised when a cost is requested over no samples."""


def _squared_error(expected, predicted):
    if isinstance(predicted, (list, tuple)):
        if not isinstance(expected, (list, tuple)) or len(expected) != len(predicted):
            raise ValueError(
                f"expected output {expected!r} does not match prediction width {len(predicted)}"
            )
        return sum((p - e) * (p - e) for p, e in zip(predicted, expected))
    if isinstance(expected, (list, tuple)):
        raise ValueError(
            f"expected output {expected!r} is a vector but the model has a single output"
        )
    diff = predicted - expected
    # float ** raises OverflowError where * gives inf
    return diff * diff


def mean_squared_error(expected, predicted):
    """
    Mean of the squared differences between expected and predicted outputs.

    Vector outputs contribute the sum of their per-component squared errors.
    """
    if len(expected) != len(predicted):
        raise ValueError(
            f"{len(expected)} expected outputs but {len(predicted)} predictions"
        )
    if not expected:
        raise EmptyTrainingSetError("cannot compute a cost over an empty training set")
    total = sum(_squared_error(e, p) for e, p in zip(expected, predicted))
    return total / len(expected)


def compute_cost(model, samples, cost=mean_squared_error):
    samples = list(samples)
    if not samples:
        raise EmptyTrainingSetError("cannot compute a cost over an empty training set")
    predicted = [model(x) for x, _ in samples]
    expected = [y for _, y in samples]
    return cost(expected, predicted)


def mse(model, samples):
    return compute_cost(model, samples, mean_squared_error)
