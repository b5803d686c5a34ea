"""
Finite-difference gradient estimation.

A parameter is probed by nudging it by `epsilon`, re-evaluating the cost
over the whole training set and dividing the change by the step. The probed
parameter is always restored to its exact original value.
"""

from perceptron.cost import EmptyTrainingSetError, compute_cost, mean_squared_error

EPSILON = 1e-4

METHODS = ("forward", "central")


def _check(samples, epsilon, method):
    if method not in METHODS:
        raise ValueError(f"unknown difference method: {method!r}")
    if not epsilon > 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")
    if not samples:
        raise EmptyTrainingSetError("cannot estimate a gradient over an empty training set")


def _probe(model, samples, index, delta, cost):
    original = model.get_parameter(index)
    model.set_parameter(index, original + delta)
    try:
        return compute_cost(model, samples, cost)
    finally:
        model.set_parameter(index, original)


def estimate_gradient(model, samples, index, epsilon=EPSILON, method="forward",
                      cost=mean_squared_error, base_cost=None):
    """
    Estimate d(cost)/d(parameter `index`).

    forward:  (C(p + eps) - C(p)) / eps
    central:  (C(p + eps) - C(p - eps)) / (2 * eps)

    `base_cost` lets callers reuse C(p) across several forward probes taken
    from the same parameter state.
    """
    samples = list(samples)
    _check(samples, epsilon, method)

    if method == "central":
        plus = _probe(model, samples, index, epsilon, cost)
        minus = _probe(model, samples, index, -epsilon, cost)
        return (plus - minus) / (2 * epsilon)

    if base_cost is None:
        base_cost = compute_cost(model, samples, cost)
    plus = _probe(model, samples, index, epsilon, cost)
    return (plus - base_cost) / epsilon


def estimate_gradients(model, samples, epsilon=EPSILON, method="forward",
                       cost=mean_squared_error):
    """Estimate the gradient for every parameter against the current state."""
    samples = list(samples)
    _check(samples, epsilon, method)
    base_cost = compute_cost(model, samples, cost) if method == "forward" else None
    return [
        estimate_gradient(model, samples, i, epsilon, method, cost, base_cost)
        for i in range(model.num_parameters())
    ]
