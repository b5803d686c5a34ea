"""
Gradient-descent trainer.

Each iteration estimates the gradient of every parameter by finite
differences and steps it by -learning_rate * gradient. There is no early
stopping: training always runs the requested number of iterations.

Two update orders are supported:

    snapshot    all gradients of an iteration are measured against the same
                parameter state, then applied together (default)
    sequential  each parameter is updated as soon as its gradient is known,
                so later probes in the same iteration see earlier updates

A learning rate that is too large makes the cost diverge to inf/nan. That is
logged but never corrected.
"""

import logging
import math
from collections import namedtuple

from perceptron.cost import EmptyTrainingSetError, compute_cost, mean_squared_error
from perceptron.gradient import EPSILON, METHODS, estimate_gradient, estimate_gradients

logger = logging.getLogger(__name__)

LEARNING_RATE = 1e-3
ITERATIONS = 50_000

UPDATES = ("snapshot", "sequential")

TrainingReport = namedtuple(
    "TrainingReport", ["initial_cost", "final_cost", "iterations", "history"]
)


def step(model, samples, learning_rate=LEARNING_RATE, epsilon=EPSILON,
         method="forward", update="snapshot", cost=mean_squared_error):
    """Run one gradient-descent iteration over the whole training set."""
    if update == "snapshot":
        gradients = estimate_gradients(model, samples, epsilon, method, cost)
        for i, g in enumerate(gradients):
            model.set_parameter(i, model.get_parameter(i) - learning_rate * g)
    elif update == "sequential":
        for i in range(model.num_parameters()):
            g = estimate_gradient(model, samples, i, epsilon, method, cost)
            model.set_parameter(i, model.get_parameter(i) - learning_rate * g)
    else:
        raise ValueError(f"unknown update order: {update!r}")


def train(model, samples, learning_rate=LEARNING_RATE, iterations=ITERATIONS,
          epsilon=EPSILON, method="forward", update="snapshot",
          cost=mean_squared_error, log_interval=None, callback=None):
    """
    Train `model` in place on `samples` for exactly `iterations` steps.

    `callback(iteration, cost)` is invoked at every checkpoint; checkpoints
    happen every `log_interval` iterations (default: a fifth of the run) and
    after the last iteration.
    """
    samples = list(samples)
    if not samples:
        raise EmptyTrainingSetError("cannot train on an empty training set")
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")
    if update not in UPDATES:
        raise ValueError(f"unknown update order: {update!r}")
    if method not in METHODS:
        raise ValueError(f"unknown difference method: {method!r}")
    if not epsilon > 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    log_interval = log_interval or max(1, iterations // 5)
    initial_cost = compute_cost(model, samples, cost)
    history = [(0, initial_cost)]
    logger.info("iteration %d | cost %.6f", 0, initial_cost)

    current = initial_cost
    for it in range(1, iterations + 1):
        step(model, samples, learning_rate, epsilon, method, update, cost)

        if it % log_interval == 0 or it == iterations:
            current = compute_cost(model, samples, cost)
            history.append((it, current))
            logger.info("iteration %d | cost %.6f", it, current)
            if not math.isfinite(current):
                logger.warning(
                    "cost is %s after %d iterations; learning rate %g may be too large",
                    current, it, learning_rate,
                )
            if callback is not None:
                callback(it, current)

    return TrainingReport(initial_cost, current, iterations, history)
