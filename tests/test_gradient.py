import pytest

from perceptron.cost import EmptyTrainingSetError, mse
from perceptron.gradient import estimate_gradient, estimate_gradients
from perceptron.nn import Network, Neuron
from perceptron.rng import FixedSource, RandomSource

# cost(w, b) = (w + b - 1)^2 on a single sample x=1, y=1
SAMPLES = [([1.0], 1.0)]


def test_gradient_positive_when_increasing_parameter_raises_cost():
    n = Neuron(1, rng=FixedSource([2.0, 0.0]))
    g = estimate_gradient(n, SAMPLES, 0)
    assert g > 0
    assert g == pytest.approx(2.0, abs=1e-3)


def test_gradient_negative_below_optimum():
    n = Neuron(1, rng=FixedSource([0.0, 0.0]))
    g = estimate_gradient(n, SAMPLES, 1)
    assert g < 0
    assert g == pytest.approx(-2.0, abs=1e-3)


def test_central_difference_is_more_accurate():
    n = Neuron(1, rng=FixedSource([2.0, 0.0]))
    forward = estimate_gradient(n, SAMPLES, 0, epsilon=1e-2)
    central = estimate_gradient(n, SAMPLES, 0, epsilon=1e-2, method="central")
    assert abs(central - 2.0) < abs(forward - 2.0)
    assert central == pytest.approx(2.0, abs=1e-9)


@pytest.mark.parametrize("method", ["forward", "central"])
def test_probing_restores_parameters_exactly(linear_samples, method):
    net = Network(2, [3, 1], rng=RandomSource(8))
    before = net.parameters()
    cost_before = mse(net, linear_samples)
    for i in range(net.num_parameters()):
        estimate_gradient(net, linear_samples, i, method=method)
    assert net.parameters() == before
    assert mse(net, linear_samples) == cost_before


def test_estimate_gradients_covers_every_parameter(linear_samples):
    net = Network(2, [2, 1], hidden="sigmoid", rng=RandomSource(4))
    grads = estimate_gradients(net, linear_samples)
    assert len(grads) == net.num_parameters()
    for i, g in enumerate(grads):
        assert g == estimate_gradient(net, linear_samples, i)


def test_gradient_uses_precomputed_base_cost():
    n = Neuron(1, rng=FixedSource([2.0, 0.0]))
    g = estimate_gradient(n, SAMPLES, 0, base_cost=0.0)
    # pretending C(p) = 0 leaves only C(p + eps) / eps
    assert g == pytest.approx((1.0001 ** 2) / 1e-4)


def test_gradient_argument_checks():
    n = Neuron(1, rng=FixedSource([2.0, 0.0]))
    with pytest.raises(ValueError):
        estimate_gradient(n, SAMPLES, 0, epsilon=0.0)
    with pytest.raises(ValueError):
        estimate_gradient(n, SAMPLES, 0, method="backward")
    with pytest.raises(EmptyTrainingSetError):
        estimate_gradient(n, [], 0)
    with pytest.raises(EmptyTrainingSetError):
        estimate_gradients(n, [])
    with pytest.raises(IndexError):
        estimate_gradient(n, SAMPLES, 2)
