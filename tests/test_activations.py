import math

import pytest

from perceptron.activations import activation_name, get_activation, identity, rectifier, relu, sigmoid, tanh


@pytest.mark.parametrize("x", [-7.5, -1.0, 0.0, 0.25, 3.0, 1e12])
def test_identity_returns_input(x):
    assert identity(x) == x


@pytest.mark.parametrize("x", [-30.0, -5.0, -0.1, 0.0, 0.1, 5.0, 30.0])
def test_sigmoid_in_open_unit_interval(x):
    assert 0.0 < sigmoid(x) < 1.0


def test_sigmoid_values():
    assert sigmoid(0.0) == 0.5
    assert sigmoid(2.0) == pytest.approx(1 / (1 + math.exp(-2.0)))
    assert sigmoid(-2.0) == pytest.approx(1 - sigmoid(2.0))


@pytest.mark.parametrize("x", [-1e6, -800.0, 800.0, 1e6])
def test_sigmoid_does_not_overflow(x):
    s = sigmoid(x)
    assert 0.0 <= s <= 1.0


@pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 0.5, 3.0])
def test_relu_is_max_zero(x):
    assert relu(x) == max(0.0, x)


def test_rectifier_is_relu():
    assert rectifier is relu


def test_nan_propagates():
    nan = float("nan")
    for func in (identity, sigmoid, relu, tanh):
        assert math.isnan(func(nan))


def test_tanh_saturates():
    assert tanh(1000.0) == 1.0
    assert tanh(-1000.0) == -1.0


def test_get_activation_by_name():
    assert get_activation("sigmoid") is sigmoid
    assert get_activation("ReLU") is relu
    assert get_activation("rectifier") is relu
    assert get_activation("identity") is identity


def test_get_activation_passes_callables_through():
    square = lambda x: x * x  # noqa: E731
    assert get_activation(square) is square


@pytest.mark.parametrize("selector", ["softmax", None, 3])
def test_get_activation_rejects_unknown(selector):
    with pytest.raises(ValueError):
        get_activation(selector)


def test_activation_name():
    assert activation_name(sigmoid) == "sigmoid"
    assert activation_name(relu) == "relu"
    assert activation_name(identity) == "identity"
