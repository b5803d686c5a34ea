import pytest

from perceptron.app import app, reset_model
from perceptron.datasets import LINEAR, THRESHOLD


@pytest.fixture
def linear_samples():
    return [(list(x), y) for x, y in LINEAR]


@pytest.fixture
def threshold_samples():
    return [(list(x), y) for x, y in THRESHOLD]


@pytest.fixture
def client():
    reset_model()
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
    reset_model()
