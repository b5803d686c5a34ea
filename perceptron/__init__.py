from perceptron.activations import identity, relu, rectifier, sigmoid, tanh, get_activation
from perceptron.cost import EmptyTrainingSetError, compute_cost, mean_squared_error, mse
from perceptron.gradient import EPSILON, estimate_gradient, estimate_gradients
from perceptron.nn import DimensionMismatchError, Layer, Network, Neuron
from perceptron.rng import FixedSource, RandomSource
from perceptron.training import LEARNING_RATE, TrainingReport, step, train
