"""
Neuron, Layer and Network for the perceptron engine.

Every trainable scalar of a model is reachable through a flat index:
layers in order, neurons in order, each neuron's weights followed by its
bias. The gradient estimator and the trainer only ever use that view, so
they work the same for a lone Neuron and for a deep Network.
"""

from perceptron.activations import activation_name, get_activation, identity, relu
from perceptron.rng import INIT_RANGE, default_source


class DimensionMismatchError(ValueError):
    """Raised when an input vector does not match the arity it is fed to."""


class Module:
    """
    Base class for anything holding trainable parameters.

    Subclasses implement `_neurons()`; the flat parameter view is built on
    top of it.
    """

    def _neurons(self):
        return []

    def parameters(self):
        """Return a snapshot list of every trainable scalar, in flat order."""
        return [p for n in self._neurons() for p in n.weights + [n.bias]]

    def num_parameters(self):
        return sum(n.nin + 1 for n in self._neurons())

    def _locate(self, index):
        if index < 0:
            raise IndexError(f"parameter index out of range: {index}")
        for n in self._neurons():
            if index < n.nin:
                return n, index
            if index == n.nin:
                return n, None
            index -= n.nin + 1
        raise IndexError("parameter index out of range")

    def get_parameter(self, index):
        neuron, slot = self._locate(index)
        return neuron.bias if slot is None else neuron.weights[slot]

    def set_parameter(self, index, value):
        neuron, slot = self._locate(index)
        if slot is None:
            neuron.bias = value
        else:
            neuron.weights[slot] = value

    def set_parameters(self, values):
        values = list(values)
        if len(values) != self.num_parameters():
            raise ValueError(
                f"expected {self.num_parameters()} parameters, got {len(values)}"
            )
        it = iter(values)
        for n in self._neurons():
            n.weights = [next(it) for _ in range(n.nin)]
            n.bias = next(it)

    def compute_output(self, x):
        return self(x)


class Neuron(Module):
    """
    A single unit: activation(w1*x1 + ... + wn*xn + b).

    Weights and bias are drawn independently from [-init_range, init_range]
    using `rng`, an object with a `uniform(low, high)` method.
    """

    def __init__(self, nin, activation=identity, rng=None, init_range=INIT_RANGE):
        if nin < 1:
            raise ValueError(f"a neuron needs at least one input, got {nin}")
        rng = rng or default_source()
        self.nin = nin
        self.weights = [rng.uniform(-init_range, init_range) for _ in range(nin)]
        self.bias = rng.uniform(-init_range, init_range)
        self.activation = get_activation(activation)

    def __call__(self, x):
        if len(x) != self.nin:
            raise DimensionMismatchError(
                f"neuron expects {self.nin} inputs, got {len(x)}"
            )
        act = sum((wi * xi for wi, xi in zip(self.weights, x)), self.bias)
        return self.activation(act)

    def _neurons(self):
        return [self]

    def __repr__(self):
        return f"Neuron({self.nin}, {activation_name(self.activation)})"


class Layer(Module):
    """A row of neurons that all read the same input vector."""

    def __init__(self, nin, nout, activations=identity, rng=None, init_range=INIT_RANGE):
        if nout < 1:
            raise ValueError(f"a layer needs at least one neuron, got {nout}")
        if callable(activations) or isinstance(activations, str):
            activations = [activations] * nout
        activations = list(activations)
        if len(activations) != nout:
            raise ValueError(
                f"layer has {nout} neurons but {len(activations)} activations"
            )
        self.nin = nin
        self.neurons = [Neuron(nin, act, rng=rng, init_range=init_range) for act in activations]

    @property
    def nout(self):
        return len(self.neurons)

    def __call__(self, x):
        if len(x) != self.nin:
            raise DimensionMismatchError(
                f"layer expects {self.nin} inputs, got {len(x)}"
            )
        return [n(x) for n in self.neurons]

    def _neurons(self):
        return self.neurons

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class Network(Module):
    """
    Fully connected layers fed one into the next.

    Network(2, [3, 1]) builds Input(2) -> Layer(2->3) -> Layer(3->1).

    `activations`, when given, is either one selector shared by every neuron
    or a list with one selector per neuron across all layers in flat order.
    Otherwise hidden layers use `hidden` and the last
    layer uses `output`.
    """

    def __init__(self, nin, nouts, activations=None, hidden=relu, output=identity,
                 rng=None, init_range=INIT_RANGE):
        nouts = list(nouts)
        if not nouts:
            raise ValueError("a network needs at least one layer")
        if activations is None:
            activations = []
            for i, n in enumerate(nouts):
                activations += [output if i == len(nouts) - 1 else hidden] * n
        elif callable(activations) or isinstance(activations, str):
            activations = [activations] * sum(nouts)
        activations = list(activations)
        if len(activations) != sum(nouts):
            raise ValueError(
                f"network has {sum(nouts)} neurons but {len(activations)} activations"
            )

        sz = [nin] + nouts
        self.layers = []
        start = 0
        for i in range(len(nouts)):
            acts = activations[start:start + nouts[i]]
            self.layers.append(Layer(sz[i], sz[i + 1], acts, rng=rng, init_range=init_range))
            start += nouts[i]

    @classmethod
    def from_layers(cls, layers):
        layers = list(layers)
        if not layers:
            raise ValueError("a network needs at least one layer")
        for prev, layer in zip(layers, layers[1:]):
            if layer.nin != prev.nout:
                raise DimensionMismatchError(
                    f"layer expects {layer.nin} inputs but previous layer has {prev.nout} outputs"
                )
        net = cls.__new__(cls)
        net.layers = layers
        return net

    @property
    def nin(self):
        return self.layers[0].nin

    @property
    def nout(self):
        return self.layers[-1].nout

    def layout(self):
        return [self.nin] + [layer.nout for layer in self.layers]

    def activations(self):
        return [activation_name(n.activation) for n in self._neurons()]

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
        return x[0] if len(x) == 1 else x

    def _neurons(self):
        return [n for layer in self.layers for n in layer.neurons]

    def __repr__(self):
        return f"Network of [{', '.join(str(layer) for layer in self.layers)}]"
