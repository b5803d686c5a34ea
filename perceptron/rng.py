import random

INIT_RANGE = 1.0


class RandomSource:
    """Draws independent uniform scalars for parameter initialization."""

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

    def uniform(self, low, high):
        return self._rng.uniform(low, high)


class FixedSource:
    """Replays a fixed sequence of values, cycling when exhausted."""

    def __init__(self, values):
        values = list(values)
        if not values:
            raise ValueError("FixedSource needs at least one value")
        self._values = values
        self._idx = 0

    def uniform(self, low, high):
        value = self._values[self._idx % len(self._values)]
        self._idx += 1
        return value


_default_source = RandomSource()


def default_source():
    return _default_source
