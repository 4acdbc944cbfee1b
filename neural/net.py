"""
cell_sim module: neural/net.py

Fixed-topology feedforward network used as a cell's controller:
- layer widths are fixed at construction ([3, 8, 4] by default)
- predict() returns every layer's activations, input layer included
- mutate() perturbs weights/biases in place, never the topology
"""

from __future__ import annotations
from typing import List, Optional, Sequence

import numpy as np

import config


def _sigmoid(x: np.ndarray) -> np.ndarray:
    # clipped to keep exp() finite for large pre-activations
    return 1.0 / (1.0 + np.exp(-np.clip(x, -60.0, 60.0)))


class Net:
    """
    Weights are stored per connection layer as (n_out, n_in) matrices.
    Initial weights and biases are uniform in [-1, 1]; every unit past the
    input layer uses a logistic sigmoid, so outputs lie in (0, 1).
    """

    def __init__(self, arch: Sequence[int], weights: Optional[List[np.ndarray]] = None, biases: Optional[List[np.ndarray]] = None):
        if len(arch) < 2:
            raise ValueError(f"Net needs at least an input and an output layer, got {list(arch)}")
        self.arch: List[int] = [int(n) for n in arch]

        if weights is None:
            weights = [np.random.uniform(-1.0, 1.0, size=(n_out, n_in)) for n_in, n_out in zip(self.arch, self.arch[1:])]
        if biases is None:
            biases = [np.random.uniform(-1.0, 1.0, size=(n_out,)) for n_out in self.arch[1:]]

        self.weights: List[np.ndarray] = weights
        self.biases: List[np.ndarray] = biases
        assert self.topology() == self.arch, "weights do not match the layer widths"

    @staticmethod
    def default() -> "Net":
        return Net(config.NET_ARCH)

    def topology(self) -> List[int]:
        """Layer widths as implied by the weight matrices."""
        if not self.weights:
            return []
        return [self.weights[0].shape[1]] + [w.shape[0] for w in self.weights]

    def predict(self, inputs: Sequence[float]) -> List[np.ndarray]:
        x = np.asarray(inputs, dtype=np.float64)
        assert x.shape == (self.arch[0],), f"expected {self.arch[0]} inputs, got {x.shape}"

        layers = [x]
        for w, b in zip(self.weights, self.biases):
            x = _sigmoid(w @ x + b)
            layers.append(x)
        return layers

    def output(self, inputs: Sequence[float]) -> np.ndarray:
        return self.predict(inputs)[-1]

    def mutate(self, rate: float = config.BRAIN_MUTATION_RATE, variation: float = config.BRAIN_MUTATION_VARIATION) -> None:
        """
        Mutate in-place: each weight and bias, independently with probability
        ``rate``, is displaced by a value drawn uniformly from [-variation, variation].
        """
        before = self.topology()
        for arr in self.weights + self.biases:
            mask = np.random.random(arr.shape) < rate
            arr += mask * np.random.uniform(-variation, variation, size=arr.shape)
        assert self.topology() == before, "mutation changed network topology"

    def clone(self) -> "Net":
        return Net(
            self.arch,
            weights=[w.copy() for w in self.weights],
            biases=[b.copy() for b in self.biases],
        )

    def params(self) -> np.ndarray:
        """All weights and biases flattened into one vector (diagnostics/tests)."""
        return np.concatenate([a.ravel() for a in self.weights + self.biases])
