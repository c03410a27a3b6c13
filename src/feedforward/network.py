"""Fully connected feedforward network trained by backpropagation."""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from .activations import Activation
from .config import LayerLike, LayerSpec, NetworkConfig, as_layer_spec
from .errors import DimensionMismatchError, InvalidConfigurationError, LengthMismatchError
from .gradient import Gradient

logger = logging.getLogger(__name__)

Vector = np.ndarray
Matrix = np.ndarray


def _uniform_open(rng: np.random.Generator, shape: Tuple[int, ...]) -> np.ndarray:
    """Sample uniformly from the open interval ``(-1, 1)``."""

    values = rng.uniform(-1.0, 1.0, size=shape)
    edge = values <= -1.0
    while edge.any():
        values[edge] = rng.uniform(-1.0, 1.0, size=int(edge.sum()))
        edge = values <= -1.0
    return values


def _as_vector(values: ArrayLike, expected: int, what: str) -> Vector:
    try:
        vector = np.array(values, dtype=float)
    except ValueError as exc:
        raise DimensionMismatchError(
            f"{what} must be a vector of length {expected}, got a ragged or non-numeric value"
        ) from exc
    if vector.ndim != 1 or vector.shape[0] != expected:
        raise DimensionMismatchError(
            f"{what} must be a vector of length {expected}, got shape {vector.shape}"
        )
    return vector


class Network:
    """A layered network of weighted neurons.

    ``weights[k]`` is a ``(size(k), size(k-1))`` array whose entry ``[i, j]``
    connects neuron ``j`` of layer ``k-1`` to neuron ``i`` of layer ``k``;
    ``biases[k]`` holds one bias per neuron of layer ``k``. Layer ``0`` is the
    input layer and owns no parameters, so its entries are empty arrays.

    Parameters are drawn uniformly from ``(-1, 1)`` at construction and are
    afterwards only changed, in place, by :meth:`gradient_descend`.

    Parameters
    ----------
    layers:
        Layer specifications, input layer first. Accepts :class:`LayerSpec`
        instances or ``(size, activation)`` pairs.
    rng:
        Random generator used for initialisation.
    seed:
        Seed for a fresh generator. Mutually exclusive with ``rng``.
    """

    def __init__(
        self,
        layers: Sequence[LayerLike],
        *,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise InvalidConfigurationError("pass either rng or seed, not both")
        specs = tuple(as_layer_spec(layer) for layer in layers)
        if not specs:
            raise InvalidConfigurationError("a network needs at least one layer")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._layers = specs
        self.weights: List[Matrix] = [np.empty((0, 0))]
        self.biases: List[Vector] = [np.empty(0)]
        for previous, layer in zip(specs[:-1], specs[1:]):
            self.weights.append(_uniform_open(self.rng, (layer.size, previous.size)))
            self.biases.append(_uniform_open(self.rng, (layer.size,)))
        logger.debug(
            "Initialised network with layers %s",
            ", ".join(f"{layer.size}:{layer.activation.name}" for layer in specs),
        )

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "Network":
        return cls(config.layers, seed=config.seed)

    @property
    def layers(self) -> Tuple[LayerSpec, ...]:
        return self._layers

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(layer.size for layer in self._layers)

    @property
    def activations(self) -> Tuple[Activation, ...]:
        return tuple(layer.activation for layer in self._layers)

    @property
    def num_layers(self) -> int:
        return len(self._layers)

    def parameters(self) -> dict[str, List[np.ndarray]]:
        """Return copies of the weights and biases."""

        return {
            "weights": [w.copy() for w in self.weights],
            "biases": [b.copy() for b in self.biases],
        }

    def _check_input(self, values: ArrayLike) -> Vector:
        return _as_vector(values, self._layers[0].size, "input")

    def _check_target(self, values: ArrayLike) -> Vector:
        return _as_vector(values, self._layers[-1].size, "target")

    def _forward(self, x: Vector) -> Tuple[List[Vector], List[Vector]]:
        activations = [x]
        zs = [np.empty(0)]
        for k in range(1, self.num_layers):
            z = self.weights[k] @ activations[-1] + self.biases[k]
            zs.append(z)
            activations.append(np.asarray(self._layers[k].activation.evaluate(z), dtype=float))
        return activations, zs

    def get_output(self, x: ArrayLike) -> List[Vector]:
        """Propagate ``x`` forward and return every layer's activations.

        The first entry is the input itself; the last is the network output.
        """

        activations, _ = self._forward(self._check_input(x))
        return activations

    def get_cost(self, x: ArrayLike, y: ArrayLike) -> float:
        """Sum of squared errors between the output layer and ``y``."""

        x = self._check_input(x)
        y = self._check_target(y)
        activations, _ = self._forward(x)
        return float(np.sum((activations[-1] - y) ** 2))

    def _backpropagate(self, x: Vector, y: Vector) -> Gradient:
        activations, zs = self._forward(x)
        gradient = Gradient.zeros_like(self.weights, self.biases)
        # dC/da of the sum-of-squares cost
        d_cost = 2.0 * (activations[-1] - y)
        for k in range(self.num_layers - 1, 0, -1):
            derivative = np.asarray(self._layers[k].activation.derivative(zs[k]), dtype=float)
            delta = d_cost * derivative
            gradient.nabla_b[k] = delta
            gradient.nabla_w[k] = np.outer(delta, activations[k - 1])
            d_cost = self.weights[k].T @ delta
        return gradient

    def get_gradient(self, x: ArrayLike, y: ArrayLike) -> Gradient:
        """Gradient of :meth:`get_cost` for a single example."""

        return self._backpropagate(self._check_input(x), self._check_target(y))

    def _check_batch(self, inputs: Sequence[ArrayLike], targets: Sequence[ArrayLike]) -> List[Tuple[Vector, Vector]]:
        if len(inputs) != len(targets):
            raise LengthMismatchError(
                f"inputs and targets must have the same length ({len(inputs)} != {len(targets)})"
            )
        if len(inputs) == 0:
            raise LengthMismatchError("a batch must contain at least one example")
        return [(self._check_input(x), self._check_target(y)) for x, y in zip(inputs, targets)]

    def _mean_gradient(self, examples: Sequence[Tuple[Vector, Vector]]) -> Gradient:
        total = Gradient.zeros_like(self.weights, self.biases)
        for x, y in examples:
            total.accumulate(self._backpropagate(x, y))
        total.divide(len(examples))
        return total

    def get_mean_gradient(self, inputs: Sequence[ArrayLike], targets: Sequence[ArrayLike]) -> Gradient:
        """Arithmetic mean of :meth:`get_gradient` over a batch."""

        return self._mean_gradient(self._check_batch(inputs, targets))

    def gradient_descend(
        self,
        inputs: Sequence[Sequence[ArrayLike]],
        targets: Sequence[Sequence[ArrayLike]],
    ) -> None:
        """Apply one gradient-descent step per batch, in order.

        ``inputs[n]`` and ``targets[n]`` form batch ``n``. Each batch's mean
        gradient is computed against the parameters left by the previous
        batch and subtracted unscaled. All batches are validated before the
        first update, so a malformed call leaves the parameters untouched.
        """

        if len(inputs) != len(targets):
            raise LengthMismatchError(
                f"inputs and targets must have the same number of batches ({len(inputs)} != {len(targets)})"
            )
        batches = [self._check_batch(batch_inputs, batch_targets) for batch_inputs, batch_targets in zip(inputs, targets)]
        for index, examples in enumerate(batches):
            gradient = self._mean_gradient(examples)
            for k in range(1, self.num_layers):
                self.weights[k] -= gradient.nabla_w[k]
                self.biases[k] -= gradient.nabla_b[k]
            logger.debug("Applied batch %d/%d (%d examples)", index + 1, len(batches), len(examples))


__all__ = ["Network"]
