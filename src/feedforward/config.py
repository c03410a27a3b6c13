"""Configuration dataclasses for networks and the training loop."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from .activations import Activation
from .errors import InvalidConfigurationError


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(slots=True)
class LayerSpec:
    """One layer of the topology.

    Parameters
    ----------
    size:
        Number of neurons in the layer. Must be a positive integer.
    activation:
        Non-linearity applied to the layer's weighted sums. The activation of
        the input layer is recorded but never applied: input values pass
        through unchanged.
    """

    size: int
    activation: Activation

    def __post_init__(self) -> None:
        if not _is_integer(self.size):
            raise InvalidConfigurationError(f"layer size must be an integer, got {self.size!r}")
        if self.size <= 0:
            raise InvalidConfigurationError("layer size must be positive")
        self.size = int(self.size)
        if not isinstance(self.activation, Activation):
            raise InvalidConfigurationError(
                f"activation must implement the Activation contract, got {type(self.activation).__name__}"
            )


LayerLike = Union[LayerSpec, Tuple[int, Activation]]


def as_layer_spec(layer: LayerLike) -> LayerSpec:
    """Coerce a ``(size, activation)`` pair into a :class:`LayerSpec`."""

    if isinstance(layer, LayerSpec):
        return layer
    try:
        size, activation = layer
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(
            f"layers must be LayerSpec instances or (size, activation) pairs, got {layer!r}"
        ) from exc
    return LayerSpec(size, activation)


@dataclass(slots=True)
class NetworkConfig:
    """Topology and initialisation settings for :class:`~feedforward.network.Network`.

    Parameters
    ----------
    layers:
        Ordered layer specifications, input layer first. At least one entry.
    seed:
        Optional seed for the parameter initialisation. Two networks built
        from the same config and seed start from identical parameters.
    """

    layers: Sequence[LayerLike]
    seed: int | None = None

    def __post_init__(self) -> None:
        self.layers = tuple(as_layer_spec(layer) for layer in self.layers)
        if not self.layers:
            raise InvalidConfigurationError("a network needs at least one layer")


@dataclass(slots=True)
class TrainingConfig:
    """Settings for :func:`feedforward.training.train`.

    Parameters
    ----------
    epochs:
        Number of passes over the dataset.
    batch_size:
        Examples averaged per gradient-descent step. The final batch of an
        epoch may be smaller.
    shuffle:
        Shuffle example order at the start of every epoch.
    seed:
        Seed for the shuffling generator, for reproducible runs.
    progress:
        Show a tqdm progress bar over epochs.
    """

    epochs: int = 1
    batch_size: int = 1
    shuffle: bool = True
    seed: int | None = None
    progress: bool = False

    def __post_init__(self) -> None:
        if not _is_integer(self.epochs) or self.epochs <= 0:
            raise InvalidConfigurationError(f"epochs must be a positive integer, got {self.epochs!r}")
        if not _is_integer(self.batch_size) or self.batch_size <= 0:
            raise InvalidConfigurationError(f"batch_size must be a positive integer, got {self.batch_size!r}")
        self.epochs = int(self.epochs)
        self.batch_size = int(self.batch_size)


@dataclass(slots=True)
class EarlyStoppingConfig:
    """Stop training once the cost stops improving for ``patience`` epochs."""

    patience: int = 20
    min_delta: float = 1e-4

    def __post_init__(self) -> None:
        if not _is_integer(self.patience) or self.patience <= 0:
            raise InvalidConfigurationError(f"patience must be a positive integer, got {self.patience!r}")
        if self.min_delta < 0:
            raise InvalidConfigurationError("min_delta must be non-negative")


__all__ = [
    "EarlyStoppingConfig",
    "LayerLike",
    "LayerSpec",
    "NetworkConfig",
    "TrainingConfig",
    "as_layer_spec",
]
