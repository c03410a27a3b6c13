"""Minimal feedforward neural network engine.

Networks are built from an ordered list of layers, each with a size and an
activation, and are trained with plain batch gradient descent on a
sum-of-squares cost.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

from .activations import (
    Activation,
    FunctionActivation,
    LeakyReLU,
    Linear,
    ReLU,
    Sigmoid,
    SoftPlus,
    Tanh,
    leaky_relu,
    linear,
    relu,
    sigmoid,
    softplus,
    tanh,
)
from .config import EarlyStoppingConfig, LayerSpec, NetworkConfig, TrainingConfig
from .errors import (
    DimensionMismatchError,
    InvalidConfigurationError,
    LengthMismatchError,
    NetworkError,
)
from .gradient import Gradient
from .network import Network
from .training import TrainingHistory, make_batches, mean_cost, train

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .visualization import plot_cost_history

__all__ = [
    "Activation",
    "DimensionMismatchError",
    "EarlyStoppingConfig",
    "FunctionActivation",
    "Gradient",
    "InvalidConfigurationError",
    "LayerSpec",
    "LeakyReLU",
    "LengthMismatchError",
    "Linear",
    "Network",
    "NetworkConfig",
    "NetworkError",
    "ReLU",
    "Sigmoid",
    "SoftPlus",
    "Tanh",
    "TrainingConfig",
    "TrainingHistory",
    "leaky_relu",
    "linear",
    "make_batches",
    "mean_cost",
    "plot_cost_history",
    "relu",
    "sigmoid",
    "softplus",
    "tanh",
    "train",
]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name == "plot_cost_history":
        return getattr(import_module("feedforward.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
