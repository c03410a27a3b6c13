"""Activation functions and their derivatives.

Every activation exposes :meth:`Activation.evaluate` and
:meth:`Activation.derivative`, both applied element-wise to NumPy arrays. The
network only relies on this pair, so user-defined activations plug in either
by subclassing :class:`Activation` or by wrapping two scalar callables with
:class:`FunctionActivation`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from .errors import InvalidConfigurationError

NumericFunction = Callable[[float], float]


def _stable_sigmoid(x: ArrayLike) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    e = np.exp(-np.abs(x))
    return np.where(x >= 0.0, 1.0 / (1.0 + e), e / (1.0 + e))


class Activation(ABC):
    """Element-wise non-linearity paired with its derivative."""

    name = "activation"

    @abstractmethod
    def evaluate(self, x: ArrayLike) -> np.ndarray:
        """Apply the non-linearity element-wise."""

    @abstractmethod
    def derivative(self, x: ArrayLike) -> np.ndarray:
        """Derivative of :meth:`evaluate` at ``x``, element-wise."""

    def __call__(self, x: ArrayLike) -> np.ndarray:
        return self.evaluate(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FunctionActivation(Activation):
    """Adapt a pair of scalar callables to the :class:`Activation` contract.

    Parameters
    ----------
    function:
        ``activation(x) -> y`` for a single float.
    derivative:
        ``dActivation(x) -> y'``, the derivative of ``function`` at ``x`` (or a
        conventional subgradient at non-differentiable points).
    name:
        Label used in ``repr`` and log messages.
    """

    def __init__(self, function: NumericFunction, derivative: NumericFunction, *, name: str = "custom") -> None:
        if not callable(function) or not callable(derivative):
            raise InvalidConfigurationError("function and derivative must be callable")
        self.name = name
        self._function = np.vectorize(function, otypes=[float])
        self._derivative = np.vectorize(derivative, otypes=[float])

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return self._function(x)

    def derivative(self, x: ArrayLike) -> np.ndarray:
        return self._derivative(x)

    def __repr__(self) -> str:
        return f"FunctionActivation(name={self.name!r})"


class Sigmoid(Activation):
    name = "sigmoid"

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return _stable_sigmoid(x)

    def derivative(self, x: ArrayLike) -> np.ndarray:
        s = _stable_sigmoid(x)
        return s * (1.0 - s)


class ReLU(Activation):
    name = "relu"

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return np.maximum(0.0, np.asarray(x, dtype=float))

    def derivative(self, x: ArrayLike) -> np.ndarray:
        # subgradient 1 at x == 0
        return np.where(np.asarray(x, dtype=float) >= 0.0, 1.0, 0.0)


class LeakyReLU(Activation):
    """ReLU with slope ``alpha`` on the negative half-line, ``0 < alpha < 1``."""

    name = "leaky_relu"

    def __init__(self, alpha: float = 0.01) -> None:
        if not 0.0 < alpha < 1.0:
            raise InvalidConfigurationError("alpha must be greater than 0 and lower than 1")
        self.alpha = float(alpha)

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return np.maximum(x, self.alpha * x)

    def derivative(self, x: ArrayLike) -> np.ndarray:
        return np.where(np.asarray(x, dtype=float) >= 0.0, 1.0, self.alpha)

    def __repr__(self) -> str:
        return f"LeakyReLU(alpha={self.alpha})"


class Linear(Activation):
    name = "linear"

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return np.array(x, dtype=float)

    def derivative(self, x: ArrayLike) -> np.ndarray:
        return np.ones_like(np.asarray(x, dtype=float))


class Tanh(Activation):
    """Hyperbolic tangent, ``2 * sigmoid(2x) - 1``."""

    name = "tanh"

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return 2.0 * _stable_sigmoid(2.0 * np.asarray(x, dtype=float)) - 1.0

    def derivative(self, x: ArrayLike) -> np.ndarray:
        s = _stable_sigmoid(2.0 * np.asarray(x, dtype=float))
        return 4.0 * s * (1.0 - s)


class SoftPlus(Activation):
    """``ln(1 + e^x)``; its derivative is the sigmoid."""

    name = "softplus"

    def evaluate(self, x: ArrayLike) -> np.ndarray:
        return np.logaddexp(0.0, np.asarray(x, dtype=float))

    def derivative(self, x: ArrayLike) -> np.ndarray:
        return _stable_sigmoid(x)


sigmoid = Sigmoid()
relu = ReLU()
linear = Linear()
tanh = Tanh()
softplus = SoftPlus()


def leaky_relu(alpha: float = 0.01) -> LeakyReLU:
    """Build a :class:`LeakyReLU`; raises if ``alpha`` is outside ``(0, 1)``."""

    return LeakyReLU(alpha)


__all__ = [
    "Activation",
    "FunctionActivation",
    "LeakyReLU",
    "Linear",
    "NumericFunction",
    "ReLU",
    "Sigmoid",
    "SoftPlus",
    "Tanh",
    "leaky_relu",
    "linear",
    "relu",
    "sigmoid",
    "softplus",
    "tanh",
]
