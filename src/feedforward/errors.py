"""Exceptions raised by the network engine."""
from __future__ import annotations


class NetworkError(ValueError):
    """Base class for every error raised by :mod:`feedforward`."""


class DimensionMismatchError(NetworkError):
    """A vector's length or rank disagrees with the layer it is fed to."""


class LengthMismatchError(NetworkError):
    """Parallel input/target lists differ in length or are empty."""


class InvalidConfigurationError(NetworkError):
    """A topology, activation or training configuration is malformed."""


__all__ = [
    "NetworkError",
    "DimensionMismatchError",
    "LengthMismatchError",
    "InvalidConfigurationError",
]
