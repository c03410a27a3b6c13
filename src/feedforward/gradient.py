"""Container for cost gradients with respect to network parameters."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np


@dataclass
class Gradient:
    """Partial derivatives of the cost, laid out like the parameters.

    ``nabla_w[k]`` has the shape of ``weights[k]`` and ``nabla_b[k]`` the shape
    of ``biases[k]``; layer ``0`` entries are empty arrays.
    """

    nabla_w: List[np.ndarray] = field(default_factory=list)
    nabla_b: List[np.ndarray] = field(default_factory=list)

    @classmethod
    def zeros_like(cls, weights: Sequence[np.ndarray], biases: Sequence[np.ndarray]) -> "Gradient":
        return cls(
            nabla_w=[np.zeros_like(w, dtype=float) for w in weights],
            nabla_b=[np.zeros_like(b, dtype=float) for b in biases],
        )

    def accumulate(self, other: "Gradient") -> None:
        """Add ``other`` into this gradient in place."""

        for total, part in zip(self.nabla_w, other.nabla_w):
            total += part
        for total, part in zip(self.nabla_b, other.nabla_b):
            total += part

    def divide(self, divisor: float) -> None:
        """Divide every entry by ``divisor`` in place."""

        for values in self.nabla_w:
            values /= divisor
        for values in self.nabla_b:
            values /= divisor

    def copy(self) -> "Gradient":
        return Gradient(
            nabla_w=[w.copy() for w in self.nabla_w],
            nabla_b=[b.copy() for b in self.nabla_b],
        )

    def allclose(self, other: "Gradient", *, rtol: float = 1e-7, atol: float = 1e-9) -> bool:
        """Entry-wise comparison, mainly useful in tests and diagnostics."""

        if len(self.nabla_w) != len(other.nabla_w) or len(self.nabla_b) != len(other.nabla_b):
            return False
        pairs = list(zip(self.nabla_w, other.nabla_w)) + list(zip(self.nabla_b, other.nabla_b))
        return all(a.shape == b.shape and np.allclose(a, b, rtol=rtol, atol=atol) for a, b in pairs)


__all__ = ["Gradient"]
