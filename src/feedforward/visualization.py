"""Plotting utilities for training curves."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt


def plot_cost_history(costs: Sequence[float], ax=None):
    """Plot the mean cost recorded after each epoch and return the axes."""

    if ax is None:
        plt.figure()
        ax = plt.gca()
    ax.plot(range(1, len(costs) + 1), costs)
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Cost")
    ax.set_title("Training Cost")
    ax.figure.tight_layout()
    return ax
