"""Epoch loop and batching helpers built on :meth:`Network.gradient_descend`."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike
from tqdm.auto import tqdm

from .config import EarlyStoppingConfig, TrainingConfig, _is_integer
from .errors import InvalidConfigurationError, LengthMismatchError
from .network import Network

logger = logging.getLogger(__name__)


@dataclass
class TrainingHistory:
    """Metrics collected by :func:`train`, one entry per completed epoch."""

    costs: list[float] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def epochs(self) -> int:
        return len(self.costs)


def _check_dataset(inputs: Sequence[ArrayLike], targets: Sequence[ArrayLike]) -> None:
    if len(inputs) != len(targets):
        raise LengthMismatchError(
            f"inputs and targets must have the same length ({len(inputs)} != {len(targets)})"
        )
    if len(inputs) == 0:
        raise LengthMismatchError("dataset must contain at least one example")


def make_batches(
    inputs: Sequence[ArrayLike],
    targets: Sequence[ArrayLike],
    batch_size: int,
) -> Tuple[List[List[ArrayLike]], List[List[ArrayLike]]]:
    """Split parallel example lists into consecutive batches.

    Returns ``(input_batches, target_batches)`` in the nested form expected by
    :meth:`Network.gradient_descend`. The last batch holds the remainder.
    """

    if not _is_integer(batch_size) or batch_size <= 0:
        raise InvalidConfigurationError(f"batch_size must be a positive integer, got {batch_size!r}")
    if len(inputs) != len(targets):
        raise LengthMismatchError(
            f"inputs and targets must have the same length ({len(inputs)} != {len(targets)})"
        )
    input_batches = [list(inputs[k:k + batch_size]) for k in range(0, len(inputs), batch_size)]
    target_batches = [list(targets[k:k + batch_size]) for k in range(0, len(targets), batch_size)]
    return input_batches, target_batches


def mean_cost(network: Network, inputs: Sequence[ArrayLike], targets: Sequence[ArrayLike]) -> float:
    """Average :meth:`Network.get_cost` over a dataset."""

    _check_dataset(inputs, targets)
    return sum(network.get_cost(x, y) for x, y in zip(inputs, targets)) / len(inputs)


def train(
    network: Network,
    inputs: Sequence[ArrayLike],
    targets: Sequence[ArrayLike],
    config: Optional[TrainingConfig] = None,
    *,
    early_stopping: Optional[EarlyStoppingConfig] = None,
) -> TrainingHistory:
    """Run batch gradient descent for ``config.epochs`` epochs.

    Every epoch optionally shuffles the examples, cuts them into batches of
    ``config.batch_size`` and hands them to :meth:`Network.gradient_descend`.
    The mean cost over the full dataset is recorded after each epoch.
    """

    config = config or TrainingConfig()
    _check_dataset(inputs, targets)
    inputs = list(inputs)
    targets = list(targets)
    rng = np.random.default_rng(config.seed)

    history = TrainingHistory()
    best_cost = float("inf")
    epochs_without_improvement = 0

    iterator = tqdm(range(1, config.epochs + 1), desc="Training", disable=not config.progress)
    for epoch in iterator:
        order = rng.permutation(len(inputs)) if config.shuffle else range(len(inputs))
        input_batches, target_batches = make_batches(
            [inputs[i] for i in order],
            [targets[i] for i in order],
            config.batch_size,
        )
        network.gradient_descend(input_batches, target_batches)

        cost = mean_cost(network, inputs, targets)
        history.costs.append(cost)
        logger.info("Epoch %d/%d: cost=%.6f", epoch, config.epochs, cost)
        if config.progress:
            iterator.set_postfix(cost=f"{cost:.4g}")

        if early_stopping is not None:
            if cost + early_stopping.min_delta < best_cost:
                best_cost = cost
                epochs_without_improvement = 0
            else:
                epochs_without_improvement += 1
                if epochs_without_improvement >= early_stopping.patience:
                    logger.info("Stopping early after %d epochs without improvement", epochs_without_improvement)
                    history.stopped_early = True
                    break

    return history


__all__ = ["TrainingHistory", "make_batches", "mean_cost", "train"]
