import logging

import numpy as np
import pytest

from feedforward import (
    EarlyStoppingConfig,
    InvalidConfigurationError,
    LengthMismatchError,
    Network,
    TrainingConfig,
    linear,
    make_batches,
    mean_cost,
    sigmoid,
    train,
)


def make_and_dataset():
    x = [
        [0.0, 0.0],
        [0.0, 1.0],
        [1.0, 0.0],
        [1.0, 1.0],
    ]
    y = [[0.1], [0.1], [0.1], [0.9]]
    return x, y


def make_network(seed: int = 2) -> Network:
    return Network([(2, linear), (3, sigmoid), (1, sigmoid)], seed=seed)


def test_make_batches_keeps_remainder() -> None:
    inputs = [[float(i)] for i in range(5)]
    targets = [[float(-i)] for i in range(5)]

    input_batches, target_batches = make_batches(inputs, targets, 2)

    assert [len(batch) for batch in input_batches] == [2, 2, 1]
    assert input_batches[2] == [[4.0]]
    assert target_batches[0] == [[0.0], [-1.0]]


def test_make_batches_validation() -> None:
    with pytest.raises(LengthMismatchError):
        make_batches([[1.0]], [], 1)
    with pytest.raises(InvalidConfigurationError):
        make_batches([[1.0]], [[1.0]], 0)
    with pytest.raises(InvalidConfigurationError):
        make_batches([[1.0]], [[1.0]], 1.5)


def test_mean_cost_averages_example_costs() -> None:
    network = make_network()
    x, y = make_and_dataset()
    expected = sum(network.get_cost(a, b) for a, b in zip(x, y)) / len(x)
    assert mean_cost(network, x, y) == pytest.approx(expected)


def test_training_reduces_cost() -> None:
    network = make_network()
    x, y = make_and_dataset()
    initial = mean_cost(network, x, y)

    history = train(network, x, y, TrainingConfig(epochs=200, batch_size=4, shuffle=False))

    assert history.epochs == 200
    assert not history.stopped_early
    assert history.costs[-1] < initial
    assert history.costs[-1] == pytest.approx(mean_cost(network, x, y))


def test_full_batch_epoch_matches_gradient_descend() -> None:
    trained = make_network()
    manual = make_network()
    x, y = make_and_dataset()

    train(trained, x, y, TrainingConfig(epochs=1, batch_size=len(x), shuffle=False))
    manual.gradient_descend([x], [y])

    for a, b in zip(trained.weights, manual.weights):
        np.testing.assert_array_equal(a, b)


def test_shuffled_training_is_reproducible_with_seed() -> None:
    x, y = make_and_dataset()
    config = TrainingConfig(epochs=5, batch_size=1, shuffle=True, seed=13)
    first, second = make_network(), make_network()

    train(first, x, y, config)
    train(second, x, y, config)

    for a, b in zip(first.weights, second.weights):
        np.testing.assert_array_equal(a, b)


def test_early_stopping_halts_without_improvement() -> None:
    network = make_network()
    x, y = make_and_dataset()

    history = train(
        network,
        x,
        y,
        TrainingConfig(epochs=50, batch_size=2),
        early_stopping=EarlyStoppingConfig(patience=1, min_delta=1e9),
    )

    assert history.stopped_early
    assert history.epochs == 2


def test_train_rejects_mismatched_dataset() -> None:
    network = make_network()
    x, y = make_and_dataset()
    before = network.parameters()

    with pytest.raises(LengthMismatchError):
        train(network, x, y[:3])
    with pytest.raises(LengthMismatchError):
        train(network, [], [])

    np.testing.assert_array_equal(network.weights[1], before["weights"][1])


def test_train_logs_epoch_costs(caplog) -> None:
    network = make_network()
    x, y = make_and_dataset()

    with caplog.at_level(logging.INFO, logger="feedforward.training"):
        train(network, x, y, TrainingConfig(epochs=2, progress=True))

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Epoch 1/2: cost=") for message in messages)
    assert any(message.startswith("Epoch 2/2: cost=") for message in messages)
