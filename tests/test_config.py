import numpy as np
import pytest

from feedforward import (
    EarlyStoppingConfig,
    InvalidConfigurationError,
    LayerSpec,
    NetworkConfig,
    NetworkError,
    TrainingConfig,
    relu,
    sigmoid,
)


def test_layer_spec_accepts_numpy_integers() -> None:
    spec = LayerSpec(np.int64(4), relu)
    assert spec.size == 4 and type(spec.size) is int


@pytest.mark.parametrize("size", [0, -3, 2.5, True, "3"])
def test_layer_spec_rejects_invalid_sizes(size) -> None:
    with pytest.raises(InvalidConfigurationError):
        LayerSpec(size, relu)


def test_layer_spec_rejects_plain_callables() -> None:
    with pytest.raises(InvalidConfigurationError):
        LayerSpec(2, lambda x: x)  # type: ignore[arg-type]


def test_network_config_normalises_pairs() -> None:
    config = NetworkConfig([(3, relu), LayerSpec(1, sigmoid)], seed=9)
    assert config.layers == (LayerSpec(3, relu), LayerSpec(1, sigmoid))


@pytest.mark.parametrize("layers", [[], [(3,)], [3]])
def test_network_config_rejects_bad_layers(layers) -> None:
    with pytest.raises(InvalidConfigurationError):
        NetworkConfig(layers)


def test_training_config_validation() -> None:
    with pytest.raises(InvalidConfigurationError):
        TrainingConfig(epochs=0)
    with pytest.raises(InvalidConfigurationError):
        TrainingConfig(batch_size=-1)
    with pytest.raises(InvalidConfigurationError):
        EarlyStoppingConfig(patience=0)
    with pytest.raises(InvalidConfigurationError):
        EarlyStoppingConfig(min_delta=-1.0)


@pytest.mark.parametrize(
    "kwargs",
    [{"epochs": 2.5}, {"epochs": True}, {"batch_size": 1.0}, {"batch_size": "4"}],
)
def test_training_config_requires_integer_counts(kwargs) -> None:
    with pytest.raises(InvalidConfigurationError):
        TrainingConfig(**kwargs)


def test_training_config_accepts_numpy_integers() -> None:
    config = TrainingConfig(epochs=np.int64(3), batch_size=np.int32(2))
    assert type(config.epochs) is int and type(config.batch_size) is int


def test_early_stopping_requires_integer_patience() -> None:
    with pytest.raises(InvalidConfigurationError):
        EarlyStoppingConfig(patience=1.5)


def test_configuration_errors_are_value_errors() -> None:
    assert issubclass(InvalidConfigurationError, NetworkError)
    with pytest.raises(ValueError):
        TrainingConfig(epochs=-5)
