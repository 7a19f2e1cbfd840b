import numpy as np
import pytest

from densenn.core.errors import DimensionMismatchError
from densenn.core.layer import Layer
from densenn.core.network import Network
from densenn.core.types import LayerSpec


def test_network_rejects_mismatched_chain():
    with pytest.raises(DimensionMismatchError, match="Layer 1 expects 4 inputs"):
        Network([Layer(3, 2), Layer(2, 4)])


def test_network_rejects_empty():
    with pytest.raises(ValueError):
        Network([])


def test_network_from_config():
    net = Network.from_config(
        [
            {"neurons": 4, "fan_in": 2, "activation": "relu"},
            LayerSpec(neurons=3, fan_in=4, activation="softmax"),
        ],
        seed=3,
    )
    assert net.input_dim == 2
    assert net.output_dim == 3
    assert net.parameter_count() == (2 * 4 + 4) + (4 * 3 + 3)
    assert [spec.activation for spec in net.describe()] == ["relu", "softmax"]


def test_network_from_config_missing_key():
    with pytest.raises(KeyError, match="fan_in"):
        Network.from_config([{"neurons": 3}])


def test_forward_all_returns_every_layer():
    net = Network.from_config(
        [
            {"neurons": 3, "fan_in": 2, "activation": "relu"},
            {"neurons": 3, "fan_in": 3, "activation": "softmax"},
        ],
        seed=0,
    )
    inputs = np.array([[0.1, 0.2], [-0.3, 0.4], [0.5, -0.6]])
    outputs = net.forward_all(inputs)
    assert [o.shape for o in outputs] == [(3, 3), (3, 3)]
    np.testing.assert_allclose(net.forward(inputs), outputs[-1])
