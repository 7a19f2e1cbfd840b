import numpy as np
import pytest

from densenn.core.activations import Activation, ActivationFunction, relu, softmax


def test_relu_matches_elementwise_max_and_is_idempotent():
    x = np.array([[-1.0, 0.0, 2.5], [3.0, -0.5, -7.0]])
    out = relu(x)
    assert np.array_equal(out, np.array([[0.0, 0.0, 2.5], [3.0, 0.0, 0.0]]))
    assert np.array_equal(relu(out), out)


def test_softmax_rows_are_distributions():
    x = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    out = softmax(x)
    assert out.shape == x.shape
    np.testing.assert_allclose(out.sum(axis=1), 1.0, atol=1e-9)
    assert np.all(out >= 0.0) and np.all(out <= 1.0)
    # Shifting a row by a constant leaves its distribution unchanged.
    np.testing.assert_allclose(out[0], out[1], atol=1e-12)


def test_softmax_is_stable_for_large_magnitudes():
    x = np.array(
        [
            [1000.0, 1001.0, 999.0],
            [-1000.0, -1002.0, -1001.0],
            [1e6, -1e6, 0.0],
        ]
    )
    out = softmax(x)
    assert np.all(np.isfinite(out))
    np.testing.assert_allclose(out.sum(axis=1), 1.0, atol=1e-9)
    assert np.all(out >= 0.0) and np.all(out <= 1.0)
    np.testing.assert_allclose(out[2], [1.0, 0.0, 0.0], atol=1e-12)


def test_activation_function_dispatch():
    x = np.array([[-2.0, 0.5]])
    assert np.array_equal(ActivationFunction(Activation.RELU).forward(x), [[0.0, 0.5]])
    probs = ActivationFunction.from_name("softmax")(x)
    np.testing.assert_allclose(probs.sum(axis=1), 1.0)
    assert ActivationFunction.from_name("ReLU").kind is Activation.RELU


def test_unknown_activation_name():
    with pytest.raises(ValueError, match="Unknown activation"):
        ActivationFunction.from_name("tanh")
