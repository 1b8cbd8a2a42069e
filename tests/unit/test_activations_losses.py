import math

import numpy as np
import pytest

from mlpnet.core.activations import ReLU, Sigmoid, Tanh, get_activation
from mlpnet.core.losses import REGISTRY as LOSS_REGISTRY
from mlpnet.core.losses import AbsoluteLoss, ErrorLoss, MSELoss
from mlpnet.core.types import MLPError


def test_sigmoid_derivative_at_zero():
    act = Sigmoid()
    assert act.f(0.0) == pytest.approx(0.5)
    assert act.df(act.f(0.0)) == pytest.approx(0.25)


@pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 0.7, 2.5])
def test_derivatives_match_closed_form(x):
    sig = 1.0 / (1.0 + math.exp(-x))
    assert Sigmoid().df(Sigmoid().f(x)) == pytest.approx(sig * (1.0 - sig))
    assert Tanh().df(Tanh().f(x)) == pytest.approx(1.0 / math.cosh(x) ** 2)
    assert ReLU().df(ReLU().f(x)) == (1.0 if x > 0 else 0.0)


def test_activation_vectorised():
    x = np.array([-1.0, 0.0, 1.0])
    np.testing.assert_allclose(Tanh().f(x), np.tanh(x))
    np.testing.assert_allclose(ReLU().f(x), [0.0, 0.0, 1.0])


def test_activation_lookup():
    assert isinstance(get_activation("TANH"), Tanh)
    custom = Sigmoid()
    assert get_activation(custom) is custom
    with pytest.raises(MLPError, match="Unknown activation"):
        get_activation("softsign")


def test_mse_of_identical_vectors_is_zero():
    p = np.array([0.2, -1.5, 3.0])
    loss = MSELoss()
    assert loss.f(p, p) == 0.0
    np.testing.assert_array_equal(loss.df(p, p), np.zeros(3))


def test_reference_loss_values():
    p = [0.5, 0.25, 1.0]
    o = [1.0, 0.0, 1.0]
    assert ErrorLoss().f(p, o) == pytest.approx(0.75)
    assert AbsoluteLoss().f(p, o) == pytest.approx(0.75)
    assert MSELoss().f(p, o) == pytest.approx((0.25 + 0.0625) / 3)
    np.testing.assert_allclose(ErrorLoss().df(p, o), [-0.5, 0.25, 0.0])
    np.testing.assert_allclose(AbsoluteLoss().df(p, o), [-1 / 3, 1 / 3, 0.0])
    np.testing.assert_allclose(MSELoss().df(p, o), [-1 / 3, 1 / 6, 0.0])


def test_df_writes_into_result():
    result = np.full(2, 9.0)
    returned = ErrorLoss().df([1.0, 2.0], [0.0, 0.0], result)
    assert returned is result
    np.testing.assert_array_equal(result, [1.0, 2.0])


def test_loss_length_mismatch():
    with pytest.raises(MLPError, match="size mismatch"):
        MSELoss().f([1.0, 2.0], [1.0])
    with pytest.raises(MLPError):
        ErrorLoss().df([1.0], [1.0], np.zeros(3))


def test_loss_registry():
    assert list(LOSS_REGISTRY.names()) == ["absolute", "error", "mse"]
    assert LOSS_REGISTRY.get("mse").name == "mse"
    with pytest.raises(MLPError, match="Available losses"):
        LOSS_REGISTRY.get("hinge")
