import numpy as np
import pytest

from dualroot import function as drf
from dualroot.autodiff import autodiff
from dualroot.autodiff.dual import Dual
from dualroot.typing import Differentiable


def test_deriv():
    deriv1 = autodiff.deriv(lambda x: (x + drf.sin(x**2)) / x)
    deriv2 = autodiff.deriv(deriv1)
    assert pytest.approx(deriv1(1.4), 1e-5) == -1.23095
    assert pytest.approx(deriv2(1.4), 1e-5) == -3.96476


def test_seed():
    x = autodiff.seed(2.5)
    assert isinstance(x, Dual)
    assert x.real == 2.5
    assert x.imag == 1.0

    y = autodiff.seed(np.float32(2.5))
    assert type(y.real) is np.float32
    assert type(y.derivative) is np.float32
    assert y.derivative == 1


def test_derivative():
    y = autodiff.seed(3.0) ** 3 - 2 * autodiff.seed(3.0)
    assert autodiff.derivative(y) == 25.0
    assert isinstance(y, Differentiable)
    assert not isinstance(3.0, Differentiable)

    with pytest.raises(TypeError):
        autodiff.derivative(3.0)  # type: ignore


def test_dual_arithmetic():
    x = Dual(2.0, 1.0)
    assert 1 / x == Dual(0.5, -0.25)
    assert 3 - x == Dual(1.0, -1.0)
    assert x * x / x == Dual(2.0, 1.0)
    assert x**0 == Dual(1.0, 0.0)
    assert x**0.5 == Dual(2.0**0.5, 0.5 * 2.0**-0.5)
    assert abs(-x) == x


def test_dual_nested():
    x = autodiff.seed(autodiff.seed(2.0))
    assert x.level == 1
    assert x.real.level == 0

    y = x * x
    assert y.real == Dual(4.0, 4.0)
    assert y.derivative == Dual(4.0, 2.0)
    assert (1 + x).derivative == Dual(1.0, 0.0)


def test_dual_with_numpy_scalar():
    x = autodiff.seed(np.float32(2.0))
    y = np.float32(3.0) * x
    assert isinstance(y, Dual)
    assert type(y.real) is np.float32
    assert y.derivative == 3
