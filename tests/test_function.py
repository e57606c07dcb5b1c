import math

import mpmath
import numpy as np
import pytest

from dualroot import function as drf
from dualroot.autodiff import autodiff


@pytest.mark.parametrize(
    "fun, dfun",
    [
        (drf.sin, math.cos),
        (drf.cos, lambda x: -math.sin(x)),
        (drf.tan, lambda x: 1 / math.cos(x) ** 2),
        (drf.atan, lambda x: 1 / (1 + x**2)),
        (drf.sinh, math.cosh),
        (drf.cosh, math.sinh),
        (drf.tanh, lambda x: 1 / math.cosh(x) ** 2),
        (drf.exp, math.exp),
        (drf.log, lambda x: 1 / x),
        (drf.sqrt, lambda x: 0.5 / math.sqrt(x)),
    ],
)
def test_deriv(fun, dfun):
    assert pytest.approx(autodiff.deriv(fun)(0.7), 1e-12) == dfun(0.7)


def test_pow():
    grad_x = autodiff.deriv(lambda x: drf.pow(x, 2.5))
    grad_y = autodiff.deriv(lambda y: drf.pow(1.5, y))
    assert pytest.approx(grad_x(1.5), 1e-12) == 2.5 * 1.5**1.5
    assert pytest.approx(grad_y(2.0), 1e-12) == math.log(1.5) * 1.5**2


def test_constant():
    assert drf.pi(1.0) == math.pi
    assert autodiff.deriv(lambda x: drf.pi(x) * x)(2.0) == math.pi
    assert autodiff.deriv(lambda x: drf.e(x))(2.0) == 0


def test_precision():
    x = np.float32(0.5)
    assert type(drf.sin(x)) is np.float32
    assert type(drf.pow(x, 2)) is np.float32
    assert type(drf.pi(x)) is np.float32
    assert type(autodiff.deriv(drf.exp)(x)) is np.float32

    with mpmath.workdps(30):
        y = drf.sqrt(mpmath.mpf(2))
        assert isinstance(y, mpmath.mpf)
        assert abs(y**2 - 2) < mpmath.mpf("1e-28")


def test_unsupported():
    with pytest.raises(TypeError):
        drf.sin("1.0")

    with pytest.raises(TypeError):
        drf.pow([1.0], 2)


def test_pow_at_zero():
    assert autodiff.deriv(lambda x: drf.pow(x, 3))(0.0) == 0.0
    assert autodiff.deriv(lambda x: drf.pow(x, 1))(0.0) == 1.0
    assert autodiff.deriv(lambda x: drf.pow(x, 2))(-1.5) == -3.0


def test_exports():
    import dualroot

    for name in ("e", "pi", "exp", "log", "pow", "sqrt", "sin", "cos", "tan", "atan"):
        assert getattr(dualroot, name) is getattr(drf, name)

    for name in ("sinh", "cosh", "tanh"):
        assert name in dualroot.__all__
