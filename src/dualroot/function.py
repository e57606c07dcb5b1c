"""
#################################################
Mathematical functions (:mod:`dualroot.function`)
#################################################

.. currentmodule:: dualroot.function

This module provides differentiable mathematical functions. Each function accepts
built-in numbers, NumPy floating-point scalars, mpmath numbers, and dual numbers
whose coefficients are any of these. The result keeps the type of the argument, so
single-precision and arbitrary-precision evaluations stay in their own precision.

Constant functions
==================

.. autosummary::
    :toctree: generated/

    e
    pi

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqrt

Trigonometric and hyperbolic functions
======================================

.. autosummary::
    :toctree: generated/

    atan
    cos
    cosh
    sin
    sinh
    tan
    tanh

"""

import math
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualroot.autodiff.autodiff import _defderiv, _primitive
from dualroot.autodiff.dual import Dual


def _unary(x, fmath, fnumpy, fmpmath):
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return fmpmath(x)

        case np.floating():
            return fnumpy(x)

        case float() | int():
            return fmath(x)

        case _:
            raise TypeError


@overload
def e[T: Dual](x: T, /) -> T: ...


@overload
def e(x: float | int, /) -> float: ...


@overload
def e(x: Any, /) -> Any: ...


@_primitive
def e(x, /):
    """Napier's constant in the precision of `x`.

    Examples
    --------
    >>> print(format(e(1.0), ".6f"))
    2.718282
    """
    return _unary(x, lambda _: math.e, lambda x: x.dtype.type(np.e), lambda _: +mpmath.e)


@overload
def pi[T: Dual](x: T, /) -> T: ...


@overload
def pi(x: float | int, /) -> float: ...


@overload
def pi(x: Any, /) -> Any: ...


@_primitive
def pi(x, /):
    """Pi in the precision of `x`.

    Examples
    --------
    >>> print(format(pi(1.0), ".6f"))
    3.141593
    >>> pi(np.float32(0.0)).dtype
    dtype('float32')
    """
    return _unary(
        x, lambda _: math.pi, lambda x: x.dtype.type(np.pi), lambda _: +mpmath.pi
    )


@overload
def exp[T: Dual](x: T, /) -> T: ...


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


@_primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    return _unary(x, math.exp, np.exp, mpmath.exp)


@overload
def log[T: Dual](x: T, /) -> T: ...


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


@_primitive
def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    return _unary(x, math.log, np.log, mpmath.log)


@overload
def pow[T: Dual](x: T | float | int, y: T, /) -> T: ...


@overload
def pow[T: Dual](x: T, y: float | int, /) -> T: ...


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@_primitive
def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case (np.floating(), _) | (_, np.floating()):
            return np.power(x, y)

        case (float() | int(), float() | int()):
            return math.pow(x, y)

        case _:
            raise TypeError


@overload
def sqrt[T: Dual](x: T, /) -> T: ...


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


@_primitive
def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    return _unary(x, math.sqrt, np.sqrt, mpmath.sqrt)


@overload
def sin[T: Dual](x: T, /) -> T: ...


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


@_primitive
def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    """
    return _unary(x, math.sin, np.sin, mpmath.sin)


@overload
def cos[T: Dual](x: T, /) -> T: ...


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


@_primitive
def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    return _unary(x, math.cos, np.cos, mpmath.cos)


@overload
def tan[T: Dual](x: T, /) -> T: ...


@overload
def tan(x: float | int, /) -> float: ...


@overload
def tan(x: Any, /) -> Any: ...


@_primitive
def tan(x, /):
    """Tangent."""
    return _unary(x, math.tan, np.tan, mpmath.tan)


@overload
def atan[T: Dual](x: T, /) -> T: ...


@overload
def atan(x: float | int, /) -> float: ...


@overload
def atan(x: Any, /) -> Any: ...


@_primitive
def atan(x, /):
    """Inverse tangent.

    Examples
    --------
    >>> print(format(atan(1.0), ".6f"))
    0.785398
    """
    return _unary(x, math.atan, np.arctan, mpmath.atan)


@overload
def sinh[T: Dual](x: T, /) -> T: ...


@overload
def sinh(x: float | int, /) -> float: ...


@overload
def sinh(x: Any, /) -> Any: ...


@_primitive
def sinh(x, /):
    """Hyperbolic sine."""
    return _unary(x, math.sinh, np.sinh, mpmath.sinh)


@overload
def cosh[T: Dual](x: T, /) -> T: ...


@overload
def cosh(x: float | int, /) -> float: ...


@overload
def cosh(x: Any, /) -> Any: ...


@_primitive
def cosh(x, /):
    """Hyperbolic cosine."""
    return _unary(x, math.cosh, np.cosh, mpmath.cosh)


@overload
def tanh[T: Dual](x: T, /) -> T: ...


@overload
def tanh(x: float | int, /) -> float: ...


@overload
def tanh(x: Any, /) -> Any: ...


@_primitive
def tanh(x, /):
    """Hyperbolic tangent."""
    return _unary(x, math.tanh, np.tanh, mpmath.tanh)


_defderiv(e, lambda x: x * 0)
_defderiv(pi, lambda x: x * 0)
_defderiv(exp, exp)
_defderiv(log, lambda x: 1 / x)
_defderiv(pow, lambda x, y: y * pow(x, y - 1), argnum=0)
_defderiv(pow, lambda x, y: log(x) * pow(x, y), argnum=1)
_defderiv(sqrt, lambda x: 1 / (2 * sqrt(x)))
_defderiv(sin, cos)
_defderiv(cos, lambda x: -sin(x))
_defderiv(tan, lambda x: 1 + tan(x) ** 2)
_defderiv(atan, lambda x: 1 / (1 + x**2))
_defderiv(sinh, cosh)
_defderiv(cosh, sinh)
_defderiv(tanh, lambda x: 1 - tanh(x) ** 2)
