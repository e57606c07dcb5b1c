import functools
from collections.abc import Callable
from typing import Any

from dualroot.autodiff.dual import Dual
from dualroot.typing import Differentiable, Scalar


def seed[T: Scalar](value: T) -> Dual[T]:
    """Lift the number to a variable of forward-mode differentiation.

    The result has `value` as its real part and a unit derivative with respect to
    itself. The unit is built from `value`, so the precision of `value` is kept.

    Parameters
    ----------
    value : Scalar
        Point at which the variable is placed.

    Returns
    -------
    Dual

    Examples
    --------
    >>> x = seed(2.0)
    >>> x
    Dual(real=2.0, imag=1.0)
    >>> derivative(x**3)
    12.0
    """
    return Dual.variable(value)


def derivative[T](value: Differentiable[T]) -> T:
    """Return the first derivative carried by the dual number.

    Raises
    ------
    TypeError
        If `value` is not a dual number. Plain numbers have no derivative.
    """
    if not isinstance(value, Dual):
        raise TypeError(f"{type(value).__name__!r} carries no derivative")

    return value.derivative


def deriv[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Warnings
    --------
    `fun` must neither be a constant nor contain conditional branches.

    Examples
    --------
    >>> from dualroot import function as drf
    >>> f = lambda x: x**2 + drf.sqrt(x + 3)
    >>> df = deriv(f)
    >>> print(format(df(1.2), ".6g"))
    2.64398

    The second-order derivative can be obtained in the same manner.

    >>> ddf = deriv(df)
    >>> print(format(ddf(1.2), ".6g"))
    1.97096
    """

    def result(x, *args, **kwargs):
        tmp: Any = fun(seed(x), *args, **kwargs)  # type: ignore
        return tmp.derivative

    return result


def _defderiv[**P](
    fun: Callable[P, Any], deriv: Callable[P, Any], *, argnum: int = 0
) -> None:
    if "_dualroot_is_primitive" not in fun.__dict__:
        raise ValueError

    fun.__dict__["_dualroot_derivs"][argnum] = deriv


def _primitive[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, Dual) for x in args):
            return fun(*args, **kwargs)

        level = max(x.level for x in args if isinstance(x, Dual))
        args_real: list = []
        args_dual: list[tuple[int, Dual]] = []

        for argnum, arg in enumerate(args):
            if not isinstance(arg, Dual) or arg.level < level:
                args_real.append(arg)
                continue

            args_real.append(arg.real)
            args_dual.append((argnum, arg))

        # chain rule, summed over the arguments at the outermost level
        imag: Any = None

        for argnum, arg in args_dual:
            tmp = derivs[argnum](*args_real, **kwargs) * arg.imag
            imag = tmp if imag is None else imag + tmp

        return Dual(wrapper(*args_real, **kwargs), imag)

    wrapper.__dict__["_dualroot_is_primitive"] = True
    wrapper.__dict__["_dualroot_derivs"] = derivs
    return wrapper  # type: ignore
