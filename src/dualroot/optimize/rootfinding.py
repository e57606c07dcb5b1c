import dataclasses
import enum
import logging
import math
import sys
from collections.abc import Callable
from typing import Any, Final, Literal

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualroot.autodiff.autodiff import derivative, seed
from dualroot.autodiff.dual import Dual

logger = logging.getLogger(__name__)


class InvalidIntervalError(ValueError):
    """Raised when the search interval is empty or the resolution is not positive."""


class NewtonStatus(enum.Enum):
    """Outcome of a Newton run.

    Attributes
    ----------
    CONVERGED
        The residual fell below the tolerance.
    NONCONVERGENCE
        The iteration budget was exhausted, or an iterate left the domain of the
        function.
    SINGULAR
        The derivative vanished, so the Newton update is undefined.
    ESCAPED
        A root was found, but outside the bracket the run was seeded from.
    """

    CONVERGED = enum.auto()
    NONCONVERGENCE = enum.auto()
    SINGULAR = enum.auto()
    ESCAPED = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


CONVERGED: Final = NewtonStatus.CONVERGED
NONCONVERGENCE: Final = NewtonStatus.NONCONVERGENCE
SINGULAR: Final = NewtonStatus.SINGULAR
ESCAPED: Final = NewtonStatus.ESCAPED


@dataclasses.dataclass(frozen=True, slots=True)
class NewtonResult[T]:
    """Output of :func:`newton`.

    Attributes
    ----------
    root : T | None
        Converged root, or ``None`` if the run failed.
    iterations : int
        Number of Newton updates applied.
    status : NewtonStatus
    last : T
        Last iterate.
    """

    root: T | None
    iterations: int
    status: NewtonStatus
    last: T

    @property
    def converged(self) -> bool:
        return self.status is CONVERGED


@dataclasses.dataclass(frozen=True, slots=True)
class Bracket[T]:
    """Pair of adjacent scan points between which the function changes sign.

    A degenerate bracket, whose `lower` equals `upper`, marks a scan point at which
    the function vanishes exactly.

    Attributes
    ----------
    lower : T
    upper : T
    """

    lower: T
    upper: T

    def isdegenerate(self) -> bool:
        return self.lower == self.upper

    def mid(self) -> T:
        return self.lower + (self.upper - self.lower) / 2

    def width(self) -> T:
        return self.upper - self.lower


@dataclasses.dataclass(frozen=True, slots=True)
class FailedBracket[T]:
    """Bracket for which Newton refinement did not yield a root.

    Attributes
    ----------
    bracket : Bracket
    status : NewtonStatus
        Status of the last attempt.
    seed : T
        Starting point of the last attempt.
    last : T
        Last iterate of the last attempt.
    """

    bracket: Bracket[T]
    status: NewtonStatus
    seed: T
    last: T


@dataclasses.dataclass(frozen=True, slots=True)
class RootSearchResult[T]:
    """Output of :func:`root_search`.

    Attributes
    ----------
    roots : list[T]
        Distinct roots in scan order.
    failures : list[FailedBracket]
        Brackets in which no root could be located.
    brackets : list[Bracket]
        All brackets found by the scan.
    """

    roots: list[T] = dataclasses.field(default_factory=list)
    failures: list[FailedBracket[T]] = dataclasses.field(default_factory=list)
    brackets: list[Bracket[T]] = dataclasses.field(default_factory=list)


def newton[T](
    fun: Callable,
    x0: T,
    max_iter: int = 50,
    tol: Any = 1e-6,
    fprime: Callable | None = None,
) -> NewtonResult[T]:
    """Refine a root of the univariate scalar-valued function by Newton's method.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    x0 : T
        Initial guess. All iterates are computed in the type of `x0`.
    max_iter : int, default=50
        Maximum number of evaluations of `fun`.
    tol : default=1e-6
        The run converges once ``abs(fun(x)) < tol``.
    fprime : Callable, optional
        Derivative of `fun`. If omitted, `fun` is evaluated at dual numbers and the
        derivative is obtained by automatic differentiation.

    Returns
    -------
    NewtonResult
        Failures are reported through :attr:`NewtonResult.status`; they are never
        raised.

    Warnings
    --------
    `fun` must neither be a constant nor contain conditional branches.

    See Also
    --------
    dualroot.autodiff.seed

    Examples
    --------
    >>> r = newton(lambda x: x - 5, 0.0)
    >>> r.root, r.iterations
    (5.0, 1)
    >>> newton(lambda x: x**2 + 1, 0.5).status
    <NewtonStatus.NONCONVERGENCE>
    """
    if max_iter <= 0:
        raise ValueError("max_iter must be positive")

    if not tol > 0:
        raise ValueError("tol must be positive")

    x = x0

    for i in range(max_iter):
        try:
            fx, fpx = _evaluate(fun, x, fprime)
        except (ArithmeticError, ValueError) as exc:
            # the iterate left the domain of fun
            logger.debug("newton: evaluation failed at x=%s: %s", x, exc)
            return NewtonResult(None, i, NONCONVERGENCE, x)

        logger.debug("newton: iteration %d x=%s f(x)=%s f'(x)=%s", i, x, fx, fpx)

        if not (_isfinite(fx) and _isfinite(fpx)):
            return NewtonResult(None, i, NONCONVERGENCE, x)

        if abs(fx) < tol:
            return NewtonResult(x, i, CONVERGED, x)

        if abs(fpx) <= _epsilon(fpx):
            logger.debug("newton: singular derivative at x=%s", x)
            return NewtonResult(None, i, SINGULAR, x)

        x = x - fx / fpx

    logger.debug("newton: no convergence from x0=%s in %d iterations", x0, max_iter)
    return NewtonResult(None, max_iter, NONCONVERGENCE, x)


def find_bisections[T](fun: Callable, low: T, high: T, n: int) -> list[Bracket[T]]:
    """Detect sign changes of the function on a uniform partition of the interval.

    Parameters
    ----------
    fun : Callable
        Function to scan. It is evaluated at plain numbers only.
    low : T
        Lower bound of the interval.
    high : T
        Upper bound of the interval.
    n : int
        Number of subintervals.

    Returns
    -------
    list[Bracket]
        Brackets ordered from `low` to `high`. A scan point at which `fun` vanishes
        exactly yields a degenerate bracket, and the two subintervals adjacent to it
        yield none.

    Raises
    ------
    InvalidIntervalError
        If ``low > high`` or ``n < 1``.

    Warnings
    --------
    Roots closer together than ``(high - low) / n`` may be missed or merged.

    Examples
    --------
    >>> from dualroot import function as drf
    >>> len(find_bisections(drf.sin, -5.0, 5.0, 1000))
    3
    >>> find_bisections(lambda x: x, -1.0, 1.0, 2)
    [Bracket(lower=0.0, upper=0.0)]
    """
    _check_interval(low, high, n)

    if low == high:
        points = [low]
    else:
        points = [low + (high - low) * i / n for i in range(n)]
        points.append(high)

    signs = [_sign(fun(x)) for x in points]
    result: list[Bracket[T]] = []

    for i, (x, s) in enumerate(zip(points, signs)):
        if s == 0:
            result.append(Bracket(x, x))
            continue

        if i + 1 == len(points) or s is None or signs[i + 1] is None:
            continue

        if s * signs[i + 1] < 0:
            result.append(Bracket(x, points[i + 1]))

    logger.debug("find_bisections: %d brackets in [%s, %s]", len(result), low, high)
    return result


def root_search[T](
    fun: Callable,
    low: T,
    high: T,
    n: int = 1000,
    max_iter: int = 50,
    tol: Any = 1e-6,
    dedup_tol: Any = None,
    fprime: Callable | None = None,
    seeds: int = 1,
) -> RootSearchResult[T]:
    """Find all roots of the univariate scalar-valued function in the interval.

    The interval is scanned for sign changes by :func:`find_bisections`, and each
    bracket is refined by :func:`newton`.

    Parameters
    ----------
    fun : Callable
        Function to find roots of.
    low : T
        Lower bound of the interval.
    high : T
        Upper bound of the interval.
    n : int, default=1000
        Number of subintervals scanned for sign changes.
    max_iter : int, default=50
        Maximum number of iterations of each Newton run.
    tol : default=1e-6
        Convergence tolerance of Newton runs.
    dedup_tol : optional
        Roots closer than `dedup_tol` are regarded as the same root, and the one
        found first in scan order is kept (the default is `tol`).
    fprime : Callable, optional
        Derivative of `fun` (the default is automatic differentiation).
    seeds : int, default=1
        Number of starting points tried per bracket. The points are the centres of
        `seeds` equal cells of the bracket, tried from the midpoint outwards. A
        bracket fails only if every starting point fails.

    Returns
    -------
    RootSearchResult

    Raises
    ------
    InvalidIntervalError
        If ``low > high`` or ``n < 1``.

    Warnings
    --------
    `fun` must neither be a constant nor contain conditional branches. Roots closer
    together than ``(high - low) / n`` may be missed or merged.

    See Also
    --------
    find_bisections, newton

    Examples
    --------
    >>> from dualroot import function as drf
    >>> r = root_search(drf.sin, -5.0, 5.0, n=2000, tol=1e-4)
    >>> [round(x, 6) for x in r.roots]
    [-3.141593, 0.0, 3.141593]
    >>> r.failures
    []
    """
    _check_interval(low, high, n)

    if max_iter <= 0:
        raise ValueError("max_iter must be positive")

    if not tol > 0:
        raise ValueError("tol must be positive")

    if dedup_tol is None:
        dedup_tol = tol

    if not dedup_tol > 0:
        raise ValueError("dedup_tol must be positive")

    if seeds <= 0:
        raise ValueError("seeds must be positive")

    brackets = find_bisections(fun, low, high, n)
    result = RootSearchResult(brackets=brackets)

    for bracket in brackets:
        match _refine(fun, bracket, max_iter, tol, fprime, seeds):
            case "ROOT", root:
                if all(abs(root - x) >= dedup_tol for x in result.roots):
                    result.roots.append(root)

            case "FAILED", failure:
                logger.debug("root_search: %r failed (%s)", bracket, failure.status)
                result.failures.append(failure)

    return result


type _RefineResult[T] = (
    tuple[Literal["ROOT"], T] | tuple[Literal["FAILED"], FailedBracket[T]]
)


def _refine[T](
    fun: Callable,
    bracket: Bracket[T],
    max_iter: int,
    tol: Any,
    fprime: Callable | None,
    seeds: int,
) -> _RefineResult[T]:
    if bracket.isdegenerate():
        guesses = [bracket.lower]
    elif seeds == 1:
        guesses = [bracket.mid()]
    else:
        lower = bracket.lower
        width = bracket.width()
        order = sorted(range(seeds), key=lambda k: abs(2 * k + 1 - seeds))
        guesses = [lower + width * (2 * k + 1) / (2 * seeds) for k in order]

    for guess in guesses:
        r = newton(fun, guess, max_iter, tol, fprime)

        match r.status:
            case NewtonStatus.CONVERGED if (
                bracket.lower - tol <= r.root <= bracket.upper + tol  # type: ignore
            ):
                return ("ROOT", r.root)  # type: ignore

            case NewtonStatus.CONVERGED:
                status = ESCAPED

            case _:
                status = r.status

    return ("FAILED", FailedBracket(bracket, status, guess, r.last))


def _evaluate(fun: Callable, x: Any, fprime: Callable | None) -> tuple[Any, Any]:
    if fprime is not None:
        return fun(x), fprime(x)

    match fun(seed(x)):
        case Dual() as y:
            return y.real, derivative(y)

        case y:
            return y, y * 0


def _check_interval(low: Any, high: Any, n: int) -> None:
    if not isinstance(n, int | np.integer):
        raise TypeError("n must be an integer")

    if not low <= high:
        raise InvalidIntervalError(f"lower bound {low} exceeds upper bound {high}")

    if n < 1:
        raise InvalidIntervalError(f"resolution must be positive, got {n}")


def _sign(value: Any) -> int | None:
    if value > 0:
        return 1

    if value < 0:
        return -1

    if value == 0:
        return 0

    return None


def _isfinite(value: Any) -> bool:
    match value:
        case mpmath.ctx_mp_python.mpnumeric():
            return bool(mpmath.isfinite(value))

        case _:
            return math.isfinite(value)


def _epsilon(value: Any) -> Any:
    match value:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.mp.eps

        case np.floating():
            return np.finfo(value.dtype).eps

        case float():
            return sys.float_info.epsilon

        case _:
            return value * 0
