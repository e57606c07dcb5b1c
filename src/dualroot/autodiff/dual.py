from typing import Any, Self, final

from dualroot.typing import Scalar


@final
class Dual[T: Scalar](Scalar):
    r"""Dual number carrying a value and its first derivative.

    Parameters
    ----------
    real : T
    imag : T
        Coefficient of the infinitesimal part.

    Attributes
    ----------
    real : T
    imag : T

    Notes
    -----
    Instances of this class behave like elements of :math:`T[\varepsilon]/(\varepsilon^2)`.

    `real` may itself be a :class:`Dual`. The nesting depth is tracked by
    :attr:`level`; an operand of lower level is treated as a constant, which is what
    makes ``deriv(deriv(f))`` compute second derivatives.

    Examples
    --------
    >>> x = Dual.variable(3.0)
    >>> y = x**2 - 2 * x
    >>> y
    Dual(real=3.0, imag=4.0)
    >>> y.derivative
    4.0
    """

    __slots__ = ("real", "imag", "_level")
    # numpy scalars return NotImplemented so that the reflected operator is used
    __array_ufunc__ = None
    real: T
    imag: T
    _level: int

    def __init__(self, real: T, imag: T):
        self.real = real
        self.imag = imag
        self._level = (real._level + 1) if isinstance(real, Dual) else 0

    @classmethod
    def variable(cls, value: T) -> Self:
        """Independent variable at `value`, i.e. with unit derivative.

        The unit is built as ``value * 0 + 1`` so that it has the type of `value`.
        """
        return cls(value, value * 0 + 1)

    @property
    def derivative(self) -> T:
        return self.imag

    @property
    def level(self) -> int:
        return self._level

    def _operand(self, value: Any) -> tuple[Any, Any] | None:
        # (real, imag) of an operand at the same level; imag is None for constants
        if not isinstance(value, Dual) or value._level < self._level:
            return value, None

        if value._level > self._level:
            return None

        return value.real, value.imag

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, imag={self.imag!r})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(real={self.real}, imag={self.imag})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dual):
            return NotImplemented

        return other.real == self.real and other.imag == self.imag

    def __add__(self, rhs: Self | T | int) -> Self:
        if (z := self._operand(rhs)) is None:
            return NotImplemented

        b, db = z
        return self.__class__(self.real + b, self.imag if db is None else self.imag + db)

    def __sub__(self, rhs: Self | T | int) -> Self:
        if (z := self._operand(rhs)) is None:
            return NotImplemented

        b, db = z
        return self.__class__(self.real - b, self.imag if db is None else self.imag - db)

    def __mul__(self, rhs: Self | T | int) -> Self:
        if (z := self._operand(rhs)) is None:
            return NotImplemented

        b, db = z

        if db is None:
            return self.__class__(self.real * b, self.imag * b)

        return self.__class__(self.real * b, self.real * db + self.imag * b)

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if (z := self._operand(rhs)) is None:
            return NotImplemented

        b, db = z

        if db is None:
            return self.__class__(self.real / b, self.imag / b)

        return self.__class__(self.real / b, (self.imag * b - self.real * db) / b**2)

    def __pow__(self, rhs: T | int | float) -> Self:
        if isinstance(rhs, Dual):
            return NotImplemented

        if rhs == 0:
            return self.__class__(self.real**0, self.imag * 0)

        return self.__class__(self.real**rhs, rhs * self.real ** (rhs - 1) * self.imag)

    def __neg__(self) -> Self:
        return self.__class__(-self.real, -self.imag)

    def __pos__(self) -> Self:
        return self.__class__(+self.real, +self.imag)

    def __abs__(self) -> Self:
        return -self if self.real < 0 else +self

    # reflected operators only see constants: an operand of the same level has
    # already been handled by its own forward operator

    def __radd__(self, lhs: T | int) -> Self:
        if self._operand(lhs) is None:
            return NotImplemented

        return self.__class__(lhs + self.real, self.imag)

    def __rsub__(self, lhs: T | int) -> Self:
        if self._operand(lhs) is None:
            return NotImplemented

        return self.__class__(lhs - self.real, -self.imag)

    def __rmul__(self, lhs: T | int) -> Self:
        if self._operand(lhs) is None:
            return NotImplemented

        return self.__class__(lhs * self.real, lhs * self.imag)

    def __rtruediv__(self, lhs: T | int) -> Self:
        if self._operand(lhs) is None:
            return NotImplemented

        return self.__class__(lhs / self.real, -lhs * self.imag / self.real**2)
