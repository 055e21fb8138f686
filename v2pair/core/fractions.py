"""
Exact rational arithmetic.

``Fraction`` keeps the numerator and denominator exactly as produced by
cross-multiplication; it never reduces intermediate results. Rounding happens
only in the two display operations, ``to_significant`` and ``to_fixed``, and
both work on integers end to end (no float or decimal step).

Unlike ``fractions.Fraction`` from the standard library, values are not
normalized on construction, so ``Fraction(2, 4).numerator == 2``.
"""

from __future__ import annotations

from math import gcd
from typing import Tuple, Union

from ..constants import Rounding
from ..kernels.python.int_math import BigintIsh, parse_bigint_ish, trunc_div, trunc_mod

FractionLike = Union["Fraction", BigintIsh]


def _scaled(numerator: int, denominator: int, shift: int) -> Tuple[int, int]:
    """(numerator, denominator) of ``numerator / denominator * 10**shift``."""
    if shift >= 0:
        return numerator * 10**shift, denominator
    return numerator, denominator * 10 ** (-shift)


def _round_quotient(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Round a non-negative quotient to an integer with the given mode."""
    quotient, remainder = divmod(numerator, denominator)
    if remainder == 0 or rounding is Rounding.ROUND_DOWN:
        return quotient
    if rounding is Rounding.ROUND_UP:
        return quotient + 1
    if rounding is Rounding.ROUND_HALF_UP:
        return quotient + 1 if 2 * remainder >= denominator else quotient
    raise ValueError(f"unsupported rounding mode: {rounding!r}")


def _render(mantissa: int, places: int) -> str:
    """Decimal string of ``mantissa * 10**-places``."""
    if places <= 0:
        return str(mantissa * 10 ** (-places))
    digits = str(mantissa).rjust(places + 1, "0")
    return f"{digits[:-places]}.{digits[-places:]}"


def _strip_fraction_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def _require_digits(name: str, value: int, *, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}: {value}")


class Fraction:
    """
    A rational number ``numerator / denominator`` over arbitrary-precision ints.

    Arithmetic is exact cross-multiplication, e.g. ``a/b + c/d = (a*d + c*b) / (b*d)``.
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: BigintIsh, denominator: BigintIsh = 1) -> None:
        n = parse_bigint_ish(numerator)
        d = parse_bigint_ish(denominator)
        if d == 0:
            raise ZeroDivisionError("fraction denominator must be non-zero")
        self._numerator = n
        self._denominator = d

    @staticmethod
    def _coerce(other: FractionLike) -> "Fraction":
        if isinstance(other, Fraction):
            return other
        return Fraction(other)

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        return trunc_div(self._numerator, self._denominator)

    @property
    def remainder(self) -> "Fraction":
        """What remains after removing the quotient: ``(n mod d) / d``."""
        return Fraction(trunc_mod(self._numerator, self._denominator), self._denominator)

    def invert(self) -> "Fraction":
        return Fraction(self._denominator, self._numerator)

    def add(self, other: FractionLike) -> "Fraction":
        o = self._coerce(other)
        if self._denominator == o._denominator:
            return Fraction(self._numerator + o._numerator, self._denominator)
        return Fraction(
            self._numerator * o._denominator + o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    def subtract(self, other: FractionLike) -> "Fraction":
        o = self._coerce(other)
        if self._denominator == o._denominator:
            return Fraction(self._numerator - o._numerator, self._denominator)
        return Fraction(
            self._numerator * o._denominator - o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    def multiply(self, other: FractionLike) -> "Fraction":
        o = self._coerce(other)
        return Fraction(self._numerator * o._numerator, self._denominator * o._denominator)

    def divide(self, other: FractionLike) -> "Fraction":
        o = self._coerce(other)
        if o._numerator == 0:
            raise ZeroDivisionError("division by a zero fraction")
        return Fraction(self._numerator * o._denominator, self._denominator * o._numerator)

    def _cross(self, other: FractionLike) -> Tuple[int, int]:
        # Compare as n1*d2 vs n2*d1 with the signs of both denominators folded in.
        o = self._coerce(other)
        sign = 1 if (self._denominator > 0) == (o._denominator > 0) else -1
        return self._numerator * o._denominator * sign, o._numerator * self._denominator * sign

    def less_than(self, other: FractionLike) -> bool:
        left, right = self._cross(other)
        return left < right

    def equal_to(self, other: FractionLike) -> bool:
        left, right = self._cross(other)
        return left == right

    def greater_than(self, other: FractionLike) -> bool:
        left, right = self._cross(other)
        return left > right

    def _sign_and_magnitude(self) -> Tuple[bool, int, int]:
        negative = self._numerator != 0 and ((self._numerator < 0) != (self._denominator < 0))
        return negative, abs(self._numerator), abs(self._denominator)

    def to_significant(self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """
        Decimal string with ``significant_digits`` significant digits.

        Trailing fractional zeros are dropped, so ``Fraction(1, 2).to_significant(5) == "0.5"``.
        Rounding applies to the magnitude; the sign is re-attached afterwards.
        """
        _require_digits("significant_digits", significant_digits, minimum=1)
        negative, n, d = self._sign_and_magnitude()
        if n == 0:
            return "0"

        # Exponent of the leading digit: 10**exponent <= n/d < 10**(exponent + 1).
        exponent = len(str(n)) - len(str(d))
        num, den = _scaled(n, d, -exponent)
        if num < den:
            exponent -= 1

        places = significant_digits - 1 - exponent
        num, den = _scaled(n, d, places)
        mantissa = _round_quotient(num, den, rounding)
        text = _strip_fraction_zeros(_render(mantissa, places))
        return f"-{text}" if negative else text

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """Decimal string with exactly ``decimal_places`` fractional digits."""
        _require_digits("decimal_places", decimal_places, minimum=0)
        negative, n, d = self._sign_and_magnitude()
        mantissa = _round_quotient(n * 10**decimal_places, d, rounding)
        text = _render(mantissa, decimal_places)
        return f"-{text}" if negative and mantissa != 0 else text

    # Operators delegate to the named operations so subclasses dispatch through them.

    def __add__(self, other: FractionLike) -> "Fraction":
        return self.add(other)

    def __sub__(self, other: FractionLike) -> "Fraction":
        return self.subtract(other)

    def __mul__(self, other: FractionLike) -> "Fraction":
        return self.multiply(other)

    def __truediv__(self, other: FractionLike) -> "Fraction":
        return self.divide(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Fraction, int)) or isinstance(other, bool):
            return NotImplemented
        return self.equal_to(other)

    def __lt__(self, other: FractionLike) -> bool:
        return self.less_than(other)

    def __le__(self, other: FractionLike) -> bool:
        return not self.greater_than(other)

    def __gt__(self, other: FractionLike) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: FractionLike) -> bool:
        return not self.less_than(other)

    def __hash__(self) -> int:
        g = gcd(self._numerator, self._denominator)
        n, d = self._numerator // g, self._denominator // g
        if d < 0:
            n, d = -n, -d
        return hash((n, d))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._numerator}, {self._denominator})"


_ONE_HUNDRED = Fraction(100)


class Percent(Fraction):
    """
    A fraction displayed as a percentage (``Percent(1, 200)`` renders as ``0.5``).

    The denominator is always positive; the sign lives on the numerator.
    """

    __slots__ = ()

    def __init__(self, numerator: BigintIsh, denominator: BigintIsh = 100) -> None:
        super().__init__(numerator, denominator)
        if self._denominator < 0:
            self._numerator = -self._numerator
            self._denominator = -self._denominator

    @classmethod
    def from_fraction(cls, fraction: Fraction) -> "Percent":
        return cls(fraction.numerator, fraction.denominator)

    def add(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(super().add(other))

    def subtract(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(super().subtract(other))

    def multiply(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(super().multiply(other))

    def divide(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(super().divide(other))

    def invert(self) -> "Percent":
        return Percent(self._denominator, self._numerator)

    def _as_percentage(self) -> Fraction:
        return Fraction(self._numerator, self._denominator).multiply(_ONE_HUNDRED)

    def to_significant(self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self._as_percentage().to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self._as_percentage().to_fixed(decimal_places, rounding)

    def __str__(self) -> str:
        return f"{self.to_significant()}%"
