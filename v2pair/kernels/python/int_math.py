"""
Integer helpers shared by the kernels and the fraction type.

Division here truncates toward zero (the EVM / big-integer library rule),
which differs from Python's ``//`` only for negative operands.
"""

from __future__ import annotations

from typing import Union

BigintIsh = Union[int, str]


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def parse_bigint_ish(value: BigintIsh) -> int:
    """
    Parse an int or an integer string (decimal, or hex with a ``0x`` prefix).
    """
    if isinstance(value, bool):
        raise TypeError("bool is not an integer amount")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        body = text[1:] if text[:1] in "+-" else text
        try:
            if body[:2].lower() == "0x":
                parsed = int(body[2:], 16)
                return -parsed if text.startswith("-") else parsed
            return int(text, 10)
        except ValueError as exc:
            raise ValueError(f"invalid integer string: {value!r}") from exc
    raise TypeError(f"expected int or str, got {type(value).__name__}")


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def trunc_mod(numerator: int, denominator: int) -> int:
    """Remainder matching ``trunc_div`` (takes the sign of the numerator)."""
    return numerator - denominator * trunc_div(numerator, denominator)


def sqrt(value: int) -> int:
    """
    Exact floor square root via the Babylonian iteration used by the pair contract.

        z = y; x = y // 2 + 1
        while x < z: z = x; x = (y // x + x) // 2

    The iterate strictly decreases until it reaches floor(sqrt(y)), so the loop
    terminates with the exact value for integers of any size.
    """
    require_int("value", value)
    if value < 0:
        raise ValueError("sqrt of a negative number")
    if value > 3:
        z = value
        x = value // 2 + 1
        while x < z:
            z = x
            x = (value // x + x) // 2
        return z
    if value != 0:
        return 1
    return 0
