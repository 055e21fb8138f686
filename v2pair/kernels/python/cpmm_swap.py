"""
CPMM swap kernel (pair-contract semantics).

Reproduces the router library's quote math exactly:
- The fee is applied as a numerator/denominator factor on the input
  (``amount_in * 997`` priced against ``reserve_in * 1000`` by default).
- Exact-in output is floored.
- Exact-out input is ``floor(...) + 1``, never a ceiling division, so it can
  exceed the true minimum by one unit exactly when the contract's would.
- The whole input stays in the pool.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR
from ...errors import InsufficientInputAmountError, InsufficientReservesError
from .int_math import require_int


@dataclass(frozen=True)
class FeeFactor:
    """Fraction of the input that is priced: ``numerator / denominator``."""

    numerator: int = DEFAULT_FEE_NUMERATOR
    denominator: int = DEFAULT_FEE_DENOMINATOR

    def __post_init__(self) -> None:
        require_int("numerator", self.numerator)
        require_int("denominator", self.denominator)
        if self.denominator <= 0:
            raise ValueError("fee denominator must be positive")
        if not (0 < self.numerator <= self.denominator):
            raise ValueError(f"fee numerator must be in (0, {self.denominator}]")


DEFAULT_FEE = FeeFactor()


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    amount_in_with_fee: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class SwapExactOutResult:
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def _require_reserves(reserve_in: int, reserve_out: int) -> None:
    if reserve_in < 0 or reserve_out < 0:
        raise ValueError("reserves must be non-negative")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientReservesError("cannot swap against an empty reserve")


def get_amount_out(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee: FeeFactor = DEFAULT_FEE,
) -> SwapExactInResult:
    """
    Exact-in quote + post-state.

        amount_in_with_fee = amount_in * fee.numerator
        amount_out = floor(amount_in_with_fee * reserve_out
                           / (reserve_in * fee.denominator + amount_in_with_fee))

    Raises InsufficientReservesError on an empty reserve and
    InsufficientInputAmountError if the output rounds down to zero.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
    ):
        require_int(name, v)

    _require_reserves(reserve_in, reserve_out)
    if amount_in < 0:
        raise ValueError("amount_in must be non-negative")

    amount_in_with_fee = amount_in * fee.numerator
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * fee.denominator + amount_in_with_fee
    amount_out = numerator // denominator

    if amount_out == 0:
        raise InsufficientInputAmountError("amount_out is zero (trade too small)")

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    return SwapExactInResult(
        amount_out=amount_out,
        amount_in_with_fee=amount_in_with_fee,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=reserve_in * reserve_out,
        k_after=new_reserve_in * new_reserve_out,
    )


def get_amount_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_out: int,
    fee: FeeFactor = DEFAULT_FEE,
) -> SwapExactOutResult:
    """
    Exact-out quote + post-state.

        numerator = reserve_in * amount_out * fee.denominator
        denominator = (reserve_out - amount_out) * fee.numerator
        amount_in = floor(numerator / denominator) + 1

    The pool can never be fully drained: ``amount_out >= reserve_out`` raises
    InsufficientReservesError.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_out", amount_out),
    ):
        require_int(name, v)

    _require_reserves(reserve_in, reserve_out)
    if amount_out < 0:
        raise ValueError("amount_out must be non-negative")
    if amount_out >= reserve_out:
        raise InsufficientReservesError(
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )

    numerator = reserve_in * amount_out * fee.denominator
    denominator = (reserve_out - amount_out) * fee.numerator
    amount_in = numerator // denominator + 1

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    return SwapExactOutResult(
        amount_in=amount_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=reserve_in * reserve_out,
        k_after=new_reserve_in * new_reserve_out,
    )
