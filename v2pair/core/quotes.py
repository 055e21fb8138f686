"""
Result-typed quoting.

``Pool`` methods raise typed errors. The functions here run the same
operations and return a frozen result instead, so callers branch on
``accepted`` / ``error`` explicitly. ``or_raise()`` converts a rejected result
back into the original exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable, Optional

from ..errors import ErrorKind, PairError
from ..kernels.python.int_math import BigintIsh
from ..state.assets import Asset
from .amounts import AssetAmount
from .fractions import Fraction, Percent
from .pool import Pool

_ONE = Fraction(1)


@unique
class TradeType(Enum):
    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


def _require_slippage(slippage: Percent) -> None:
    if slippage.less_than(0):
        raise ValueError("slippage tolerance must be non-negative")


@dataclass(frozen=True)
class SwapQuote:
    """
    Outcome of quoting a single-pool swap.

    When accepted, ``input_amount``/``output_amount`` are set and ``pool_after``
    is the pool with the swap applied.
    """

    accepted: bool
    trade_type: TradeType
    input_amount: Optional[AssetAmount] = None
    output_amount: Optional[AssetAmount] = None
    pool_before: Optional[Pool] = None
    pool_after: Optional[Pool] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    exception: Optional[PairError] = None

    def or_raise(self) -> "SwapQuote":
        if not self.accepted:
            assert self.exception is not None
            raise self.exception
        return self

    def minimum_amount_out(self, slippage: Percent) -> AssetAmount:
        """Least output acceptable under ``slippage``: ``floor(out / (1 + slippage))``."""
        _require_slippage(slippage)
        out = self.or_raise().output_amount
        assert out is not None
        if self.trade_type is TradeType.EXACT_OUTPUT:
            return out
        slippage_adjusted = _ONE.add(slippage).invert().multiply(out.raw).quotient
        return AssetAmount(out.asset, slippage_adjusted)

    def maximum_amount_in(self, slippage: Percent) -> AssetAmount:
        """Most input acceptable under ``slippage``: ``floor(in * (1 + slippage))``."""
        _require_slippage(slippage)
        amount_in = self.or_raise().input_amount
        assert amount_in is not None
        if self.trade_type is TradeType.EXACT_INPUT:
            return amount_in
        slippage_adjusted = _ONE.add(slippage).multiply(amount_in.raw).quotient
        return AssetAmount(amount_in.asset, slippage_adjusted)


@dataclass(frozen=True)
class LiquidityQuote:
    """Outcome of a liquidity mint or valuation."""

    accepted: bool
    amount: Optional[AssetAmount] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    exception: Optional[PairError] = None

    def or_raise(self) -> AssetAmount:
        if not self.accepted:
            assert self.exception is not None
            raise self.exception
        assert self.amount is not None
        return self.amount


def _rejected_kwargs(exc: PairError) -> dict:
    return {"accepted": False, "error": exc.kind, "message": str(exc), "exception": exc}


def quote_exact_in(pool: Pool, input_amount: AssetAmount) -> SwapQuote:
    try:
        output_amount, pool_after = pool.get_output_amount(input_amount)
    except PairError as exc:
        return SwapQuote(trade_type=TradeType.EXACT_INPUT, pool_before=pool, **_rejected_kwargs(exc))
    return SwapQuote(
        accepted=True,
        trade_type=TradeType.EXACT_INPUT,
        input_amount=input_amount,
        output_amount=output_amount,
        pool_before=pool,
        pool_after=pool_after,
    )


def quote_exact_out(pool: Pool, output_amount: AssetAmount) -> SwapQuote:
    try:
        input_amount, pool_after = pool.get_input_amount(output_amount)
    except PairError as exc:
        return SwapQuote(trade_type=TradeType.EXACT_OUTPUT, pool_before=pool, **_rejected_kwargs(exc))
    return SwapQuote(
        accepted=True,
        trade_type=TradeType.EXACT_OUTPUT,
        input_amount=input_amount,
        output_amount=output_amount,
        pool_before=pool,
        pool_after=pool_after,
    )


def _liquidity_quote(fn: Callable[[], AssetAmount]) -> LiquidityQuote:
    try:
        amount = fn()
    except PairError as exc:
        return LiquidityQuote(**_rejected_kwargs(exc))
    return LiquidityQuote(accepted=True, amount=amount)


def quote_liquidity_minted(
    pool: Pool,
    total_supply: AssetAmount,
    amount_a: AssetAmount,
    amount_b: AssetAmount,
) -> LiquidityQuote:
    return _liquidity_quote(lambda: pool.get_liquidity_minted(total_supply, amount_a, amount_b))


def quote_liquidity_value(
    pool: Pool,
    asset: Asset,
    total_supply: AssetAmount,
    liquidity: AssetAmount,
    protocol_fee_on: bool = False,
    k_last: Optional[BigintIsh] = None,
) -> LiquidityQuote:
    return _liquidity_quote(
        lambda: pool.get_liquidity_value(asset, total_supply, liquidity, protocol_fee_on, k_last)
    )
