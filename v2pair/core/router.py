"""
Method-agnostic call payloads for the router contract.

The engine never builds, signs or sends a transaction. These helpers turn
quotes into ``CallParameters`` (method name, raw-integer / address arguments,
attached native value) for a transaction-building collaborator to encode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..config import ChainConfig, get_chain_config
from ..errors import AssetMismatchError
from ..state.assets import Asset, validate_and_parse_address, wrapped_native_asset
from .amounts import AssetAmount
from .fractions import Fraction, Percent
from .pool import Pool
from .quotes import SwapQuote, TradeType


@dataclass(frozen=True)
class CallParameters:
    """
    Attributes:
        method_name: Router method to call
        args: Positional arguments (ints, checksum addresses, address lists)
        value: Native value to attach, in raw units (0 when none)
    """
    method_name: str
    args: Tuple[Any, ...]
    value: int = 0


@dataclass(frozen=True)
class TradeOptions:
    """
    Attributes:
        allowed_slippage: Tolerance applied to the non-fixed side of the trade
        recipient: Address receiving the output
        deadline: Unix timestamp after which the router rejects the call
        native_in: Pay the input in the native unit (pool sees the wrapped asset)
        native_out: Receive the output in the native unit
        fee_on_transfer: Use the fee-on-transfer-supporting variants (exact-in only)
    """
    allowed_slippage: Percent
    recipient: str
    deadline: int
    native_in: bool = False
    native_out: bool = False
    fee_on_transfer: bool = False


def swap_call_parameters(quote: SwapQuote, options: TradeOptions) -> CallParameters:
    """
    Router call for an accepted single-pool swap quote.

    ``native_in`` attaches the input (or its slippage maximum) as value.

    Raises:
        AssetMismatchError: If the leg flagged native is not the chain's wrapped native asset
    """
    if options.native_in and options.native_out:
        raise ValueError("a swap cannot have native assets on both sides")
    quote.or_raise()
    assert quote.input_amount is not None and quote.output_amount is not None
    assert quote.pool_before is not None

    if options.native_in or options.native_out:
        pool = quote.pool_before
        wrapped = wrapped_native_asset(pool.addressing.chain(pool.chain_id))
        native_side = quote.input_amount if options.native_in else quote.output_amount
        if not native_side.asset.equals(wrapped):
            raise AssetMismatchError(
                f"native leg must be the wrapped native asset {wrapped!r}, got {native_side.asset!r}"
            )

    to = validate_and_parse_address(options.recipient)
    path = [quote.input_amount.asset.address, quote.output_amount.asset.address]
    amount_in = quote.maximum_amount_in(options.allowed_slippage).raw
    amount_out = quote.minimum_amount_out(options.allowed_slippage).raw
    deadline = int(options.deadline)

    if quote.trade_type is TradeType.EXACT_INPUT:
        if options.native_in:
            method, args, value = "swapExactETHForTokens", (amount_out, path, to, deadline), amount_in
        elif options.native_out:
            method, args, value = "swapExactTokensForETH", (amount_in, amount_out, path, to, deadline), 0
        else:
            method, args, value = "swapExactTokensForTokens", (amount_in, amount_out, path, to, deadline), 0
        if options.fee_on_transfer:
            method += "SupportingFeeOnTransferTokens"
        return CallParameters(method_name=method, args=args, value=value)

    if options.fee_on_transfer:
        raise ValueError("fee-on-transfer variants only exist for exact-input swaps")
    if options.native_in:
        return CallParameters("swapETHForExactTokens", (amount_out, path, to, deadline), amount_in)
    if options.native_out:
        return CallParameters("swapTokensForExactETH", (amount_out, amount_in, path, to, deadline))
    return CallParameters("swapTokensForExactTokens", (amount_out, amount_in, path, to, deadline))


def _minimum(amount: AssetAmount, slippage: Percent) -> int:
    if slippage.less_than(0) or slippage.greater_than(1):
        raise ValueError("slippage tolerance must be within [0, 1]")
    return Fraction(1).subtract(slippage).multiply(amount.raw).quotient


def _split_native_leg(
    amount_a: AssetAmount, amount_b: AssetAmount, wrapped: Asset
) -> Tuple[AssetAmount, AssetAmount]:
    """(native leg, token leg) of a two-asset deposit."""
    if amount_a.asset.equals(wrapped):
        return amount_a, amount_b
    if amount_b.asset.equals(wrapped):
        return amount_b, amount_a
    raise AssetMismatchError(f"neither deposit asset is the wrapped native asset {wrapped!r}")


def add_liquidity_call_parameters(
    amount_a: AssetAmount,
    amount_b: AssetAmount,
    *,
    allowed_slippage: Percent,
    recipient: str,
    deadline: int,
    native: bool = False,
    chain: Optional[ChainConfig] = None,
) -> CallParameters:
    """
    ``addLiquidity`` / ``addLiquidityETH`` with minima ``floor(amount * (1 - slippage))``.

    With ``native``, whichever amount is in the chain's wrapped native asset is
    attached as value. ``chain`` defaults to the bundled configuration for the
    amounts' chain.

    Raises:
        AssetMismatchError: If ``native`` is set and neither leg is wrapped native
    """
    to = validate_and_parse_address(recipient)
    deadline = int(deadline)
    if native:
        chain = get_chain_config(amount_a.asset.chain_id) if chain is None else chain
        native_leg, token_leg = _split_native_leg(amount_a, amount_b, wrapped_native_asset(chain))
        return CallParameters(
            "addLiquidityETH",
            (
                token_leg.asset.address,
                token_leg.raw,
                _minimum(token_leg, allowed_slippage),
                _minimum(native_leg, allowed_slippage),
                to,
                deadline,
            ),
            native_leg.raw,
        )
    return CallParameters(
        "addLiquidity",
        (
            amount_a.asset.address,
            amount_b.asset.address,
            amount_a.raw,
            amount_b.raw,
            _minimum(amount_a, allowed_slippage),
            _minimum(amount_b, allowed_slippage),
            to,
            deadline,
        ),
    )


def remove_liquidity_call_parameters(
    pool: Pool,
    liquidity: AssetAmount,
    amount0: AssetAmount,
    amount1: AssetAmount,
    *,
    allowed_slippage: Percent,
    recipient: str,
    deadline: int,
    native_asset_address: str = "",
) -> CallParameters:
    """
    ``removeLiquidity`` / ``removeLiquidityETH`` for burning ``liquidity``.

    ``amount0``/``amount1`` are the expected outputs (see
    ``integration.fetcher.remove_liquidity_amounts``). Pass the chain's wrapped
    native address as ``native_asset_address`` to receive that leg natively.
    """
    amount0, amount1 = pool.sorted_amounts(amount0, amount1)
    if not (amount0.asset.equals(pool.asset0) and amount1.asset.equals(pool.asset1)):
        raise AssetMismatchError("withdrawn amounts do not match the pool's assets")
    if not liquidity.asset.equals(pool.liquidity_asset):
        raise AssetMismatchError("liquidity must be denominated in the pool's liquidity asset")
    to = validate_and_parse_address(recipient)
    deadline = int(deadline)

    if native_asset_address:
        native_address = validate_and_parse_address(native_asset_address)
        if amount0.asset.address == native_address:
            native_leg, token_leg = amount0, amount1
        elif amount1.asset.address == native_address:
            native_leg, token_leg = amount1, amount0
        else:
            raise AssetMismatchError("neither pool asset is the wrapped native asset")
        return CallParameters(
            "removeLiquidityETH",
            (
                token_leg.asset.address,
                liquidity.raw,
                _minimum(token_leg, allowed_slippage),
                _minimum(native_leg, allowed_slippage),
                to,
                deadline,
            ),
        )
    return CallParameters(
        "removeLiquidity",
        (
            amount0.asset.address,
            amount1.asset.address,
            liquidity.raw,
            _minimum(amount0, allowed_slippage),
            _minimum(amount1, allowed_slippage),
            to,
            deadline,
        ),
    )
