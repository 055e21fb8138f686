"""
Pair engine: exact fractions, asset amounts, the pool entity and quoting.
"""

from .amounts import AssetAmount, Price
from .fractions import Fraction, Percent
from .pool import Pool
from .quotes import (
    LiquidityQuote,
    SwapQuote,
    TradeType,
    quote_exact_in,
    quote_exact_out,
    quote_liquidity_minted,
    quote_liquidity_value,
)
from .router import (
    CallParameters,
    TradeOptions,
    add_liquidity_call_parameters,
    remove_liquidity_call_parameters,
    swap_call_parameters,
)

__all__ = [
    "AssetAmount",
    "Price",
    "Fraction",
    "Percent",
    "Pool",
    "LiquidityQuote",
    "SwapQuote",
    "TradeType",
    "quote_exact_in",
    "quote_exact_out",
    "quote_liquidity_minted",
    "quote_liquidity_value",
    "CallParameters",
    "TradeOptions",
    "add_liquidity_call_parameters",
    "remove_liquidity_call_parameters",
    "swap_call_parameters",
]
