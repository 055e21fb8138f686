"""
Glue between the pair engine and external chain-state readers.
"""

from .fetcher import (
    LiquidityInfo,
    RemoveLiquidityAmounts,
    ReserveSource,
    fetch_pool,
    liquidity_info_of,
    liquidity_positions,
    pair_addresses,
    remove_liquidity_amounts,
)

__all__ = [
    "LiquidityInfo",
    "RemoveLiquidityAmounts",
    "ReserveSource",
    "fetch_pool",
    "liquidity_info_of",
    "liquidity_positions",
    "pair_addresses",
    "remove_liquidity_amounts",
]
