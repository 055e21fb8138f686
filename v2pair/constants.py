"""
Protocol constants shared by the kernels and the value types.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class Rounding(Enum):
    """Display rounding modes for ``Fraction.to_significant`` / ``to_fixed``."""
    ROUND_DOWN = "round_down"
    ROUND_HALF_UP = "round_half_up"
    ROUND_UP = "round_up"


@unique
class SolidityType(Enum):
    UINT8 = "uint8"
    UINT256 = "uint256"


SOLIDITY_TYPE_MAXIMA = {
    SolidityType.UINT8: (1 << 8) - 1,
    SolidityType.UINT256: (1 << 256) - 1,
}

# Liquidity permanently locked by the first mint.
MINIMUM_LIQUIDITY = 1000

# feeTo mint: totalSupply * (rootK - rootKLast) / (rootK * 5 + rootKLast), i.e. 1/6 of growth.
PROTOCOL_FEE_ROOT_K_MULTIPLIER = 5

# Default swap fee factor (0.3%): amount_in * 997 / 1000 is priced.
DEFAULT_FEE_NUMERATOR = 997
DEFAULT_FEE_DENOMINATOR = 1000

LIQUIDITY_ASSET_DECIMALS = 18
DEFAULT_LIQUIDITY_SYMBOL = "UNI-V2"
DEFAULT_LIQUIDITY_NAME = "Uniswap V2"
