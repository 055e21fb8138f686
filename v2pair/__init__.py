"""
Client-side accounting engine for constant-product pairs.

Exact integer/rational math for swap quotes, liquidity minting and valuation,
plus deterministic CREATE2 pool addressing. Chain state comes from a caller-
supplied ``ReserveSource``; nothing here performs I/O beyond reading the
bundled chain configuration.
"""

from .config import ChainConfig, get_chain_config, load_chain_configs
from .constants import MINIMUM_LIQUIDITY, Rounding, SolidityType
from .core import (
    AssetAmount,
    Fraction,
    Percent,
    Pool,
    Price,
    SwapQuote,
    TradeType,
    quote_exact_in,
    quote_exact_out,
)
from .errors import (
    AmountOverflowError,
    AssetMismatchError,
    ChainMismatchError,
    DuplicateAssetError,
    ErrorKind,
    InsufficientInputAmountError,
    InsufficientReservesError,
    MissingParameterError,
    PairError,
    UnknownChainError,
)
from .state import Asset, AssetKind, PairAddressing, ledger_asset, native_asset, sort_assets

__version__ = "0.1.0"

__all__ = [
    "ChainConfig",
    "get_chain_config",
    "load_chain_configs",
    "MINIMUM_LIQUIDITY",
    "Rounding",
    "SolidityType",
    "AssetAmount",
    "Fraction",
    "Percent",
    "Pool",
    "Price",
    "SwapQuote",
    "TradeType",
    "quote_exact_in",
    "quote_exact_out",
    "AmountOverflowError",
    "AssetMismatchError",
    "ChainMismatchError",
    "DuplicateAssetError",
    "ErrorKind",
    "InsufficientInputAmountError",
    "InsufficientReservesError",
    "MissingParameterError",
    "PairError",
    "UnknownChainError",
    "Asset",
    "AssetKind",
    "PairAddressing",
    "ledger_asset",
    "native_asset",
    "sort_assets",
]
