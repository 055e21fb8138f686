"""
Asset identities and canonical pool addressing.
"""

from .assets import (
    Asset,
    AssetKind,
    ledger_asset,
    native_asset,
    native_asset_for,
    sort_assets,
    wrapped_native_asset,
)
from .pair_address import PairAddressCache, PairAddressing, compute_pair_address, default_addressing

__all__ = [
    "Asset",
    "AssetKind",
    "ledger_asset",
    "native_asset",
    "native_asset_for",
    "sort_assets",
    "wrapped_native_asset",
    "PairAddressCache",
    "PairAddressing",
    "compute_pair_address",
    "default_addressing",
]
