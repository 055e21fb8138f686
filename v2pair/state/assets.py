"""
Asset identities: the chain's native unit and ledger-tracked assets.

An ``Asset`` is a tagged variant. Behavior that differs per variant
(equality, ordering, display) matches on ``Asset.kind``:

- ``AssetKind.NATIVE``: one process-wide instance per chain, compared by identity.
- ``AssetKind.LEDGER``: identified by ``(chain_id, address)``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, Optional

from eth_utils import is_hex_address, to_checksum_address

from ..config import ChainConfig
from ..constants import SOLIDITY_TYPE_MAXIMA, SolidityType
from ..errors import AmountOverflowError, AssetMismatchError, ChainMismatchError, DuplicateAssetError


@unique
class AssetKind(Enum):
    NATIVE = "native"
    LEDGER = "ledger"


def validate_solidity_type(value: int, solidity_type: SolidityType) -> None:
    """Raise AmountOverflowError unless 0 <= value <= max(solidity_type)."""
    maximum = SOLIDITY_TYPE_MAXIMA[solidity_type]
    if value < 0 or value > maximum:
        raise AmountOverflowError(value, maximum)


def validate_and_parse_address(address: str) -> str:
    """Return the checksum form of a 20-byte hex address."""
    if not isinstance(address, str) or not is_hex_address(address):
        raise ValueError(f"{address!r} is not a valid address")
    return to_checksum_address(address)


@dataclass(frozen=True, eq=False)
class Asset:
    """
    A fungible unit.

    Attributes:
        kind: Variant tag
        chain_id: Chain the asset lives on
        decimals: Display decimals (uint8)
        address: Checksum address for ledger assets, None for the native unit
        symbol: Optional ticker
        name: Optional display name
    """
    kind: AssetKind
    chain_id: int
    decimals: int
    address: Optional[str] = None
    symbol: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.decimals, int) or isinstance(self.decimals, bool):
            raise TypeError("decimals must be an int")
        validate_solidity_type(self.decimals, SolidityType.UINT8)
        if self.kind is AssetKind.LEDGER:
            if self.address is None:
                raise ValueError("ledger assets require an address")
            object.__setattr__(self, "address", validate_and_parse_address(self.address))
        elif self.address is not None:
            raise ValueError("the native asset has no address")

    @property
    def is_native(self) -> bool:
        return self.kind is AssetKind.NATIVE

    def equals(self, other: object) -> bool:
        # short circuit on reference equality
        if self is other:
            return True
        if not isinstance(other, Asset):
            return False
        if self.kind is AssetKind.LEDGER and other.kind is AssetKind.LEDGER:
            return self.chain_id == other.chain_id and self.address == other.address
        # Native assets are singletons: distinct instances are distinct assets.
        return False

    def sorts_before(self, other: "Asset") -> bool:
        """
        True if this asset's address sorts before ``other``'s (case-insensitive).

        Raises:
            AssetMismatchError: If either asset is not a ledger asset
            ChainMismatchError: If the assets live on different chains
            DuplicateAssetError: If both have the same address
        """
        if self.kind is not AssetKind.LEDGER or other.kind is not AssetKind.LEDGER:
            raise AssetMismatchError("only ledger assets have a canonical order")
        if self.chain_id != other.chain_id:
            raise ChainMismatchError(f"chain ids differ: {self.chain_id} != {other.chain_id}")
        assert self.address is not None and other.address is not None
        if self.address == other.address:
            raise DuplicateAssetError(f"asset {self.address} cannot be ordered against itself")
        return self.address.lower() < other.address.lower()

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        if self.kind is AssetKind.LEDGER:
            return hash((AssetKind.LEDGER, self.chain_id, self.address))
        return object.__hash__(self)

    def __repr__(self) -> str:
        if self.kind is AssetKind.LEDGER:
            return f"Asset({self.symbol or '?'}@{self.chain_id}:{self.address})"
        return f"Asset({self.symbol or 'native'}@{self.chain_id})"


def ledger_asset(
    chain_id: int,
    address: str,
    decimals: int,
    symbol: Optional[str] = None,
    name: Optional[str] = None,
) -> Asset:
    return Asset(
        kind=AssetKind.LEDGER,
        chain_id=chain_id,
        decimals=decimals,
        address=address,
        symbol=symbol,
        name=name,
    )


_NATIVE_ASSETS: Dict[int, Asset] = {}
_NATIVE_LOCK = threading.Lock()


def native_asset(chain_id: int, *, decimals: int = 18, symbol: str = "ETH", name: str = "Ether") -> Asset:
    """
    Return the process-wide native asset for ``chain_id``.

    The first call for a chain fixes its metadata; later calls return the same
    instance regardless of the metadata passed.
    """
    existing = _NATIVE_ASSETS.get(chain_id)
    if existing is not None:
        return existing
    with _NATIVE_LOCK:
        existing = _NATIVE_ASSETS.get(chain_id)
        if existing is None:
            existing = Asset(kind=AssetKind.NATIVE, chain_id=chain_id, decimals=decimals, symbol=symbol, name=name)
            _NATIVE_ASSETS[chain_id] = existing
        return existing


def native_asset_for(chain: ChainConfig) -> Asset:
    return native_asset(
        chain.chain_id,
        decimals=chain.native.decimals,
        symbol=chain.native.symbol,
        name=chain.native.name,
    )


def wrapped_native_asset(chain: ChainConfig) -> Asset:
    """The ledger asset standing in for the native unit inside pools."""
    if chain.wrapped_native is None:
        raise ValueError(f"chain {chain.chain_id} has no wrapped native asset configured")
    w = chain.wrapped_native
    return ledger_asset(chain.chain_id, w.address, w.decimals, w.symbol, w.name)


def sort_assets(asset_a: Asset, asset_b: Asset) -> tuple[Asset, Asset]:
    """Return the pair in canonical (asset0, asset1) order."""
    return (asset_a, asset_b) if asset_a.sorts_before(asset_b) else (asset_b, asset_a)
