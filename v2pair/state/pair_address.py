"""
Canonical pool addressing.

A pair's address is a pure function of its factory, the canonically ordered
asset addresses and the pair creation-code hash (CREATE2):

    salt = keccak256(asset0 || asset1)                      # abi.encodePacked
    address = keccak256(0xff || factory || salt || init_code_hash)[12:]

Results are memoized in a ``PairAddressCache``. Because the derivation is pure,
racing first lookups may both compute the value; only the insert is locked.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Mapping, Optional, Tuple

from eth_utils import decode_hex, keccak, to_canonical_address, to_checksum_address

from ..config import ChainConfig, get_chain_config, load_chain_configs
from .assets import Asset, sort_assets

logger = logging.getLogger(__name__)

CacheKey = Tuple[int, str, str, str]


def compute_pair_address(factory_address: str, init_code_hash: str, asset0_address: str, asset1_address: str) -> str:
    """
    CREATE2 address of the pair for already-ordered asset addresses.

    Returns the checksum form.
    """
    salt = keccak(to_canonical_address(asset0_address) + to_canonical_address(asset1_address))
    code_hash = decode_hex(init_code_hash)
    if len(code_hash) != 32:
        raise ValueError("init_code_hash must be 32 bytes")
    digest = keccak(b"\xff" + to_canonical_address(factory_address) + salt + code_hash)
    return to_checksum_address(digest[12:])


class PairAddressCache:
    """
    Memo of derived pair addresses keyed by (chain_id, factory, asset0, asset1).

    Reads take no lock; inserts are guarded so concurrent writers never
    corrupt the map. Entries never go stale.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, str] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[str]:
        return self._entries.get(key)

    def get_or_compute(self, key: CacheKey, compute: Callable[[], str]) -> str:
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        value = compute()
        with self._lock:
            # Last write wins; every racer computed the same value.
            self._entries[key] = value
        logger.debug("pair address cache miss for %s/%s -> %s", key[2], key[3], value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PairAddressCache({len(self._entries)} entries)"


class PairAddressing:
    """
    Pool address derivation bound to a set of chain configurations and a cache.
    """

    def __init__(
        self,
        chains: Optional[Mapping[int, ChainConfig]] = None,
        cache: Optional[PairAddressCache] = None,
    ) -> None:
        self._chains: Mapping[int, ChainConfig] = load_chain_configs() if chains is None else dict(chains)
        self._cache = PairAddressCache() if cache is None else cache

    @property
    def cache(self) -> PairAddressCache:
        return self._cache

    def chain(self, chain_id: int) -> ChainConfig:
        return get_chain_config(chain_id, self._chains)

    def get_address(self, asset_a: Asset, asset_b: Asset) -> str:
        """
        Address of the pool holding ``asset_a`` and ``asset_b`` (in either order).

        Raises ChainMismatchError / DuplicateAssetError via the ordering rule and
        UnknownChainError if the chain has no configuration.
        """
        asset0, asset1 = sort_assets(asset_a, asset_b)
        chain = self.chain(asset0.chain_id)
        assert asset0.address is not None and asset1.address is not None
        key = (chain.chain_id, chain.factory_address, asset0.address, asset1.address)
        return self._cache.get_or_compute(
            key,
            lambda: compute_pair_address(chain.factory_address, chain.init_code_hash, key[2], key[3]),
        )


_DEFAULT_CACHE = PairAddressCache()
_default_addressing: Optional[PairAddressing] = None
_default_lock = threading.Lock()


def default_addressing() -> PairAddressing:
    """Process-wide addressing over the bundled chain configs and the shared cache."""
    global _default_addressing
    if _default_addressing is None:
        with _default_lock:
            if _default_addressing is None:
                _default_addressing = PairAddressing(cache=_DEFAULT_CACHE)
    return _default_addressing
