"""
Pool hydration from an external reserve source.

``ReserveSource`` is whatever reads chain state (an RPC client, an indexer,
a test fake). This module only turns its raw integers into ``Pool`` and
``AssetAmount`` values; it performs no I/O of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..core.amounts import AssetAmount
from ..core.fractions import Percent
from ..core.pool import Pool
from ..kernels.python.int_math import BigintIsh, parse_bigint_ish
from ..state.assets import Asset
from ..state.pair_address import PairAddressing, default_addressing

logger = logging.getLogger(__name__)


class ReserveSource(Protocol):
    def get_reserves(self, pair_address: str) -> Optional[Tuple[BigintIsh, BigintIsh]]:
        """(reserve0, reserve1) in canonical order, or None when the pair is not deployed."""
        ...

    def total_supply(self, asset: Asset) -> BigintIsh:
        ...

    def balance_of(self, asset: Asset, owner: str) -> BigintIsh:
        ...


@dataclass(frozen=True)
class LiquidityInfo:
    """
    An owner's position in one pool.

    Attributes:
        pool: Pool the position is in
        total_supply: Liquidity asset total supply
        user_liquidity: Liquidity held by the owner
        amount0: Owner's share of reserve0
        amount1: Owner's share of reserve1
    """
    pool: Pool
    total_supply: AssetAmount
    user_liquidity: AssetAmount
    amount0: AssetAmount
    amount1: AssetAmount

    @property
    def reserves(self) -> Tuple[AssetAmount, AssetAmount]:
        return self.pool.reserve0, self.pool.reserve1


@dataclass(frozen=True)
class RemoveLiquidityAmounts:
    percent: Percent
    liquidity: AssetAmount
    amount0: AssetAmount
    amount1: AssetAmount


def fetch_pool(
    source: ReserveSource,
    asset_a: Asset,
    asset_b: Asset,
    addressing: Optional[PairAddressing] = None,
) -> Optional[Pool]:
    """Build the pool for ``asset_a``/``asset_b`` from current reserves; None if undeployed."""
    addressing = default_addressing() if addressing is None else addressing
    pair_address = addressing.get_address(asset_a, asset_b)
    reserves = source.get_reserves(pair_address)
    if reserves is None:
        logger.debug("no pair deployed at %s", pair_address)
        return None
    asset0, asset1 = (asset_a, asset_b) if asset_a.sorts_before(asset_b) else (asset_b, asset_a)
    reserve0, reserve1 = (parse_bigint_ish(r) for r in reserves)
    logger.debug("hydrated pair %s with reserves (%d, %d)", pair_address, reserve0, reserve1)
    return Pool(AssetAmount(asset0, reserve0), AssetAmount(asset1, reserve1), addressing=addressing)


def _liquidity_info(pool: Pool, total_supply: AssetAmount, user_liquidity: AssetAmount) -> LiquidityInfo:
    return LiquidityInfo(
        pool=pool,
        total_supply=total_supply,
        user_liquidity=user_liquidity,
        amount0=pool.get_liquidity_value(pool.asset0, total_supply, user_liquidity),
        amount1=pool.get_liquidity_value(pool.asset1, total_supply, user_liquidity),
    )


def liquidity_info_of(source: ReserveSource, pool: Pool, owner: str) -> LiquidityInfo:
    total_supply = AssetAmount(pool.liquidity_asset, source.total_supply(pool.liquidity_asset))
    user_liquidity = AssetAmount(pool.liquidity_asset, source.balance_of(pool.liquidity_asset, owner))
    return _liquidity_info(pool, total_supply, user_liquidity)


def remove_liquidity_amounts(info: LiquidityInfo, percent: Percent) -> RemoveLiquidityAmounts:
    """
    Share of a position to burn, and the reserve amounts it returns.

    Each component is ``floor(percent * amount)`` of the full position.
    """
    if percent.less_than(0) or percent.greater_than(1):
        raise ValueError(f"percent must be within [0, 100]: {percent}")
    return RemoveLiquidityAmounts(
        percent=percent,
        liquidity=AssetAmount(info.user_liquidity.asset, percent.multiply(info.user_liquidity.raw).quotient),
        amount0=AssetAmount(info.amount0.asset, percent.multiply(info.amount0.raw).quotient),
        amount1=AssetAmount(info.amount1.asset, percent.multiply(info.amount1.raw).quotient),
    )


def pair_addresses(assets: Sequence[Asset], addressing: Optional[PairAddressing] = None) -> Dict[str, Tuple[Asset, Asset]]:
    """
    Pool address for every unordered pair of distinct ledger assets, mapped to the sorted pair.

    Native assets have no pools of their own and are skipped; include the
    wrapped native asset to cover its pairs.
    """
    addressing = default_addressing() if addressing is None else addressing
    ledger = [asset for asset in assets if not asset.is_native]
    out: Dict[str, Tuple[Asset, Asset]] = {}
    for a, b in combinations(ledger, 2):
        if a.equals(b):
            continue
        pair = (a, b) if a.sorts_before(b) else (b, a)
        out[addressing.get_address(a, b)] = pair
    return out


def liquidity_positions(
    source: ReserveSource,
    owner: str,
    assets: Iterable[Asset],
    addressing: Optional[PairAddressing] = None,
) -> List[LiquidityInfo]:
    """Every deployed pool among ``assets`` in which ``owner`` holds liquidity."""
    positions: List[LiquidityInfo] = []
    for asset0, asset1 in pair_addresses(list(assets), addressing).values():
        pool = fetch_pool(source, asset0, asset1, addressing)
        if pool is None:
            continue
        total_supply = AssetAmount(pool.liquidity_asset, source.total_supply(pool.liquidity_asset))
        if total_supply.raw == 0:
            continue
        user_liquidity = AssetAmount(pool.liquidity_asset, source.balance_of(pool.liquidity_asset, owner))
        if user_liquidity.raw == 0:
            continue
        positions.append(_liquidity_info(pool, total_supply, user_liquidity))
    return positions
