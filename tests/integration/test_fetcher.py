# [TESTER] v1

from __future__ import annotations

from typing import Dict, Optional, Tuple

import pytest

from v2pair.core import Percent, Pool
from v2pair.integration import (
    fetch_pool,
    liquidity_info_of,
    liquidity_positions,
    pair_addresses,
    remove_liquidity_amounts,
)
from v2pair.state import Asset, PairAddressCache, PairAddressing, ledger_asset, native_asset

USDC = ledger_asset(1, "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "USDC")
DAI = ledger_asset(1, "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18, "DAI")
WETH = ledger_asset(1, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH")

USDC_DAI_PAIR = "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"
USDC_WETH_PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
OWNER = "0x" + "01" * 20


class FakeSource:
    def __init__(
        self,
        reserves: Dict[str, Tuple[int, int]],
        supplies: Dict[str, int],
        balances: Dict[str, int],
    ) -> None:
        self.reserves = reserves
        self.supplies = supplies
        self.balances = balances
        self.supply_reads: Dict[str, int] = {}

    def get_reserves(self, pair_address: str) -> Optional[Tuple[int, int]]:
        return self.reserves.get(pair_address)

    def total_supply(self, asset: Asset) -> int:
        assert asset.address is not None
        self.supply_reads[asset.address] = self.supply_reads.get(asset.address, 0) + 1
        return self.supplies.get(asset.address, 0)

    def balance_of(self, asset: Asset, owner: str) -> int:
        assert asset.address is not None
        return self.balances.get(asset.address, 0)


def _source() -> FakeSource:
    return FakeSource(
        reserves={USDC_DAI_PAIR: (4000, 1000)},
        supplies={USDC_DAI_PAIR: 2000},
        balances={USDC_DAI_PAIR: 500},
    )


def test_fetch_pool_hydrates_canonical_reserves() -> None:
    pool = fetch_pool(_source(), USDC, DAI)
    assert isinstance(pool, Pool)
    assert pool.address == USDC_DAI_PAIR
    assert pool.reserve_of(DAI).raw == 4000
    assert pool.reserve_of(USDC).raw == 1000


def test_fetch_pool_returns_none_for_undeployed_pair() -> None:
    assert fetch_pool(_source(), USDC, WETH) is None


def test_liquidity_info_and_remove_amounts() -> None:
    source = _source()
    pool = fetch_pool(source, DAI, USDC)
    assert pool is not None
    info = liquidity_info_of(source, pool, OWNER)
    assert info.total_supply.raw == 2000
    assert info.user_liquidity.raw == 500
    assert info.amount0.asset is DAI and info.amount0.raw == 1000
    assert info.amount1.asset is USDC and info.amount1.raw == 250
    assert info.reserves == (pool.reserve0, pool.reserve1)

    half = remove_liquidity_amounts(info, Percent(50))
    assert half.liquidity.raw == 250
    assert (half.amount0.raw, half.amount1.raw) == (500, 125)

    third = remove_liquidity_amounts(info, Percent(1, 3))
    assert (third.liquidity.raw, third.amount0.raw, third.amount1.raw) == (166, 333, 83)

    with pytest.raises(ValueError, match="percent"):
        remove_liquidity_amounts(info, Percent(101))


def test_pair_addresses_covers_each_unordered_pair_once() -> None:
    addresses = pair_addresses([USDC, DAI, WETH], PairAddressing(cache=PairAddressCache()))
    assert len(addresses) == 3
    assert addresses[USDC_DAI_PAIR] == (DAI, USDC)
    assert addresses[USDC_WETH_PAIR] == (USDC, WETH)


def test_liquidity_positions_skips_empty_and_undeployed_pools() -> None:
    source = _source()
    positions = liquidity_positions(source, OWNER, [USDC, DAI, WETH])
    assert [p.pool.address for p in positions] == [USDC_DAI_PAIR]

    source.balances[USDC_DAI_PAIR] = 0
    assert liquidity_positions(source, OWNER, [USDC, DAI, WETH]) == []


def test_pair_addresses_ignores_native_assets() -> None:
    addresses = pair_addresses([native_asset(1), USDC, DAI], PairAddressing(cache=PairAddressCache()))
    assert list(addresses) == [USDC_DAI_PAIR]


def test_liquidity_positions_reads_total_supply_once_per_pool() -> None:
    source = _source()
    positions = liquidity_positions(source, OWNER, [USDC, native_asset(1), DAI, WETH])
    assert len(positions) == 1
    assert positions[0].total_supply.raw == 2000
    assert source.supply_reads == {USDC_DAI_PAIR: 1}
