"""
Constant-product pool entity.

A ``Pool`` is an immutable value holding two reserves in canonical order
(``asset0`` sorts before ``asset1``). Every reserve-changing operation returns
a new ``Pool``. The integer math lives in the kernels; this module binds it to
assets, enforces preconditions and produces typed amounts.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..constants import LIQUIDITY_ASSET_DECIMALS
from ..errors import AssetMismatchError, InsufficientReservesError
from ..kernels.python.cpmm_swap import FeeFactor, get_amount_in, get_amount_out
from ..kernels.python.int_math import BigintIsh, parse_bigint_ish
from ..kernels.python.lp_math import liquidity_minted, liquidity_value
from ..state.assets import Asset, ledger_asset, sort_assets
from ..state.pair_address import PairAddressing, default_addressing
from .amounts import AssetAmount, Price


class Pool:
    """
    Two-asset constant-product pool.

    Attributes:
        asset0, asset1: Reserve assets in canonical order
        reserve0, reserve1: Current reserves
        liquidity_asset: Pool share asset (18 decimals, address = pool address)
        fee: Swap fee factor (from the chain configuration unless overridden)

    Constructing ``Pool(a, b)`` and ``Pool(b, a)`` yields identical pools.
    """

    __slots__ = ("_reserves", "_liquidity_asset", "_fee", "_addressing")

    def __init__(
        self,
        amount_a: AssetAmount,
        amount_b: AssetAmount,
        *,
        fee: Optional[FeeFactor] = None,
        addressing: Optional[PairAddressing] = None,
    ) -> None:
        addressing = default_addressing() if addressing is None else addressing
        # sorts_before rejects cross-chain and duplicate assets.
        if amount_a.asset.sorts_before(amount_b.asset):
            reserves = (amount_a, amount_b)
        else:
            reserves = (amount_b, amount_a)
        chain = addressing.chain(reserves[0].asset.chain_id)

        self._reserves: Tuple[AssetAmount, AssetAmount] = reserves
        self._addressing = addressing
        self._fee = chain.fee if fee is None else fee
        self._liquidity_asset = ledger_asset(
            chain.chain_id,
            addressing.get_address(reserves[0].asset, reserves[1].asset),
            LIQUIDITY_ASSET_DECIMALS,
            chain.liquidity_symbol,
            chain.liquidity_name,
        )

    @staticmethod
    def get_address(asset_a: Asset, asset_b: Asset, addressing: Optional[PairAddressing] = None) -> str:
        return (default_addressing() if addressing is None else addressing).get_address(asset_a, asset_b)

    def _derive(self, amount_a: AssetAmount, amount_b: AssetAmount) -> "Pool":
        return Pool(amount_a, amount_b, fee=self._fee, addressing=self._addressing)

    @property
    def asset0(self) -> Asset:
        return self._reserves[0].asset

    @property
    def asset1(self) -> Asset:
        return self._reserves[1].asset

    @property
    def reserve0(self) -> AssetAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> AssetAmount:
        return self._reserves[1]

    @property
    def chain_id(self) -> int:
        return self.asset0.chain_id

    @property
    def liquidity_asset(self) -> Asset:
        return self._liquidity_asset

    @property
    def address(self) -> str:
        assert self._liquidity_asset.address is not None
        return self._liquidity_asset.address

    @property
    def fee(self) -> FeeFactor:
        return self._fee

    @property
    def addressing(self) -> PairAddressing:
        return self._addressing

    def involves_asset(self, asset: Asset) -> bool:
        return asset.equals(self.asset0) or asset.equals(self.asset1)

    def _require_asset(self, asset: Asset) -> None:
        if not self.involves_asset(asset):
            raise AssetMismatchError(f"{asset!r} is not a reserve asset of pool {self.address}")

    def _require_liquidity_asset(self, amount: AssetAmount, name: str) -> None:
        if not amount.asset.equals(self._liquidity_asset):
            raise AssetMismatchError(f"{name} must be denominated in the pool's liquidity asset")

    def reserve_of(self, asset: Asset) -> AssetAmount:
        self._require_asset(asset)
        return self.reserve0 if asset.equals(self.asset0) else self.reserve1

    def other_asset(self, asset: Asset) -> Asset:
        self._require_asset(asset)
        return self.asset1 if asset.equals(self.asset0) else self.asset0

    @property
    def asset0_price(self) -> Price:
        """Price of asset0 in asset1: reserve1 / reserve0."""
        return Price(self.asset0, self.asset1, self.reserve0.raw, self.reserve1.raw)

    @property
    def asset1_price(self) -> Price:
        """Price of asset1 in asset0: reserve0 / reserve1."""
        return Price(self.asset1, self.asset0, self.reserve1.raw, self.reserve0.raw)

    def price_of(self, asset: Asset) -> Price:
        """
        Units of the counter asset per unit of ``asset`` (raw reserve ratio).

        Raises:
            AssetMismatchError: If ``asset`` is not a reserve asset
            InsufficientReservesError: If ``asset``'s reserve is zero
        """
        self._require_asset(asset)
        if self.reserve_of(asset).raw == 0:
            raise InsufficientReservesError("price is undefined for an empty reserve")
        return self.asset0_price if asset.equals(self.asset0) else self.asset1_price

    def _require_reserves(self) -> None:
        if self.reserve0.raw == 0 or self.reserve1.raw == 0:
            raise InsufficientReservesError("pool has an empty reserve")

    def get_output_amount(self, input_amount: AssetAmount) -> Tuple[AssetAmount, "Pool"]:
        """
        Exact-in quote: the output for ``input_amount`` and the post-swap pool.

        Raises:
            AssetMismatchError: If the input asset is not in the pool
            InsufficientReservesError: If either reserve is zero
            InsufficientInputAmountError: If the output rounds down to zero
        """
        self._require_asset(input_amount.asset)
        self._require_reserves()
        input_reserve = self.reserve_of(input_amount.asset)
        output_reserve = self.reserve_of(self.other_asset(input_amount.asset))

        res = get_amount_out(
            reserve_in=input_reserve.raw,
            reserve_out=output_reserve.raw,
            amount_in=input_amount.raw,
            fee=self._fee,
        )
        output_amount = AssetAmount(output_reserve.asset, res.amount_out)
        return output_amount, self._derive(input_reserve.add(input_amount), output_reserve.subtract(output_amount))

    def get_input_amount(self, output_amount: AssetAmount) -> Tuple[AssetAmount, "Pool"]:
        """
        Exact-out quote: the input needed for ``output_amount`` and the post-swap pool.

        Raises:
            AssetMismatchError: If the output asset is not in the pool
            InsufficientReservesError: If a reserve is zero or the output would drain the pool
        """
        self._require_asset(output_amount.asset)
        self._require_reserves()
        output_reserve = self.reserve_of(output_amount.asset)
        input_reserve = self.reserve_of(self.other_asset(output_amount.asset))

        res = get_amount_in(
            reserve_in=input_reserve.raw,
            reserve_out=output_reserve.raw,
            amount_out=output_amount.raw,
            fee=self._fee,
        )
        input_amount = AssetAmount(input_reserve.asset, res.amount_in)
        return input_amount, self._derive(input_reserve.add(input_amount), output_reserve.subtract(output_amount))

    def get_liquidity_minted(
        self,
        total_supply: AssetAmount,
        amount_a: AssetAmount,
        amount_b: AssetAmount,
    ) -> AssetAmount:
        """
        Liquidity minted for depositing ``amount_a`` and ``amount_b`` (either order).

        Raises:
            AssetMismatchError: If the supply is not in liquidity units or the
                deposit assets are not this pool's assets
            InsufficientInputAmountError: If the minted liquidity is not positive
        """
        self._require_liquidity_asset(total_supply, "total_supply")
        amount0, amount1 = self.sorted_amounts(amount_a, amount_b)
        if not (amount0.asset.equals(self.asset0) and amount1.asset.equals(self.asset1)):
            raise AssetMismatchError("deposit assets do not match the pool's assets")

        minted = liquidity_minted(
            reserve0=self.reserve0.raw,
            reserve1=self.reserve1.raw,
            total_supply=total_supply.raw,
            amount0=amount0.raw,
            amount1=amount1.raw,
        )
        return AssetAmount(self._liquidity_asset, minted)

    def get_liquidity_value(
        self,
        asset: Asset,
        total_supply: AssetAmount,
        liquidity: AssetAmount,
        protocol_fee_on: bool = False,
        k_last: Optional[BigintIsh] = None,
    ) -> AssetAmount:
        """
        Amount of ``asset`` redeemable for ``liquidity`` shares.

        With ``protocol_fee_on``, ``k_last`` (reserve0 * reserve1 at the last
        fee collection) is required. A zero ``k_last`` means no protocol fee has
        accrued yet and the supply is used unadjusted.

        Raises:
            AssetMismatchError: If ``asset`` or the liquidity amounts do not belong to the pool
            InsufficientReservesError: If ``liquidity`` exceeds ``total_supply``
            MissingParameterError: If the protocol fee is on and ``k_last`` is None
        """
        self._require_asset(asset)
        self._require_liquidity_asset(total_supply, "total_supply")
        self._require_liquidity_asset(liquidity, "liquidity")

        res = liquidity_value(
            reserve0=self.reserve0.raw,
            reserve1=self.reserve1.raw,
            reserve=self.reserve_of(asset).raw,
            total_supply=total_supply.raw,
            liquidity=liquidity.raw,
            protocol_fee_on=protocol_fee_on,
            k_last=None if k_last is None else parse_bigint_ish(k_last),
        )
        return AssetAmount(asset, res.amount)

    def sorted_amounts(self, amount_a: AssetAmount, amount_b: AssetAmount) -> Tuple[AssetAmount, AssetAmount]:
        """Order two amounts of this pool's assets as (asset0, asset1)."""
        asset0, _ = sort_assets(amount_a.asset, amount_b.asset)
        return (amount_a, amount_b) if asset0 is amount_a.asset else (amount_b, amount_a)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pool):
            return NotImplemented
        return (
            self._liquidity_asset.equals(other._liquidity_asset)
            and self.reserve0 == other.reserve0
            and self.reserve1 == other.reserve1
            and self._fee == other._fee
        )

    def __hash__(self) -> int:
        return hash((self._liquidity_asset, self.reserve0.raw, self.reserve1.raw))

    def __repr__(self) -> str:
        return (
            f"Pool(address={self.address}, "
            f"assets=({self.asset0.symbol or self.asset0.address}, {self.asset1.symbol or self.asset1.address}), "
            f"reserves=({self.reserve0.raw}, {self.reserve1.raw}))"
        )
