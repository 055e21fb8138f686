# [TESTER] v1

from __future__ import annotations

import pytest

from v2pair.constants import Rounding, SolidityType
from v2pair.core import AssetAmount, Fraction, Price
from v2pair.errors import AmountOverflowError, AssetMismatchError
from v2pair.state import ledger_asset

USDC = ledger_asset(1, "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "USDC")
DAI = ledger_asset(1, "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18, "DAI")
WETH = ledger_asset(1, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH")


def test_asset_amount_is_raw_over_decimals() -> None:
    amount = AssetAmount(USDC, 1_500_000)
    assert amount.raw == 1_500_000
    assert amount.asset is USDC
    assert amount.equal_to(Fraction(3, 2))
    assert amount.to_exact() == "1.5"
    assert amount.to_fixed() == "1.500000"
    assert amount.to_fixed(2) == "1.50"
    assert amount.to_significant() == "1.5"
    assert AssetAmount(DAI, 10**18).to_exact() == "1"


def test_asset_amount_rounds_down_by_default() -> None:
    amount = AssetAmount(USDC, 1_999_999)
    assert amount.to_fixed(2) == "1.99"
    assert amount.to_significant(3) == "1.99"
    assert amount.to_fixed(2, Rounding.ROUND_HALF_UP) == "2.00"


def test_to_fixed_cannot_exceed_asset_decimals() -> None:
    with pytest.raises(ValueError, match="exceeds asset decimals"):
        AssetAmount(USDC, 1).to_fixed(7)


def test_raw_amount_width_is_enforced() -> None:
    AssetAmount(DAI, (1 << 256) - 1)
    with pytest.raises(AmountOverflowError):
        AssetAmount(DAI, 1 << 256)
    with pytest.raises(AmountOverflowError):
        AssetAmount(DAI, -1)
    with pytest.raises(AmountOverflowError):
        AssetAmount(DAI, 256, width=SolidityType.UINT8)


def test_add_and_subtract_require_the_same_asset() -> None:
    a = AssetAmount(USDC, 100)
    assert a.add(AssetAmount(USDC, 50)).raw == 150
    assert a.subtract(AssetAmount(USDC, 100)).raw == 0
    with pytest.raises(AssetMismatchError):
        a.add(AssetAmount(DAI, 1))
    with pytest.raises(AmountOverflowError):
        a.subtract(AssetAmount(USDC, 101))


def test_equality_and_hash_use_asset_and_raw() -> None:
    assert AssetAmount(USDC, 1) == AssetAmount(USDC, "1")
    assert AssetAmount(USDC, 1) != AssetAmount(DAI, 1)
    assert len({AssetAmount(USDC, 1), AssetAmount(USDC, 1)}) == 1


def test_amount_never_equals_a_bare_fraction_of_the_same_value() -> None:
    amount = AssetAmount(USDC, 1_500_000)
    assert amount != Fraction(3, 2)
    assert Fraction(3, 2) != amount
    assert amount.equal_to(Fraction(3, 2))
    assert len({amount, Fraction(3, 2)}) == 2


def test_price_adjusts_for_decimals() -> None:
    # 1 USDC (10**6 raw) buys 1 DAI (10**18 raw)
    price = Price(USDC, DAI, 10**6, 10**18)
    assert price.raw == Fraction(10**12)
    assert price.adjusted == 1
    assert price.to_significant() == "1"
    assert price.to_fixed(2) == "1.00"
    assert price.invert().base_asset is DAI
    assert price.invert().adjusted == 1


def test_price_quote_and_chain() -> None:
    usdc_dai = Price(USDC, DAI, 10**6, 10**18)
    assert usdc_dai.quote(AssetAmount(USDC, 2 * 10**6)) == AssetAmount(DAI, 2 * 10**18)
    with pytest.raises(AssetMismatchError):
        usdc_dai.quote(AssetAmount(DAI, 1))

    dai_weth = Price(DAI, WETH, 2000, 1)
    usdc_weth = usdc_dai.multiply(dai_weth)
    assert isinstance(usdc_weth, Price)
    assert usdc_weth.base_asset is USDC and usdc_weth.quote_asset is WETH
    assert usdc_weth.adjusted == Fraction(1, 2000)
    with pytest.raises(AssetMismatchError):
        dai_weth.multiply(usdc_dai)
