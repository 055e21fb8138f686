# [TESTER] v1

from __future__ import annotations

import pytest
from eth_utils import to_checksum_address

from v2pair.core import (
    AssetAmount,
    Percent,
    Pool,
    TradeOptions,
    add_liquidity_call_parameters,
    quote_exact_in,
    quote_exact_out,
    remove_liquidity_call_parameters,
    swap_call_parameters,
)
from v2pair.errors import AssetMismatchError
from v2pair.state import ledger_asset

USDC = ledger_asset(1, "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "USDC")
DAI = ledger_asset(1, "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18, "DAI")
WETH = ledger_asset(1, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH")

RECIPIENT = "0x" + "ab" * 20
RECIPIENT_CHECKSUM = to_checksum_address(RECIPIENT)
DEADLINE = 1_700_000_000


def _options(**kwargs) -> TradeOptions:
    return TradeOptions(allowed_slippage=Percent(1, 100), recipient=RECIPIENT, deadline=DEADLINE, **kwargs)


def test_exact_in_token_swap() -> None:
    pool = Pool(AssetAmount(USDC, 1000), AssetAmount(DAI, 1000))
    call = swap_call_parameters(quote_exact_in(pool, AssetAmount(USDC, 100)), _options())
    assert call.method_name == "swapExactTokensForTokens"
    assert call.args == (100, 89, [USDC.address, DAI.address], RECIPIENT_CHECKSUM, DEADLINE)
    assert call.value == 0


def test_exact_in_native_legs() -> None:
    pool = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 1000))
    call = swap_call_parameters(quote_exact_in(pool, AssetAmount(WETH, 100)), _options(native_in=True))
    assert call.method_name == "swapExactETHForTokens"
    assert call.args == (89, [WETH.address, DAI.address], RECIPIENT_CHECKSUM, DEADLINE)
    assert call.value == 100

    call = swap_call_parameters(quote_exact_in(pool, AssetAmount(DAI, 100)), _options(native_out=True))
    assert call.method_name == "swapExactTokensForETH"
    assert call.args[:2] == (100, 89)
    assert call.value == 0


def test_fee_on_transfer_variants_only_for_exact_in() -> None:
    pool = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 1000))
    call = swap_call_parameters(
        quote_exact_in(pool, AssetAmount(WETH, 100)), _options(native_in=True, fee_on_transfer=True)
    )
    assert call.method_name == "swapExactETHForTokensSupportingFeeOnTransferTokens"

    with pytest.raises(ValueError, match="exact-input"):
        swap_call_parameters(quote_exact_out(pool, AssetAmount(DAI, 90)), _options(fee_on_transfer=True))


def test_exact_out_swaps() -> None:
    pool = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 1000))
    quote = quote_exact_out(pool, AssetAmount(DAI, 90))

    call = swap_call_parameters(quote, _options())
    assert call.method_name == "swapTokensForExactTokens"
    assert call.args[:2] == (90, 101)

    call = swap_call_parameters(quote, _options(native_in=True))
    assert call.method_name == "swapETHForExactTokens"
    assert call.args[0] == 90
    assert call.value == 101

    back = quote_exact_out(pool, AssetAmount(WETH, 90))
    call = swap_call_parameters(back, _options(native_out=True))
    assert call.method_name == "swapTokensForExactETH"


def test_swap_call_rejects_invalid_requests() -> None:
    pool = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 1000))
    with pytest.raises(ValueError, match="both sides"):
        swap_call_parameters(quote_exact_in(pool, AssetAmount(WETH, 100)), _options(native_in=True, native_out=True))
    with pytest.raises(AssetMismatchError):
        swap_call_parameters(quote_exact_in(pool, AssetAmount(USDC, 100)), _options())


def test_add_liquidity_minimums() -> None:
    call = add_liquidity_call_parameters(
        AssetAmount(DAI, 1000),
        AssetAmount(USDC, 2000),
        allowed_slippage=Percent(80, 10_000),
        recipient=RECIPIENT,
        deadline=DEADLINE,
    )
    assert call.method_name == "addLiquidity"
    assert call.args == (DAI.address, USDC.address, 1000, 2000, 992, 1984, RECIPIENT_CHECKSUM, DEADLINE)

    call = add_liquidity_call_parameters(
        AssetAmount(DAI, 1000),
        AssetAmount(WETH, 2000),
        allowed_slippage=Percent(15, 100),
        recipient=RECIPIENT,
        deadline=DEADLINE,
        native=True,
    )
    assert call.method_name == "addLiquidityETH"
    assert call.args == (DAI.address, 1000, 850, 1700, RECIPIENT_CHECKSUM, DEADLINE)
    assert call.value == 2000


def test_remove_liquidity() -> None:
    pool = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 4000))
    liquidity = AssetAmount(pool.liquidity_asset, 500)
    call = remove_liquidity_call_parameters(
        pool,
        liquidity,
        AssetAmount(WETH, 250),
        AssetAmount(DAI, 1000),
        allowed_slippage=Percent(1, 100),
        recipient=RECIPIENT,
        deadline=DEADLINE,
    )
    assert call.method_name == "removeLiquidity"
    assert call.args == (DAI.address, WETH.address, 500, 990, 247, RECIPIENT_CHECKSUM, DEADLINE)

    assert WETH.address is not None
    call = remove_liquidity_call_parameters(
        pool,
        liquidity,
        AssetAmount(WETH, 250),
        AssetAmount(DAI, 1000),
        allowed_slippage=Percent(1, 100),
        recipient=RECIPIENT,
        deadline=DEADLINE,
        native_asset_address=WETH.address.lower(),
    )
    assert call.method_name == "removeLiquidityETH"
    assert call.args == (DAI.address, 500, 990, 247, RECIPIENT_CHECKSUM, DEADLINE)

    with pytest.raises(AssetMismatchError):
        remove_liquidity_call_parameters(
            pool,
            AssetAmount(DAI, 1),
            AssetAmount(WETH, 250),
            AssetAmount(DAI, 1000),
            allowed_slippage=Percent(1, 100),
            recipient=RECIPIENT,
            deadline=DEADLINE,
        )

    with pytest.raises(AssetMismatchError, match="pool's assets"):
        remove_liquidity_call_parameters(
            pool,
            liquidity,
            AssetAmount(USDC, 250),
            AssetAmount(DAI, 1000),
            allowed_slippage=Percent(1, 100),
            recipient=RECIPIENT,
            deadline=DEADLINE,
        )


def test_add_liquidity_native_leg_is_found_in_either_position() -> None:
    kwargs = dict(allowed_slippage=Percent(15, 100), recipient=RECIPIENT, deadline=DEADLINE, native=True)
    weth_first = add_liquidity_call_parameters(AssetAmount(WETH, 2000), AssetAmount(DAI, 1000), **kwargs)
    dai_first = add_liquidity_call_parameters(AssetAmount(DAI, 1000), AssetAmount(WETH, 2000), **kwargs)
    assert weth_first == dai_first
    assert weth_first.args == (DAI.address, 1000, 850, 1700, RECIPIENT_CHECKSUM, DEADLINE)
    assert weth_first.value == 2000


def test_add_liquidity_native_requires_a_wrapped_native_leg() -> None:
    with pytest.raises(AssetMismatchError, match="wrapped native"):
        add_liquidity_call_parameters(
            AssetAmount(DAI, 1000),
            AssetAmount(USDC, 2000),
            allowed_slippage=Percent(1, 100),
            recipient=RECIPIENT,
            deadline=DEADLINE,
            native=True,
        )


def test_swap_native_flags_must_name_the_wrapped_native_leg() -> None:
    tokens = Pool(AssetAmount(USDC, 1000), AssetAmount(DAI, 1000))
    with pytest.raises(AssetMismatchError, match="wrapped native"):
        swap_call_parameters(quote_exact_in(tokens, AssetAmount(DAI, 100)), _options(native_in=True))
    with pytest.raises(AssetMismatchError, match="wrapped native"):
        swap_call_parameters(quote_exact_out(tokens, AssetAmount(USDC, 90)), _options(native_out=True))

    weth_dai = Pool(AssetAmount(WETH, 1000), AssetAmount(DAI, 1000))
    with pytest.raises(AssetMismatchError, match="wrapped native"):
        swap_call_parameters(quote_exact_in(weth_dai, AssetAmount(WETH, 100)), _options(native_out=True))
    with pytest.raises(AssetMismatchError, match="wrapped native"):
        swap_call_parameters(quote_exact_in(weth_dai, AssetAmount(DAI, 100)), _options(native_in=True))
