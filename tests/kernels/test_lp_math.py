# [TESTER] v1

from __future__ import annotations

import pytest

from v2pair.constants import MINIMUM_LIQUIDITY
from v2pair.errors import InsufficientInputAmountError, InsufficientReservesError, MissingParameterError
from v2pair.kernels.python.lp_math import liquidity_minted, liquidity_value, protocol_fee_liquidity


def test_bootstrap_mint_locks_minimum_liquidity() -> None:
    minted = liquidity_minted(reserve0=0, reserve1=0, total_supply=0, amount0=1000, amount1=4000)
    assert minted == 2000 - MINIMUM_LIQUIDITY


def test_bootstrap_mint_uses_integer_sqrt() -> None:
    n = (1 << 70) + 12345
    minted = liquidity_minted(reserve0=0, reserve1=0, total_supply=0, amount0=n, amount1=n)
    assert minted == n - MINIMUM_LIQUIDITY


def test_bootstrap_mint_at_minimum_is_rejected() -> None:
    with pytest.raises(InsufficientInputAmountError):
        liquidity_minted(reserve0=0, reserve1=0, total_supply=0, amount0=1000, amount1=1000)


def test_proportional_mint_takes_the_smaller_share() -> None:
    minted = liquidity_minted(reserve0=1000, reserve1=2000, total_supply=500, amount0=100, amount1=100)
    assert minted == min(100 * 500 // 1000, 100 * 500 // 2000) == 25


def test_mint_into_empty_reserve_with_supply_is_rejected() -> None:
    with pytest.raises(InsufficientReservesError):
        liquidity_minted(reserve0=0, reserve1=10, total_supply=5, amount0=1, amount1=1)


def test_liquidity_value_without_protocol_fee() -> None:
    res = liquidity_value(reserve0=1000, reserve1=4000, reserve=4000, total_supply=2000, liquidity=500)
    assert res.amount == 1000
    assert res.effective_total_supply == 2000
    assert res.protocol_fee_liquidity == 0


def test_liquidity_value_with_protocol_fee_dilutes_supply() -> None:
    # rootK = 2000, rootKLast = 1000: fee = 1000 * 1000 / (2000 * 5 + 1000) = 90
    res = liquidity_value(
        reserve0=2000,
        reserve1=2000,
        reserve=2000,
        total_supply=1000,
        liquidity=1000,
        protocol_fee_on=True,
        k_last=1000 * 1000,
    )
    assert res.protocol_fee_liquidity == 90
    assert res.effective_total_supply == 1090
    assert res.amount == 1000 * 2000 // 1090


def test_protocol_fee_zero_when_k_has_not_grown_or_k_last_is_zero() -> None:
    assert protocol_fee_liquidity(reserve0=100, reserve1=100, total_supply=10, k_last=10_000) == 0
    assert protocol_fee_liquidity(reserve0=100, reserve1=100, total_supply=10, k_last=0) == 0


def test_liquidity_value_requires_k_last_when_fee_on() -> None:
    with pytest.raises(MissingParameterError, match="k_last"):
        liquidity_value(
            reserve0=1, reserve1=1, reserve=1, total_supply=1, liquidity=1, protocol_fee_on=True
        )


def test_liquidity_value_rejects_liquidity_above_supply() -> None:
    with pytest.raises(InsufficientReservesError, match="exceeds total_supply"):
        liquidity_value(reserve0=10, reserve1=10, reserve=10, total_supply=5, liquidity=6)
