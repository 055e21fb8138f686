"""
Liquidity math kernel (pair-contract semantics).

Mirrors ``mint``, ``burn`` and ``_mintFee`` of the pair contract:
- the first mint locks MINIMUM_LIQUIDITY forever,
- later mints take the smaller of the two proportional shares,
- with the protocol fee switched on, the implicit fee-share mint is added to
  the supply before a position is valued.

All divisions floor; operands are non-negative so floor == truncation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...constants import MINIMUM_LIQUIDITY, PROTOCOL_FEE_ROOT_K_MULTIPLIER
from ...errors import InsufficientInputAmountError, InsufficientReservesError, MissingParameterError
from .int_math import require_int, sqrt


@dataclass(frozen=True)
class LiquidityValueResult:
    amount: int
    effective_total_supply: int
    protocol_fee_liquidity: int


def liquidity_minted(
    *,
    reserve0: int,
    reserve1: int,
    total_supply: int,
    amount0: int,
    amount1: int,
    minimum_liquidity: int = MINIMUM_LIQUIDITY,
) -> int:
    """
    Liquidity minted for depositing (amount0, amount1).

    Bootstrap (total_supply == 0):
        liquidity = floor(sqrt(amount0 * amount1)) - minimum_liquidity
    Otherwise:
        liquidity = min(floor(amount0 * total_supply / reserve0),
                        floor(amount1 * total_supply / reserve1))

    Raises InsufficientInputAmountError unless liquidity > 0.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
        ("amount0", amount0),
        ("amount1", amount1),
        ("minimum_liquidity", minimum_liquidity),
    ):
        require_int(name, v)

    if reserve0 < 0 or reserve1 < 0:
        raise ValueError("reserves must be non-negative")
    if total_supply < 0:
        raise ValueError("total_supply must be non-negative")
    if amount0 < 0 or amount1 < 0:
        raise ValueError("deposit amounts must be non-negative")

    if total_supply == 0:
        liquidity = sqrt(amount0 * amount1) - minimum_liquidity
    else:
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientReservesError("cannot mint into an empty pool when total_supply > 0")
        liquidity0 = (amount0 * total_supply) // reserve0
        liquidity1 = (amount1 * total_supply) // reserve1
        liquidity = min(liquidity0, liquidity1)

    if liquidity <= 0:
        raise InsufficientInputAmountError(f"liquidity minted is not positive: {liquidity}")
    return liquidity


def protocol_fee_liquidity(*, reserve0: int, reserve1: int, total_supply: int, k_last: int) -> int:
    """
    Liquidity the pair would mint to ``feeTo`` on the next mint/burn.

        rootK = floor(sqrt(reserve0 * reserve1)), rootKLast = floor(sqrt(k_last))
        fee = floor(total_supply * (rootK - rootKLast) / (rootK * 5 + rootKLast))

    Zero when k_last is zero or the invariant has not grown.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
        ("k_last", k_last),
    ):
        require_int(name, v)
    if k_last < 0:
        raise ValueError("k_last must be non-negative")

    # A zero k_last means no fee has accrued yet; the supply is left unadjusted.
    if k_last == 0:
        return 0
    root_k = sqrt(reserve0 * reserve1)
    root_k_last = sqrt(k_last)
    if root_k <= root_k_last:
        return 0
    numerator = total_supply * (root_k - root_k_last)
    denominator = root_k * PROTOCOL_FEE_ROOT_K_MULTIPLIER + root_k_last
    return numerator // denominator


def liquidity_value(
    *,
    reserve0: int,
    reserve1: int,
    reserve: int,
    total_supply: int,
    liquidity: int,
    protocol_fee_on: bool = False,
    k_last: Optional[int] = None,
) -> LiquidityValueResult:
    """
    Amount of one reserve redeemable for ``liquidity`` shares.

        amount = floor(liquidity * reserve / effective_total_supply)

    ``reserve`` is the reserve being valued (one of reserve0/reserve1); both
    are needed for the protocol-fee adjustment.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("reserve", reserve),
        ("total_supply", total_supply),
        ("liquidity", liquidity),
    ):
        require_int(name, v)

    if liquidity < 0:
        raise ValueError("liquidity must be non-negative")
    if liquidity > total_supply:
        raise InsufficientReservesError(f"liquidity ({liquidity}) exceeds total_supply ({total_supply})")

    fee_liquidity = 0
    if protocol_fee_on:
        if k_last is None:
            raise MissingParameterError("k_last is required when the protocol fee is on")
        fee_liquidity = protocol_fee_liquidity(
            reserve0=reserve0,
            reserve1=reserve1,
            total_supply=total_supply,
            k_last=k_last,
        )

    effective_total_supply = total_supply + fee_liquidity
    if effective_total_supply == 0:
        raise InsufficientReservesError("total_supply is zero")

    return LiquidityValueResult(
        amount=(liquidity * reserve) // effective_total_supply,
        effective_total_supply=effective_total_supply,
        protocol_fee_liquidity=fee_liquidity,
    )
