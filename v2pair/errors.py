"""Exception types for the pair engine.

Every failure is synchronous and deterministic: retrying with the same inputs
reproduces the same error. Callers that prefer inspecting results over
catching exceptions should use the wrappers in ``v2pair.core.quotes``.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import ClassVar


@unique
class ErrorKind(Enum):
    """One member per domain failure."""
    INSUFFICIENT_RESERVES = "insufficient_reserves"
    INSUFFICIENT_INPUT_AMOUNT = "insufficient_input_amount"
    ASSET_MISMATCH = "asset_mismatch"
    CHAIN_MISMATCH = "chain_mismatch"
    DUPLICATE_ASSET = "duplicate_asset"
    OVERFLOW = "overflow"
    MISSING_PARAMETER = "missing_parameter"
    UNKNOWN_CHAIN = "unknown_chain"


class PairError(ValueError):
    """Base class for all pair-engine failures."""

    kind: ClassVar[ErrorKind]


class InsufficientReservesError(PairError):
    """A reserve is zero, or a request exceeds what the pool holds."""

    kind = ErrorKind.INSUFFICIENT_RESERVES


class InsufficientInputAmountError(PairError):
    """A computed swap output or minted liquidity is not strictly positive."""

    kind = ErrorKind.INSUFFICIENT_INPUT_AMOUNT


class AssetMismatchError(PairError):
    kind = ErrorKind.ASSET_MISMATCH


class ChainMismatchError(PairError):
    kind = ErrorKind.CHAIN_MISMATCH


class DuplicateAssetError(PairError):
    kind = ErrorKind.DUPLICATE_ASSET


class AmountOverflowError(PairError, OverflowError):
    """Raised when a raw amount falls outside its integer width."""

    kind = ErrorKind.OVERFLOW

    def __init__(self, value: int, maximum: int) -> None:
        self.value = value
        self.maximum = maximum
        super().__init__(f"amount {value} outside [0, {maximum}]")


class MissingParameterError(PairError):
    kind = ErrorKind.MISSING_PARAMETER


class UnknownChainError(PairError):
    """Raised when no configuration is registered for a chain id."""

    kind = ErrorKind.UNKNOWN_CHAIN

    def __init__(self, chain_id: int) -> None:
        self.chain_id = chain_id
        super().__init__(f"no chain configuration for chain_id {chain_id}")
