"""
Amounts and prices bound to assets.

``AssetAmount`` is a Fraction of ``raw / 10**decimals`` whose raw value is
width-checked on construction. ``Price`` is a Fraction of quote-units per
base-unit in raw terms, with a decimal scalar for display.
"""

from __future__ import annotations

from typing import Optional

from ..constants import Rounding, SolidityType
from ..errors import AssetMismatchError
from ..kernels.python.int_math import BigintIsh, parse_bigint_ish
from ..state.assets import Asset, validate_solidity_type
from .fractions import Fraction, FractionLike


class AssetAmount(Fraction):
    """
    ``raw`` units of ``asset``.

    Raises AmountOverflowError unless ``0 <= raw <= max(width)``.
    """

    __slots__ = ("_asset", "_width")

    def __init__(self, asset: Asset, raw: BigintIsh, *, width: SolidityType = SolidityType.UINT256) -> None:
        parsed = parse_bigint_ish(raw)
        validate_solidity_type(parsed, width)
        super().__init__(parsed, 10**asset.decimals)
        self._asset = asset
        self._width = width

    @property
    def asset(self) -> Asset:
        return self._asset

    @property
    def raw(self) -> int:
        return self._numerator

    def _require_same_asset(self, other: "AssetAmount") -> None:
        if not isinstance(other, AssetAmount):
            raise AssetMismatchError("expected an AssetAmount")
        if not self._asset.equals(other._asset):
            raise AssetMismatchError(f"asset mismatch: {self._asset!r} != {other._asset!r}")

    def add(self, other: "AssetAmount") -> "AssetAmount":  # type: ignore[override]
        self._require_same_asset(other)
        return AssetAmount(self._asset, self.raw + other.raw, width=self._width)

    def subtract(self, other: "AssetAmount") -> "AssetAmount":  # type: ignore[override]
        self._require_same_asset(other)
        return AssetAmount(self._asset, self.raw - other.raw, width=self._width)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        return super().to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: Optional[int] = None, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        places = self._asset.decimals if decimal_places is None else decimal_places
        if places > self._asset.decimals:
            raise ValueError(f"decimal_places ({places}) exceeds asset decimals ({self._asset.decimals})")
        return super().to_fixed(places, rounding)

    def to_exact(self) -> str:
        """Exact decimal value without trailing zeros (``10**18`` raw of an 18-decimal asset is ``"1"``)."""
        text = super().to_fixed(self._asset.decimals, Rounding.ROUND_DOWN)
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def __eq__(self, other: object) -> bool:
        # Identity is (asset, raw); use equal_to() to compare values against plain fractions.
        if isinstance(other, AssetAmount):
            return self._asset.equals(other._asset) and self.raw == other.raw
        return False

    def __hash__(self) -> int:
        return hash((self._asset, self.raw))

    def __repr__(self) -> str:
        return f"AssetAmount({self._asset!r}, {self.raw})"


class Price(Fraction):
    """
    Price of ``base_asset`` in ``quote_asset``: ``numerator / denominator`` in raw units.

    ``adjusted`` rescales by the decimal difference for display.
    """

    __slots__ = ("_base", "_quote", "_scalar")

    def __init__(self, base_asset: Asset, quote_asset: Asset, denominator: BigintIsh, numerator: BigintIsh) -> None:
        super().__init__(numerator, denominator)
        self._base = base_asset
        self._quote = quote_asset
        self._scalar = Fraction(10**base_asset.decimals, 10**quote_asset.decimals)

    @property
    def base_asset(self) -> Asset:
        return self._base

    @property
    def quote_asset(self) -> Asset:
        return self._quote

    @property
    def scalar(self) -> Fraction:
        return self._scalar

    @property
    def raw(self) -> Fraction:
        return Fraction(self._numerator, self._denominator)

    @property
    def adjusted(self) -> Fraction:
        return self.raw.multiply(self._scalar)

    def invert(self) -> "Price":
        return Price(self._quote, self._base, self._numerator, self._denominator)

    def multiply(self, other: FractionLike) -> Fraction:
        """Chain with another price (``A->B`` times ``B->C`` is ``A->C``); plain fractions multiply as usual."""
        if not isinstance(other, Price):
            return super().multiply(other)
        if not self._quote.equals(other._base):
            raise AssetMismatchError("price chain requires this quote asset to be the other's base asset")
        return Price(
            self._base,
            other._quote,
            self._denominator * other._denominator,
            self._numerator * other._numerator,
        )

    def quote(self, amount: AssetAmount) -> AssetAmount:
        """Convert an amount of the base asset into the quote asset (truncating)."""
        if not amount.asset.equals(self._base):
            raise AssetMismatchError("amount is not denominated in the base asset")
        return AssetAmount(self._quote, self.raw.multiply(amount.raw).quotient)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)

    def __repr__(self) -> str:
        return f"Price({self._base!r} -> {self._quote!r}, {self._numerator}/{self._denominator})"
