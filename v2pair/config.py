"""
Per-chain deployment configuration.

The engine never hardcodes a factory, init-code hash or fee factor; they are
read from a YAML document mapping chain ids to deployment constants. The
bundled ``chains.yaml`` is loaded once and cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from eth_utils import is_hex_address, to_checksum_address

from .constants import DEFAULT_LIQUIDITY_NAME, DEFAULT_LIQUIDITY_SYMBOL
from .errors import UnknownChainError
from .kernels.python.cpmm_swap import FeeFactor

logger = logging.getLogger(__name__)


def _bundled_path() -> Path:
    return Path(__file__).resolve().parent / "chains.yaml"


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a mapping")
    return value


def _require_address(value: Any, *, name: str) -> str:
    text = _require_str(value, name=name)
    if not is_hex_address(text):
        raise ValueError(f"{name} is not a 20-byte hex address: {text!r}")
    return to_checksum_address(text)


def _require_hash32(value: Any, *, name: str) -> str:
    text = _require_str(value, name=name).lower()
    body = text[2:] if text.startswith("0x") else text
    if len(body) != 64:
        raise ValueError(f"{name} must be 32 bytes of hex")
    try:
        int(body, 16)
    except ValueError as exc:
        raise ValueError(f"{name} must be hex: {value!r}") from exc
    return "0x" + body


@dataclass(frozen=True)
class NativeAssetInfo:
    symbol: str = "ETH"
    name: str = "Ether"
    decimals: int = 18


@dataclass(frozen=True)
class WrappedNativeInfo:
    address: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: int = 18


@dataclass(frozen=True)
class ChainConfig:
    """
    Deployment constants for one chain.

    Attributes:
        chain_id: Numeric chain id
        factory_address: Pair factory (CREATE2 deployer), checksum form
        init_code_hash: keccak256 of the pair creation code, 0x-prefixed hex
        fee: Swap fee factor applied by the pair contract
        wrapped_native: Ledger asset that stands in for the native unit inside pools
        router_address: Router the call payloads target, if known
    """
    chain_id: int
    factory_address: str
    init_code_hash: str
    fee: FeeFactor = field(default_factory=FeeFactor)
    name: str = ""
    router_address: Optional[str] = None
    native: NativeAssetInfo = field(default_factory=NativeAssetInfo)
    wrapped_native: Optional[WrappedNativeInfo] = None
    liquidity_symbol: str = DEFAULT_LIQUIDITY_SYMBOL
    liquidity_name: str = DEFAULT_LIQUIDITY_NAME

    def __post_init__(self) -> None:
        _require_int(self.chain_id, name="chain_id")
        object.__setattr__(self, "factory_address", _require_address(self.factory_address, name="factory_address"))
        object.__setattr__(self, "init_code_hash", _require_hash32(self.init_code_hash, name="init_code_hash"))
        if self.router_address is not None:
            object.__setattr__(self, "router_address", _require_address(self.router_address, name="router_address"))


def chain_config_from_dict(chain_id: int, obj: Mapping[str, Any]) -> ChainConfig:
    """Build a ``ChainConfig`` from one entry of the YAML ``chains`` mapping."""
    obj = _require_mapping(obj, name=f"chains.{chain_id}")
    prefix = f"chains.{chain_id}"

    fee_obj = _require_mapping(obj.get("fee", {}), name=f"{prefix}.fee")
    fee = FeeFactor(
        numerator=_require_int(fee_obj.get("numerator", FeeFactor.numerator), name=f"{prefix}.fee.numerator"),
        denominator=_require_int(
            fee_obj.get("denominator", FeeFactor.denominator), name=f"{prefix}.fee.denominator"
        ),
    )

    native_obj = _require_mapping(obj.get("native", {}), name=f"{prefix}.native")
    native = NativeAssetInfo(
        symbol=_require_str(native_obj.get("symbol", NativeAssetInfo.symbol), name=f"{prefix}.native.symbol"),
        name=_require_str(native_obj.get("name", NativeAssetInfo.name), name=f"{prefix}.native.name"),
        decimals=_require_int(native_obj.get("decimals", 18), name=f"{prefix}.native.decimals"),
    )

    wrapped: Optional[WrappedNativeInfo] = None
    if obj.get("wrapped_native") is not None:
        w = _require_mapping(obj["wrapped_native"], name=f"{prefix}.wrapped_native")
        wrapped = WrappedNativeInfo(
            address=_require_address(w.get("address"), name=f"{prefix}.wrapped_native.address"),
            symbol=w.get("symbol"),
            name=w.get("name"),
            decimals=_require_int(w.get("decimals", 18), name=f"{prefix}.wrapped_native.decimals"),
        )

    liquidity_obj = _require_mapping(obj.get("liquidity", {}), name=f"{prefix}.liquidity")

    return ChainConfig(
        chain_id=chain_id,
        factory_address=_require_str(obj.get("factory"), name=f"{prefix}.factory"),
        init_code_hash=_require_str(obj.get("init_code_hash"), name=f"{prefix}.init_code_hash"),
        fee=fee,
        name=str(obj.get("name", "")),
        router_address=obj.get("router"),
        native=native,
        wrapped_native=wrapped,
        liquidity_symbol=_require_str(
            liquidity_obj.get("symbol", DEFAULT_LIQUIDITY_SYMBOL), name=f"{prefix}.liquidity.symbol"
        ),
        liquidity_name=_require_str(
            liquidity_obj.get("name", DEFAULT_LIQUIDITY_NAME), name=f"{prefix}.liquidity.name"
        ),
    )


def parse_chain_configs(text: str) -> Dict[int, ChainConfig]:
    """Parse a YAML document of the form ``{chains: {<chain_id>: {...}}}``."""
    obj = yaml.safe_load(text)
    root = _require_mapping(obj, name="document")
    chains = _require_mapping(root.get("chains"), name="chains")
    configs: Dict[int, ChainConfig] = {}
    for key, entry in chains.items():
        chain_id = _require_int(key, name="chain id")
        configs[chain_id] = chain_config_from_dict(chain_id, entry)
    return configs


def load_chain_configs(path: Optional[Path] = None) -> Dict[int, ChainConfig]:
    """Load chain configurations from ``path`` (defaults to the bundled file)."""
    if path is None:
        return dict(_bundled_chain_configs())
    configs = parse_chain_configs(Path(path).read_text(encoding="utf-8"))
    logger.debug("loaded %d chain configs from %s", len(configs), path)
    return configs


@lru_cache(maxsize=1)
def _bundled_chain_configs() -> Mapping[int, ChainConfig]:
    path = _bundled_path()
    configs = parse_chain_configs(path.read_text(encoding="utf-8"))
    logger.debug("loaded %d bundled chain configs from %s", len(configs), path)
    return configs


def get_chain_config(chain_id: int, chains: Optional[Mapping[int, ChainConfig]] = None) -> ChainConfig:
    table = _bundled_chain_configs() if chains is None else chains
    try:
        return table[chain_id]
    except KeyError:
        raise UnknownChainError(chain_id) from None
