"""
Fee configuration for a family of pools.

Core functions never read configuration themselves: callers pass the rates
from an `AmmConfig` explicitly. This module only validates and loads it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..errors import InvalidFeeRate
from .fees import FEE_RATE_DENOMINATOR_VALUE


MAX_CONFIG_INDEX = 0xFFFF


@dataclass(frozen=True)
class AmmConfig:
    trade_fee_rate: int
    protocol_fee_rate: int
    fund_fee_rate: int
    index: int = 0
    create_pool_fee: int = 0
    disable_create_pool: bool = False

    def __post_init__(self) -> None:
        for name, v in (
            ("trade_fee_rate", self.trade_fee_rate),
            ("protocol_fee_rate", self.protocol_fee_rate),
            ("fund_fee_rate", self.fund_fee_rate),
            ("index", self.index),
            ("create_pool_fee", self.create_pool_fee),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not isinstance(self.disable_create_pool, bool):
            raise TypeError("disable_create_pool must be a bool")

        for name, v in (
            ("trade_fee_rate", self.trade_fee_rate),
            ("protocol_fee_rate", self.protocol_fee_rate),
            ("fund_fee_rate", self.fund_fee_rate),
        ):
            if not (0 <= v <= FEE_RATE_DENOMINATOR_VALUE):
                raise InvalidFeeRate(f"{name} must be in [0, {FEE_RATE_DENOMINATOR_VALUE}]: {v}")
        # A 100% trade fee makes exact-output pricing divide by zero.
        if self.trade_fee_rate == FEE_RATE_DENOMINATOR_VALUE:
            raise InvalidFeeRate(f"trade_fee_rate must be below {FEE_RATE_DENOMINATOR_VALUE}")
        share = self.protocol_fee_rate + self.fund_fee_rate
        if share > FEE_RATE_DENOMINATOR_VALUE:
            raise InvalidFeeRate(
                f"protocol_fee_rate + fund_fee_rate must not exceed {FEE_RATE_DENOMINATOR_VALUE}, got {share}"
            )
        if not (0 <= self.index <= MAX_CONFIG_INDEX):
            raise InvalidFeeRate(f"index must be in [0, {MAX_CONFIG_INDEX}]: {self.index}")
        if self.create_pool_fee < 0:
            raise InvalidFeeRate(f"create_pool_fee must be non-negative: {self.create_pool_fee}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AmmConfig":
        if not isinstance(data, Mapping):
            raise TypeError("amm config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidFeeRate(f"unknown amm config keys: {', '.join(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_amm_config(path: Union[str, Path]) -> AmmConfig:
    """Load an `AmmConfig` from a YAML document.

    The document may hold the fields at top level or under an `amm_config` key.
    """
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict) and "amm_config" in raw:
        raw = raw["amm_config"]
    if not isinstance(raw, dict):
        raise TypeError(f"{path}: amm config must be a mapping")
    return AmmConfig.from_mapping(raw)
