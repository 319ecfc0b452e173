"""
Pair configuration.

A pair is described by a small YAML document:

    assets:
      - native: uscrt
      - token:
          contract_addr: secret1xyz
          token_code_hash: "0f1e..."
    liquidity_token: secret1lp
    commission_rate:
      nom: 3
      denom: 1000
    entropy_seed: "any string"   # optional

`load_pair_config(path)` parses and validates it; `PairConfig.settings()`,
`PairConfig.pair_info()` and `PairConfig.entropy()` build the runtime values
the dispatcher takes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .core.collaborators import PairSettings
from .integration.entropy import Sha256EntropyPool
from .state.assets import AssetInfo, canonical_order
from .state.pools import PairInfo, create_pair_info


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
    return value


def _parse_asset_info(obj: Any, *, name: str) -> AssetInfo:
    if not isinstance(obj, Mapping) or len(obj) != 1:
        raise ValueError(f"{name} must be a mapping with exactly one of 'native' or 'token'")
    if "native" in obj:
        return AssetInfo.native(_require_str(obj["native"], name=f"{name}.native"))
    if "token" in obj:
        token = obj["token"]
        if isinstance(token, str):
            return AssetInfo.token(_require_str(token, name=f"{name}.token"))
        if not isinstance(token, Mapping):
            raise TypeError(f"{name}.token must be a string or a mapping")
        code_hash = token.get("token_code_hash", "")
        if not isinstance(code_hash, str):
            raise TypeError(f"{name}.token.token_code_hash must be a string")
        return AssetInfo.token(
            _require_str(token.get("contract_addr"), name=f"{name}.token.contract_addr"),
            token_code_hash=code_hash,
        )
    raise ValueError(f"{name} must be a mapping with exactly one of 'native' or 'token'")


@dataclass(frozen=True)
class PairConfig:
    asset_infos: Tuple[AssetInfo, AssetInfo]
    liquidity_token: str
    commission_rate_nom: int = 3
    commission_rate_denom: int = 1000
    entropy_seed: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.asset_infos) != 2:
            raise ValueError("a pair has exactly two assets")
        canonical_order(*self.asset_infos)
        _require_str(self.liquidity_token, name="liquidity_token")
        if self.entropy_seed is not None and not isinstance(self.entropy_seed, str):
            raise TypeError("entropy_seed must be a string")
        # Validates the commission rate.
        self.settings()

    def settings(self) -> PairSettings:
        return PairSettings(
            commission_rate_nom=self.commission_rate_nom,
            commission_rate_denom=self.commission_rate_denom,
        )

    def pair_info(self) -> PairInfo:
        return create_pair_info(self.asset_infos, self.liquidity_token)

    def entropy(self) -> Sha256EntropyPool:
        """Fresh hash-chain pool seeded from `entropy_seed`, or from the liquidity token when unset."""
        seed = self.liquidity_token if self.entropy_seed is None else self.entropy_seed
        return Sha256EntropyPool(seed.encode("utf-8"))


def pair_config_from_dict(obj: Mapping[str, Any]) -> PairConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("pair config must be a mapping")

    assets = obj.get("assets")
    if not isinstance(assets, list) or len(assets) != 2:
        raise ValueError("assets must be a list of exactly two entries")
    asset_infos = (
        _parse_asset_info(assets[0], name="assets[0]"),
        _parse_asset_info(assets[1], name="assets[1]"),
    )

    rate = obj.get("commission_rate", {})
    if not isinstance(rate, Mapping):
        raise TypeError("commission_rate must be a mapping")

    seed = obj.get("entropy_seed")
    return PairConfig(
        asset_infos=asset_infos,
        liquidity_token=_require_str(obj.get("liquidity_token"), name="liquidity_token"),
        commission_rate_nom=_require_int(rate.get("nom", 3), name="commission_rate.nom"),
        commission_rate_denom=_require_int(rate.get("denom", 1000), name="commission_rate.denom"),
        entropy_seed=None if seed is None else str(seed),
    )


def load_pair_config(path: Union[str, Path]) -> PairConfig:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("pair config YAML must be a mapping")
    return pair_config_from_dict(obj)
