"""Configuration models for KingdomForge."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from typing import Mapping, Sequence

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class SamplingWeights:
    """Tunable weighting applied during the weighted supply draw."""

    base: float = 1.0
    requirement: float = 6.0
    reaction: float = 6.0
    cost_spread: float = 1.5
    prioritized_set: float = 3.0
    avoid_factor: float = 0.05


@dataclass(slots=True)
class RandomizerSettings:
    """User-facing toggles that shape every randomization request."""

    require_action_provider: bool = False
    require_buy_provider: bool = False
    require_trashing: bool = False
    require_reaction: bool = False
    allow_attacks: bool = True
    distribute_cost: bool = False
    prioritize_set: str | None = None
    max_addons: int = 2


@dataclass(slots=True)
class RandomizerConfig:
    """Top-level configuration container."""

    selected_sets: Sequence[str] = field(default_factory=tuple)
    randomizer: RandomizerSettings = field(default_factory=RandomizerSettings)
    weights: SamplingWeights = field(default_factory=SamplingWeights)
    catalog_path: str | None = None
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "RandomizerConfig":
        """Create config from environment variables prefixed with KINGDOMFORGE_."""
        prefix = "KINGDOMFORGE_"

        selected_sets = tuple(
            set_id.strip()
            for set_id in os.getenv(f"{prefix}SETS", "").split(",")
            if set_id.strip()
        )

        settings = RandomizerSettings(
            require_action_provider=_env_flag(f"{prefix}REQUIRE_ACTIONS", "false"),
            require_buy_provider=_env_flag(f"{prefix}REQUIRE_BUYS", "false"),
            require_trashing=_env_flag(f"{prefix}REQUIRE_TRASHING", "false"),
            require_reaction=_env_flag(f"{prefix}REQUIRE_REACTION", "false"),
            allow_attacks=_env_flag(f"{prefix}ALLOW_ATTACKS", "true"),
            distribute_cost=_env_flag(f"{prefix}DISTRIBUTE_COST", "false"),
            prioritize_set=os.getenv(f"{prefix}PRIORITIZE_SET") or None,
            max_addons=int(os.getenv(f"{prefix}MAX_ADDONS", "2")),
        )

        return cls(
            selected_sets=selected_sets,
            randomizer=settings,
            weights=_parse_weights(os.getenv(f"{prefix}WEIGHTS")),
            catalog_path=os.getenv(f"{prefix}CATALOG") or None,
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
        )


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def _parse_weights(raw: str | None) -> SamplingWeights:
    if not raw:
        return SamplingWeights()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON for KINGDOMFORGE_WEIGHTS") from exc
    if not isinstance(data, Mapping):
        raise ValueError("KINGDOMFORGE_WEIGHTS must be a JSON object")
    known = {f.name for f in fields(SamplingWeights)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown sampling weights: {', '.join(sorted(unknown))}")
    return SamplingWeights(**{str(k): float(v) for k, v in data.items()})
