"""Randomizer simulation helpers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from random import Random
from typing import Dict

from ..app import RandomizerApp
from ..domain.cards import Capability, CostTier
from ..domain.kingdom import Supply
from ..domain.sampler import SamplingEngine, Unsatisfiable


@dataclass(slots=True)
class SimulationResult:
    runs: int
    successes: int = 0
    unsatisfiable: int = 0
    card_frequency: Counter = field(default_factory=Counter)
    tier_frequency: Dict[CostTier, int] = field(default_factory=lambda: {tier: 0 for tier in CostTier})
    attacks_without_reaction: int = 0

    def merge(self, supply: Supply) -> None:
        self.successes += 1
        for card in supply:
            self.card_frequency[card.card_id] += 1
            self.tier_frequency[card.cost.tier] += 1
        has_attack = any(card.provides(Capability.ATTACK) for card in supply)
        has_reaction = any(card.provides(Capability.REACTION) for card in supply)
        if has_attack and not has_reaction:
            self.attacks_without_reaction += 1

    @property
    def failure_rate(self) -> float:
        return self.unsatisfiable / self.runs if self.runs else 0.0


class RandomizerSimulator:
    """Monte-Carlo simulation to evaluate supply sampling."""

    def __init__(self, app: RandomizerApp, *, rng: Random | None = None) -> None:
        self._app = app
        self._engine = SamplingEngine(
            rng=rng or Random(app.config.rng_seed), weights=app.config.weights
        )

    def simulate(self, *, runs: int = 1000) -> SimulationResult:
        options = self._app.randomizer.options_builder().build()
        result = SimulationResult(runs=runs)
        for _ in range(runs):
            supply = self._engine.sample_supply(self._app.catalog, options)
            if isinstance(supply, Unsatisfiable):
                result.unsatisfiable += 1
                continue
            result.merge(supply)
        return result
