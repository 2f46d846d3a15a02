"""Top level application object for KingdomForge."""

from __future__ import annotations

from random import Random
from typing import Any

from .config import RandomizerConfig
from .domain.events import EventBus
from .domain.randomizer import RandomizerService
from .domain.sampler import SamplingEngine
from .registry import CatalogRegistry


class RandomizerApp:
    """Central dependency container used by the CLI and embedding applications."""

    def __init__(
        self,
        config: RandomizerConfig,
        *,
        event_bus: EventBus | None = None,
        rng: Random | None = None,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.sets = CatalogRegistry()

        self._rng = rng or (Random(config.rng_seed) if config.rng_seed is not None else Random())
        self.engine = SamplingEngine(rng=self._rng, weights=self.config.weights)
        self.randomizer = RandomizerService(
            catalog=self.sets.catalog,
            config=self.config,
            event_bus=self.event_bus,
            engine=self.engine,
        )

    @property
    def catalog(self):
        return self.sets.catalog

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        kingdom = self.randomizer.kingdom
        return {
            "sets": [card_set.set_id for card_set in self.catalog.iter_sets()],
            "selected_sets": list(self.config.selected_sets),
            "kingdom": list(kingdom.card_ids()) if kingdom else [],
            "locked": sorted(
                self.randomizer.selection.selected_supply_ids
                | self.randomizer.selection.selected_addon_ids
            ),
        }
