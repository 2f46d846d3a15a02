"""Randomization requests against the current kingdom and selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random

from .assembly import KingdomAssembler
from .cards import CardCatalog, CardType
from .events import (
    KINGDOM_RANDOMIZE_FAILED,
    KINGDOM_RANDOMIZED,
    SELECTION_UPDATED,
    EventBus,
    FailureKind,
    RandomizeKind,
)
from .exceptions import CardNotInKingdom, InvalidRandomizerOptions
from .kingdom import Kingdom
from .options import RandomizerOptionsBuilder
from .sampler import SamplingEngine, Unsatisfiable
from .selection import Selection
from ..config import RandomizerConfig

logger = logging.getLogger(__name__)

# Below this many selected sets a fresh kingdom may repeat the previous supply freely.
AVOID_REPEATS_MIN_SETS = 3
MIN_COST_TIERS_FOR_DISTRIBUTION = 3


@dataclass(slots=True)
class RandomizeOutcome:
    kind: RandomizeKind
    kingdom: Kingdom | None
    failure: FailureKind | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class RandomizerService:
    """Owns the current kingdom and selection and swaps them on success only."""

    def __init__(
        self,
        catalog: CardCatalog,
        config: RandomizerConfig,
        event_bus: EventBus,
        *,
        rng: Random | None = None,
        engine: SamplingEngine | None = None,
    ) -> None:
        self._catalog = catalog
        self._config = config
        self._event_bus = event_bus
        self._engine = engine or SamplingEngine(rng=rng or Random(), weights=config.weights)
        self._assembler = KingdomAssembler(catalog, self._engine)
        self._kingdom: Kingdom | None = None
        self._selection = Selection()

    @property
    def kingdom(self) -> Kingdom | None:
        return self._kingdom

    @property
    def selection(self) -> Selection:
        return self._selection

    def selected_set_ids(self) -> tuple[str, ...]:
        return tuple(self._config.selected_sets)

    def exclude_types(self) -> list[CardType]:
        return [] if self._config.randomizer.allow_attacks else [CardType.ATTACK]

    def is_distribute_cost_allowed(self) -> bool:
        tiers = {card.cost.tier for card in self._catalog.cards_for_sets(self.selected_set_ids())}
        return len(tiers) >= MIN_COST_TIERS_FOR_DISTRIBUTION

    def is_prioritize_set_allowed(self) -> bool:
        set_ids = self.selected_set_ids()
        prioritized = self._config.randomizer.prioritize_set
        return len(set_ids) > 1 and prioritized in set_ids

    def options_builder(self) -> RandomizerOptionsBuilder:
        settings = self._config.randomizer
        return (
            RandomizerOptionsBuilder()
            .set_require_action_provider(settings.require_action_provider)
            .set_require_buy_provider(settings.require_buy_provider)
            .set_require_trashing(settings.require_trashing)
            .set_require_reaction_if_attacks(settings.require_reaction)
            .set_distribute_cost(settings.distribute_cost, allowed=self.is_distribute_cost_allowed())
            .set_prioritize_set(settings.prioritize_set, allowed=self.is_prioritize_set_allowed())
            .set_max_addons(settings.max_addons)
            .set_set_ids(self.selected_set_ids())
            .set_exclude_types(self.exclude_types())
        )

    def load_initial_kingdom(self, kingdom: Kingdom | None = None) -> RandomizeOutcome:
        """Adopt a deserialized kingdom, filling it up when it has fewer than ten cards."""
        if kingdom is None:
            return self.randomize_full()

        if kingdom.supply.is_complete:
            self._swap(kingdom)
            return self._succeeded(RandomizeKind.LOAD_FULL_KINGDOM, kingdom)

        options = self.options_builder().build()
        try:
            result = self._assembler.complete_kingdom(kingdom, options)
        except InvalidRandomizerOptions as exc:
            self._failed(RandomizeKind.LOAD_PARTIAL_KINGDOM, FailureKind.INVALID_OPTIONS, str(exc))
            return self.randomize_full()
        if isinstance(result, Unsatisfiable):
            self._failed(RandomizeKind.LOAD_PARTIAL_KINGDOM, FailureKind.UNSATISFIABLE, result.reason)
            return self.randomize_full()

        self._swap(result)
        return self._succeeded(RandomizeKind.LOAD_PARTIAL_KINGDOM, result)

    def randomize(self) -> RandomizeOutcome:
        """Re-randomize everything that is not locked."""
        if self._kingdom is None or self._selection.is_empty:
            return self.randomize_full()

        options = self.options_builder().build()
        try:
            outcome = self._assembler.build_partial_kingdom(self._kingdom, self._selection, options)
        except InvalidRandomizerOptions as exc:
            return self._failed(RandomizeKind.PARTIAL_SUPPLY, FailureKind.INVALID_OPTIONS, str(exc))
        if outcome.unsatisfiable is not None:
            return self._failed(
                RandomizeKind.PARTIAL_SUPPLY, FailureKind.UNSATISFIABLE, outcome.unsatisfiable.reason
            )

        self._swap(outcome.kingdom)
        if not outcome.supply_resampled:
            # Every supply card was locked; only the addon bundle can have changed.
            return self._succeeded(RandomizeKind.ADDONS, outcome.kingdom)
        if outcome.addons_resampled:
            self._publish_randomized(RandomizeKind.ADDONS, outcome.kingdom)
        return self._succeeded(RandomizeKind.PARTIAL_SUPPLY, outcome.kingdom)

    def randomize_full(self) -> RandomizeOutcome:
        builder = self.options_builder()
        settings = self._config.randomizer
        if (
            self._kingdom is not None
            and len(self.selected_set_ids()) >= AVOID_REPEATS_MIN_SETS
            and not settings.prioritize_set
        ):
            builder.set_avoid_card_ids(self._kingdom.supply.ids())
        options = builder.build()

        try:
            result = self._assembler.build_full_kingdom(options)
        except InvalidRandomizerOptions as exc:
            return self._failed(RandomizeKind.FULL_KINGDOM, FailureKind.INVALID_OPTIONS, str(exc))
        if isinstance(result, Unsatisfiable):
            return self._failed(RandomizeKind.FULL_KINGDOM, FailureKind.UNSATISFIABLE, result.reason)

        self._swap(result)
        return self._succeeded(RandomizeKind.FULL_KINGDOM, result)

    def select_card(self, card_id: str) -> Selection:
        card = self._kingdom.find(card_id) if self._kingdom else None
        if card is None:
            raise CardNotInKingdom(card_id)
        selection = self._selection.with_added(card_id, card)
        return self._update_selection(selection)

    def unselect_card(self, card_id: str) -> Selection:
        return self._update_selection(self._selection.with_removed(card_id))

    def _update_selection(self, selection: Selection) -> Selection:
        if selection != self._selection:
            self._selection = selection
            self._event_bus.publish(
                SELECTION_UPDATED,
                {
                    "supply_ids": sorted(selection.selected_supply_ids),
                    "addon_ids": sorted(selection.selected_addon_ids),
                },
            )
        return self._selection

    def _swap(self, kingdom: Kingdom) -> None:
        self._kingdom = kingdom
        self._selection = self._selection.cleared()

    def _succeeded(self, kind: RandomizeKind, kingdom: Kingdom) -> RandomizeOutcome:
        logger.info("Randomized %s: kingdom %s", kind.value, kingdom.kingdom_id)
        self._publish_randomized(kind, kingdom)
        return RandomizeOutcome(kind=kind, kingdom=kingdom)

    def _publish_randomized(self, kind: RandomizeKind, kingdom: Kingdom) -> None:
        self._event_bus.publish(
            KINGDOM_RANDOMIZED,
            {
                "kind": kind,
                "kingdom_id": kingdom.kingdom_id,
                "supply": list(kingdom.supply.ids()),
                "addons": list(kingdom.addons.ids()),
            },
        )

    def _failed(self, kind: RandomizeKind, failure: FailureKind, reason: str) -> RandomizeOutcome:
        if failure is FailureKind.INVALID_OPTIONS:
            logger.error("Randomization %s rejected: %s", kind.value, reason)
        else:
            logger.warning("Randomization %s unsatisfiable: %s", kind.value, reason)
        self._event_bus.publish(
            KINGDOM_RANDOMIZE_FAILED,
            {"kind": kind, "failure": failure, "reason": reason},
        )
        return RandomizeOutcome(kind=kind, kingdom=self._kingdom, failure=failure, reason=reason)
