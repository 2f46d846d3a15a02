"""Compose kingdoms from sampled supplies and addons, honouring locks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .cards import CardCatalog
from .kingdom import AddonBundle, Kingdom
from .options import RandomizerOptions
from .sampler import SamplingEngine, Unsatisfiable
from .selection import Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PartialOutcome:
    """Result of a partial re-randomization.

    ``kingdom`` is the prior kingdom, untouched, whenever ``unsatisfiable`` is set.
    """

    kingdom: Kingdom
    unsatisfiable: Unsatisfiable | None = None
    supply_resampled: bool = False
    addons_resampled: bool = False

    @property
    def ok(self) -> bool:
        return self.unsatisfiable is None


class KingdomAssembler:
    def __init__(self, catalog: CardCatalog, engine: SamplingEngine) -> None:
        self._catalog = catalog
        self._engine = engine

    def build_full_kingdom(self, options: RandomizerOptions) -> Kingdom | Unsatisfiable:
        return self._engine.sample_kingdom_or_fail(self._catalog, options)

    def build_partial_kingdom(
        self,
        current: Kingdom,
        selection: Selection,
        options: RandomizerOptions,
    ) -> PartialOutcome:
        locked_ids = selection.selected_supply_ids | selection.selected_addon_ids
        if current.supply.is_complete and locked_ids.issuperset(current.card_ids()):
            return PartialOutcome(kingdom=current)

        locked_supply = [card for card in current.supply if card.card_id in locked_ids]
        replaced = [card for card in current.supply if card.card_id not in locked_ids]

        supply = current.supply
        supply_resampled = False
        if not locked_supply:
            sampled = self._engine.sample_supply(self._catalog, options)
            supply_resampled = True
        elif replaced or not current.supply.is_complete:
            partial_options = options.evolve(
                include_card_ids=tuple(
                    dict.fromkeys(
                        (*options.include_card_ids, *(card.card_id for card in locked_supply))
                    )
                ),
                locked_card_ids=options.locked_card_ids | {card.card_id for card in locked_supply},
                avoid_card_ids=options.avoid_card_ids | {card.card_id for card in replaced},
                exclude_card_ids=options.exclude_card_ids - {card.card_id for card in locked_supply},
            )
            sampled = self._engine.sample_supply(self._catalog, partial_options)
            supply_resampled = True
        else:
            sampled = supply
        if isinstance(sampled, Unsatisfiable):
            logger.warning("Partial re-randomization failed: %s", sampled.reason)
            return PartialOutcome(kingdom=current, unsatisfiable=sampled)
        supply = sampled

        addons, addons_resampled = self._redraw_addons(current, selection, options)
        kingdom = current.with_supply(supply).with_addons(addons)
        return PartialOutcome(
            kingdom=kingdom,
            supply_resampled=supply_resampled,
            addons_resampled=addons_resampled,
        )

    def complete_kingdom(self, partial: Kingdom, options: RandomizerOptions) -> Kingdom | Unsatisfiable:
        """Fill a kingdom holding fewer than ten supply cards, keeping its cards."""
        if partial.supply.is_complete:
            return partial
        fill_options = options.evolve(
            include_card_ids=tuple(dict.fromkeys((*options.include_card_ids, *partial.supply.ids())))
        )
        supply = self._engine.sample_supply(self._catalog, fill_options)
        if isinstance(supply, Unsatisfiable):
            return supply
        return Kingdom.create(supply, partial.addons, metadata=partial.metadata)

    def _redraw_addons(
        self,
        current: Kingdom,
        selection: Selection,
        options: RandomizerOptions,
    ) -> tuple[AddonBundle, bool]:
        current_addons = current.addons.all_cards()
        locked = [card for card in current_addons if card.card_id in selection.selected_addon_ids]
        if not locked:
            count = self._engine.addon_count(self._catalog, options)
            return self._engine.sample_addons(self._catalog, options.set_ids, (), count), True

        unlocked_count = len(current_addons) - len(locked)
        if not unlocked_count:
            return current.addons, False
        fresh = self._engine.sample_addons(
            self._catalog,
            options.set_ids,
            [card.card_id for card in locked],
            unlocked_count,
        )
        return AddonBundle.from_cards((*locked, *fresh.all_cards())), True
