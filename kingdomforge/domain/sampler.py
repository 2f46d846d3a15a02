"""Constrained random sampling of supplies and addons."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import Iterable, Sequence

from .cards import AddonCard, CardCatalog, SupplyCard
from .exceptions import InvalidRandomizerOptions
from .kingdom import AddonBundle, Kingdom, Supply
from .options import SUPPLY_SIZE, RandomizerOptions
from .scoring import (
    Requirements,
    SamplingState,
    build_scorers,
    score_candidate,
    signature_counts,
)
from ..config import SamplingWeights

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Unsatisfiable:
    """No selection satisfies the request with the current catalog."""

    reason: str


class SamplingEngine:
    """Turn a catalog plus RandomizerOptions into a valid supply or addon bundle."""

    def __init__(
        self,
        *,
        rng: Random | None = None,
        weights: SamplingWeights | None = None,
    ) -> None:
        self._rng = rng or Random()
        self._weights = weights or SamplingWeights()
        self._scorers = build_scorers(self._weights)

    def sample_supply(self, catalog: CardCatalog, options: RandomizerOptions) -> Supply | Unsatisfiable:
        self._ensure_valid(catalog, options)

        includes = [
            catalog.get_card(card_id) for card_id in dict.fromkeys(options.include_card_ids)
        ]
        if len(includes) > SUPPLY_SIZE:
            return self._unsatisfiable(
                f"{len(includes)} cards are required but the supply holds {SUPPLY_SIZE}"
            )
        for card in includes:
            if card.card_id in options.locked_card_ids:
                continue
            if card.card_id in options.exclude_card_ids:
                return self._unsatisfiable(f"Card {card.card_id} is both included and excluded")
            if card.types & options.exclude_types:
                return self._unsatisfiable(f"Card {card.card_id} has an excluded type")

        include_ids = set(options.include_card_ids)
        pool = [
            card
            for card in catalog.cards_for_sets(options.set_ids)
            if card.card_id not in include_ids and self._is_eligible(card, options)
        ]

        requirements = Requirements.from_options(options)
        state = SamplingState(requirements=requirements, options=options)
        for card in includes:
            state.add(card)

        counts = signature_counts(requirements, pool)
        slots = SUPPLY_SIZE - len(state.selected)
        if not requirements.can_complete(state.provided, counts, slots):
            return self._unsatisfiable(
                f"No completion of {slots} slots from {len(pool)} eligible cards "
                f"meets the requirements"
            )

        while len(state.selected) < SUPPLY_SIZE:
            slots = SUPPLY_SIZE - len(state.selected) - 1
            viable: dict = {}
            candidates: list[SupplyCard] = []
            for card in pool:
                sig = requirements.signature(card)
                if sig not in viable:
                    counts[sig] -= 1
                    viable[sig] = requirements.can_complete(state.provided | sig, counts, slots)
                    counts[sig] += 1
                if viable[sig]:
                    candidates.append(card)
            if not candidates:
                # can_complete held before this draw, so this only trips on a logic error.
                return self._unsatisfiable("Eligible pool exhausted")

            weights = [score_candidate(card, state, self._scorers, self._weights) for card in candidates]
            chosen = candidates[self._weighted_index(weights)]
            pool.remove(chosen)
            counts[requirements.signature(chosen)] -= 1
            state.add(chosen)
            logger.debug(
                "Drew %s (%d/%d), unmet=%s",
                chosen.card_id,
                len(state.selected),
                SUPPLY_SIZE,
                sorted(cap.value for cap in state.unmet),
            )

        return Supply(tuple(state.selected))

    def sample_kingdom_or_fail(
        self, catalog: CardCatalog, options: RandomizerOptions
    ) -> Kingdom | Unsatisfiable:
        """Fresh supply plus addons; raises InvalidRandomizerOptions on malformed options."""
        supply = self.sample_supply(catalog, options)
        if isinstance(supply, Unsatisfiable):
            return supply
        addons = self.sample_addons(
            catalog, options.set_ids, (), self.addon_count(catalog, options)
        )
        return Kingdom.create(supply, addons)

    def sample_addons(
        self,
        catalog: CardCatalog,
        set_ids: Iterable[str],
        locked_addon_ids: Iterable[str],
        total_count: int,
    ) -> AddonBundle:
        locked = set(locked_addon_ids)
        pool: list[AddonCard] = [
            card for card in catalog.addons_for_sets(set_ids) if card.card_id not in locked
        ]
        amount = max(0, min(total_count, len(pool)))
        if amount < total_count:
            logger.info("Only %d of %d requested addons are available", amount, total_count)
        return AddonBundle.from_cards(self._rng.sample(pool, amount))

    def addon_count(self, catalog: CardCatalog, options: RandomizerOptions) -> int:
        """How many addons a fresh kingdom receives.

        Each of the ``max_addons`` slots is taken with the probability of
        hitting an addon when addons are shuffled in with the supply cards.
        """
        addon_pool = len(catalog.addons_for_sets(options.set_ids))
        supply_pool = len(catalog.cards_for_sets(options.set_ids))
        if not addon_pool or options.max_addons <= 0:
            return 0
        chance = addon_pool / (addon_pool + supply_pool)
        return sum(1 for _ in range(options.max_addons) if self._rng.random() < chance)

    def _ensure_valid(self, catalog: CardCatalog, options: RandomizerOptions) -> None:
        errors = options.validate(catalog)
        if errors:
            raise InvalidRandomizerOptions(errors)

    @staticmethod
    def _is_eligible(card: SupplyCard, options: RandomizerOptions) -> bool:
        if card.card_id in options.exclude_card_ids:
            return False
        return not (card.types & options.exclude_types)

    def _unsatisfiable(self, reason: str) -> Unsatisfiable:
        logger.debug("Supply unsatisfiable: %s", reason)
        return Unsatisfiable(reason)

    def _weighted_index(self, weights: Sequence[float]) -> int:
        total = sum(weights)
        if total <= 0:
            return int(self._rng.random() * len(weights))
        threshold = self._rng.random() * total
        cumulative = 0.0
        for idx, weight in enumerate(weights):
            cumulative += weight
            if threshold <= cumulative:
                return idx
        return len(weights) - 1
