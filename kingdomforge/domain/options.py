"""Randomization request values and their fluent builder."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from .cards import CardCatalog, CardKind, CardType

SUPPLY_SIZE = 10
DEFAULT_MAX_ADDONS = 2


@dataclass(frozen=True, slots=True)
class RandomizerOptions:
    """Immutable description of a single randomization request."""

    set_ids: tuple[str, ...] = ()
    exclude_types: frozenset[CardType] = field(default_factory=frozenset)
    include_card_ids: tuple[str, ...] = ()
    exclude_card_ids: frozenset[str] = field(default_factory=frozenset)
    avoid_card_ids: frozenset[str] = field(default_factory=frozenset)
    # Cards kept from the displayed kingdom; exclusions added after locking do not apply.
    locked_card_ids: frozenset[str] = field(default_factory=frozenset)
    require_action_provider: bool = False
    require_buy_provider: bool = False
    require_trashing: bool = False
    require_reaction_if_attacks: bool = False
    distribute_cost: bool = False
    prioritize_set: str | None = None
    max_addons: int = DEFAULT_MAX_ADDONS

    def has_requirements(self) -> bool:
        return (
            self.require_action_provider
            or self.require_buy_provider
            or self.require_trashing
            or self.require_reaction_if_attacks
        )

    def evolve(self, **changes) -> "RandomizerOptions":
        return replace(self, **changes)

    def validate(self, catalog: CardCatalog) -> list[str]:
        """Return structural errors; an empty list means the request is well formed."""
        errors: list[str] = []
        if not self.set_ids:
            errors.append("At least one set must be selected.")
        for set_id in self.set_ids:
            if not catalog.has_set(set_id):
                errors.append(f"Unknown set '{set_id}'.")
        if self.prioritize_set is not None and self.prioritize_set not in self.set_ids:
            errors.append(f"Prioritized set '{self.prioritize_set}' is not selected.")
        for card_id in self.include_card_ids:
            card = catalog.card_by_id(card_id)
            if card is None:
                errors.append(f"Included card '{card_id}' does not exist.")
            elif card.kind is not CardKind.SUPPLY:
                errors.append(f"Included card '{card_id}' is not a supply card.")
        if self.max_addons < 0:
            errors.append("max_addons cannot be negative.")
        return errors


class RandomizerOptionsBuilder:
    """Order-independent fluent construction of RandomizerOptions."""

    def __init__(self) -> None:
        self._set_ids: tuple[str, ...] = ()
        self._exclude_types: frozenset[CardType] = frozenset()
        self._include_card_ids: tuple[str, ...] = ()
        self._exclude_card_ids: frozenset[str] = frozenset()
        self._avoid_card_ids: frozenset[str] = frozenset()
        self._locked_card_ids: frozenset[str] = frozenset()
        self._require_action_provider = False
        self._require_buy_provider = False
        self._require_trashing = False
        self._require_reaction_if_attacks = False
        self._distribute_cost = False
        self._prioritize_set: str | None = None
        self._max_addons = DEFAULT_MAX_ADDONS

    def set_set_ids(self, set_ids: Iterable[str]) -> "RandomizerOptionsBuilder":
        self._set_ids = _unique(set_ids)
        return self

    def set_exclude_types(self, card_types: Iterable[CardType]) -> "RandomizerOptionsBuilder":
        self._exclude_types = frozenset(CardType(value) for value in card_types)
        return self

    def set_include_card_ids(self, card_ids: Iterable[str]) -> "RandomizerOptionsBuilder":
        self._include_card_ids = _unique(card_ids)
        return self

    def set_exclude_card_ids(self, card_ids: Iterable[str]) -> "RandomizerOptionsBuilder":
        self._exclude_card_ids = frozenset(card_ids)
        return self

    def set_avoid_card_ids(self, card_ids: Iterable[str]) -> "RandomizerOptionsBuilder":
        self._avoid_card_ids = frozenset(card_ids)
        return self

    def set_locked_card_ids(self, card_ids: Iterable[str]) -> "RandomizerOptionsBuilder":
        self._locked_card_ids = frozenset(card_ids)
        return self

    def set_require_action_provider(self, value: bool) -> "RandomizerOptionsBuilder":
        self._require_action_provider = bool(value)
        return self

    def set_require_buy_provider(self, value: bool) -> "RandomizerOptionsBuilder":
        self._require_buy_provider = bool(value)
        return self

    def set_require_trashing(self, value: bool) -> "RandomizerOptionsBuilder":
        self._require_trashing = bool(value)
        return self

    def set_require_reaction_if_attacks(self, value: bool) -> "RandomizerOptionsBuilder":
        self._require_reaction_if_attacks = bool(value)
        return self

    def set_distribute_cost(self, value: bool, *, allowed: bool = True) -> "RandomizerOptionsBuilder":
        self._distribute_cost = bool(value) and allowed
        return self

    def set_prioritize_set(
        self, set_id: str | None, *, allowed: bool = True
    ) -> "RandomizerOptionsBuilder":
        self._prioritize_set = set_id if allowed and set_id else None
        return self

    def set_max_addons(self, value: int) -> "RandomizerOptionsBuilder":
        self._max_addons = int(value)
        return self

    def build(self) -> RandomizerOptions:
        return RandomizerOptions(
            set_ids=self._set_ids,
            exclude_types=self._exclude_types,
            include_card_ids=self._include_card_ids,
            exclude_card_ids=self._exclude_card_ids,
            avoid_card_ids=self._avoid_card_ids,
            locked_card_ids=self._locked_card_ids,
            require_action_provider=self._require_action_provider,
            require_buy_provider=self._require_buy_provider,
            require_trashing=self._require_trashing,
            require_reaction_if_attacks=self._require_reaction_if_attacks,
            distribute_cost=self._distribute_cost,
            prioritize_set=self._prioritize_set,
            max_addons=self._max_addons,
        )


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))
