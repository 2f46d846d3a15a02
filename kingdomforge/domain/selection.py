"""User-locked cards of the displayed kingdom."""

from __future__ import annotations

from dataclasses import dataclass, field

from .cards import AnyCard, is_addon


@dataclass(frozen=True, slots=True)
class Selection:
    """Two disjoint sets of locked ids; every operation returns a new value."""

    selected_supply_ids: frozenset[str] = field(default_factory=frozenset)
    selected_addon_ids: frozenset[str] = field(default_factory=frozenset)

    def contains(self, card_id: str) -> bool:
        return card_id in self.selected_supply_ids or card_id in self.selected_addon_ids

    def __contains__(self, card_id: object) -> bool:
        return isinstance(card_id, str) and self.contains(card_id)

    @property
    def is_empty(self) -> bool:
        return not self.selected_supply_ids and not self.selected_addon_ids

    def with_added(self, card_id: str, card: AnyCard) -> "Selection":
        if self.contains(card_id):
            return self
        if is_addon(card):
            return Selection(self.selected_supply_ids, self.selected_addon_ids | {card_id})
        return Selection(self.selected_supply_ids | {card_id}, self.selected_addon_ids)

    def with_removed(self, card_id: str) -> "Selection":
        if not self.contains(card_id):
            return self
        return Selection(
            self.selected_supply_ids - {card_id},
            self.selected_addon_ids - {card_id},
        )

    def cleared(self) -> "Selection":
        return Selection()
