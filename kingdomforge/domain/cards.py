"""Card domain models and the read-only catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Sequence, Union

from .exceptions import CatalogError


class CardKind(str, Enum):
    SUPPLY = "supply"
    EVENT = "event"
    LANDMARK = "landmark"
    PROJECT = "project"
    WAY = "way"


class CardType(str, Enum):
    ACTION = "action"
    ATTACK = "attack"
    DURATION = "duration"
    REACTION = "reaction"
    TREASURE = "treasure"
    VICTORY = "victory"
    RESERVE = "reserve"
    NIGHT = "night"
    COMMAND = "command"
    LOOTER = "looter"
    RUINS = "ruins"
    SHELTER = "shelter"
    KNIGHT = "knight"
    CASTLE = "castle"
    GATHERING = "gathering"
    FATE = "fate"
    DOOM = "doom"
    LIAISON = "liaison"


class Capability(str, Enum):
    """Boolean card attributes used by requirement checks."""

    ACTION_SUPPLIER = "actionSupplier"
    BUY_SUPPLIER = "buySupplier"
    DRAWER = "drawer"
    TRASHING = "trashing"
    REACTION = "reaction"
    ATTACK = "attack"
    CURSING = "cursing"


class CostTier(str, Enum):
    LOW = "2-"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    HIGH = "6+"


_TIER_ORDER = (CostTier.LOW, CostTier.THREE, CostTier.FOUR, CostTier.FIVE, CostTier.HIGH)


@dataclass(frozen=True, slots=True)
class Cost:
    """Composite card cost."""

    treasure: int = 0
    potion: int = 0
    debt: int = 0

    @property
    def tier(self) -> CostTier:
        # Potion and debt costs play like a more expensive card.
        index = min(max(self.treasure - 2, 0), len(_TIER_ORDER) - 1)
        if self.potion or self.debt:
            index = min(index + 1, len(_TIER_ORDER) - 1)
        return _TIER_ORDER[index]

    def __str__(self) -> str:
        parts = []
        if self.treasure or not (self.potion or self.debt):
            parts.append(f"${self.treasure}")
        if self.potion:
            parts.append("P" * self.potion)
        if self.debt:
            parts.append(f"{self.debt}D")
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class CardBase:
    """Attributes shared by every card variant."""

    card_id: str
    short_id: str
    set_id: str
    name: str
    cost: Cost = field(default_factory=Cost)
    capabilities: frozenset[Capability] = field(default_factory=frozenset)

    kind: ClassVar[CardKind]

    def provides(self, capability: Capability) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True, slots=True)
class SupplyCard(CardBase):
    """A card occupying one of the ten supply piles."""

    types: frozenset[CardType] = field(default_factory=frozenset)
    way_id: str | None = None

    kind: ClassVar[CardKind] = CardKind.SUPPLY

    def provides(self, capability: Capability) -> bool:
        if capability is Capability.ATTACK and CardType.ATTACK in self.types:
            return True
        return capability in self.capabilities

    def is_type(self, card_type: CardType) -> bool:
        return card_type in self.types


@dataclass(frozen=True, slots=True)
class Event(CardBase):
    kind: ClassVar[CardKind] = CardKind.EVENT


@dataclass(frozen=True, slots=True)
class Landmark(CardBase):
    kind: ClassVar[CardKind] = CardKind.LANDMARK


@dataclass(frozen=True, slots=True)
class Project(CardBase):
    kind: ClassVar[CardKind] = CardKind.PROJECT


@dataclass(frozen=True, slots=True)
class Way(CardBase):
    """Alternative way to play an Action card."""

    replaces: str = ""

    kind: ClassVar[CardKind] = CardKind.WAY


AddonCard = Union[Event, Landmark, Project, Way]
AnyCard = Union[SupplyCard, Event, Landmark, Project, Way]

ADDON_KINDS = frozenset({CardKind.EVENT, CardKind.LANDMARK, CardKind.PROJECT, CardKind.WAY})


def is_addon(card: AnyCard) -> bool:
    return card.kind in ADDON_KINDS


@dataclass(frozen=True, slots=True)
class CardSet:
    """Cards and addons published together."""

    set_id: str
    name: str
    supply_cards: Sequence[SupplyCard] = ()
    events: Sequence[Event] = ()
    landmarks: Sequence[Landmark] = ()
    projects: Sequence[Project] = ()
    ways: Sequence[Way] = ()

    def addons(self) -> tuple[AddonCard, ...]:
        return (*self.events, *self.landmarks, *self.projects, *self.ways)

    def all_cards(self) -> tuple[AnyCard, ...]:
        return (*self.supply_cards, *self.addons())


class CardCatalog:
    """Registry of card sets, queried by set id and card id."""

    def __init__(self) -> None:
        self._sets: dict[str, CardSet] = {}
        self._cards: dict[str, AnyCard] = {}

    def register_set(self, card_set: CardSet) -> None:
        if card_set.set_id in self._sets:
            raise CatalogError(f"Set {card_set.set_id} already registered")
        seen: set[str] = set()
        for card in card_set.all_cards():
            if card.card_id in self._cards or card.card_id in seen:
                raise CatalogError(f"Card {card.card_id} already registered")
            if card.set_id != card_set.set_id:
                raise CatalogError(
                    f"Card {card.card_id} belongs to set {card.set_id}, not {card_set.set_id}"
                )
            seen.add(card.card_id)
        self._sets[card_set.set_id] = card_set
        for card in card_set.all_cards():
            self._cards[card.card_id] = card

    def register_sets(self, card_sets: Iterable[CardSet]) -> None:
        for card_set in card_sets:
            self.register_set(card_set)

    def get_set(self, set_id: str) -> CardSet:
        try:
            return self._sets[set_id]
        except KeyError as exc:
            raise KeyError(f"Set {set_id} not found") from exc

    def has_set(self, set_id: str) -> bool:
        return set_id in self._sets

    def get_card(self, card_id: str) -> AnyCard:
        try:
            return self._cards[card_id]
        except KeyError as exc:
            raise KeyError(f"Card {card_id} not found") from exc

    def card_by_id(self, card_id: str) -> AnyCard | None:
        return self._cards.get(card_id)

    def cards_for_sets(self, set_ids: Iterable[str]) -> list[SupplyCard]:
        cards: list[SupplyCard] = []
        for set_id in dict.fromkeys(set_ids):
            card_set = self._sets.get(set_id)
            if card_set:
                cards.extend(card_set.supply_cards)
        return cards

    def addons_for_sets(self, set_ids: Iterable[str]) -> list[AddonCard]:
        addons: list[AddonCard] = []
        for set_id in dict.fromkeys(set_ids):
            card_set = self._sets.get(set_id)
            if card_set:
                addons.extend(card_set.addons())
        return addons

    def iter_sets(self) -> Iterable[CardSet]:
        return self._sets.values()
