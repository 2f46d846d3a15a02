"""Supply, addon bundle and kingdom value objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .cards import AddonCard, AnyCard, CardKind, Event, Landmark, Project, SupplyCard, Way
from .options import SUPPLY_SIZE


def new_kingdom_id() -> int:
    """Creation timestamp in milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class Supply:
    cards: tuple[SupplyCard, ...] = ()

    def __post_init__(self) -> None:
        ids = [card.card_id for card in self.cards]
        if len(ids) != len(set(ids)):
            raise ValueError("Supply cannot contain duplicate cards")
        if len(ids) > SUPPLY_SIZE:
            raise ValueError(f"Supply cannot hold more than {SUPPLY_SIZE} cards")

    @property
    def is_complete(self) -> bool:
        return len(self.cards) == SUPPLY_SIZE

    def ids(self) -> tuple[str, ...]:
        return tuple(card.card_id for card in self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)


@dataclass(frozen=True, slots=True)
class AddonBundle:
    events: tuple[Event, ...] = ()
    landmarks: tuple[Landmark, ...] = ()
    projects: tuple[Project, ...] = ()
    ways: tuple[Way, ...] = ()

    @classmethod
    def from_cards(cls, cards: Iterable[AddonCard]) -> "AddonBundle":
        buckets: dict[CardKind, list[AddonCard]] = {
            CardKind.EVENT: [],
            CardKind.LANDMARK: [],
            CardKind.PROJECT: [],
            CardKind.WAY: [],
        }
        for card in cards:
            try:
                buckets[card.kind].append(card)
            except KeyError as exc:
                raise ValueError(f"Card {card.card_id} is not an addon") from exc
        return cls(
            events=tuple(buckets[CardKind.EVENT]),
            landmarks=tuple(buckets[CardKind.LANDMARK]),
            projects=tuple(buckets[CardKind.PROJECT]),
            ways=tuple(buckets[CardKind.WAY]),
        )

    def all_cards(self) -> tuple[AddonCard, ...]:
        return (*self.events, *self.landmarks, *self.projects, *self.ways)

    def ids(self) -> tuple[str, ...]:
        return tuple(card.card_id for card in self.all_cards())

    def __len__(self) -> int:
        return len(self.all_cards())


@dataclass(frozen=True, slots=True)
class Kingdom:
    """A supply plus addons; ids are unique across every collection."""

    kingdom_id: int
    supply: Supply
    events: tuple[Event, ...] = ()
    landmarks: tuple[Landmark, ...] = ()
    projects: tuple[Project, ...] = ()
    ways: tuple[Way, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        ids = self.card_ids()
        if len(ids) != len(set(ids)):
            raise ValueError("Kingdom cards must have unique ids")
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def create(
        cls,
        supply: Supply,
        addons: AddonBundle | None = None,
        *,
        kingdom_id: int | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> "Kingdom":
        addons = addons or AddonBundle()
        return cls(
            kingdom_id=new_kingdom_id() if kingdom_id is None else kingdom_id,
            supply=supply,
            events=addons.events,
            landmarks=addons.landmarks,
            projects=addons.projects,
            ways=addons.ways,
            metadata=metadata or {},
        )

    @property
    def addons(self) -> AddonBundle:
        return AddonBundle(self.events, self.landmarks, self.projects, self.ways)

    def card_ids(self) -> tuple[str, ...]:
        return (*self.supply.ids(), *self.addons.ids())

    def all_cards(self) -> tuple[AnyCard, ...]:
        return (*self.supply.cards, *self.addons.all_cards())

    def find(self, card_id: str) -> AnyCard | None:
        for card in self.all_cards():
            if card.card_id == card_id:
                return card
        return None

    def with_supply(self, supply: Supply) -> "Kingdom":
        return replace(self, supply=supply)

    def with_addons(self, addons: AddonBundle) -> "Kingdom":
        return replace(
            self,
            events=addons.events,
            landmarks=addons.landmarks,
            projects=addons.projects,
            ways=addons.ways,
        )
