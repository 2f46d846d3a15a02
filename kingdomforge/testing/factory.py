"""Factories for tests and prototyping."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterable

from faker import Faker

from ..domain.cards import (
    AddonCard,
    Capability,
    CardSet,
    CardType,
    Cost,
    Event,
    Landmark,
    Project,
    SupplyCard,
    Way,
)


@dataclass(slots=True)
class CardFactory:
    set_id: str = "base"
    faker: Faker = field(default_factory=Faker)
    rng: Random = field(default_factory=Random)

    def _identity(self) -> tuple[str, str, str]:
        short_id = self.faker.unique.lexify(text="????????")
        return f"{self.set_id}_{short_id}", short_id, self.faker.word().title()

    def build(
        self,
        *,
        capabilities: Iterable[Capability] = (),
        types: Iterable[CardType] = (CardType.ACTION,),
        treasure: int | None = None,
    ) -> SupplyCard:
        card_id, short_id, name = self._identity()
        return SupplyCard(
            card_id=card_id,
            short_id=short_id,
            set_id=self.set_id,
            name=name,
            cost=Cost(treasure=self.rng.randint(2, 6) if treasure is None else treasure),
            capabilities=frozenset(capabilities),
            types=frozenset(types),
        )

    def batch(self, count: int, **kwargs) -> Iterable[SupplyCard]:
        for _ in range(count):
            yield self.build(**kwargs)

    def addon(self, factory: type = Event) -> AddonCard:
        card_id, short_id, name = self._identity()
        cost = Cost() if factory in (Landmark, Way) else Cost(treasure=self.rng.randint(0, 8))
        return factory(card_id=card_id, short_id=short_id, set_id=self.set_id, name=name, cost=cost)


@dataclass(slots=True)
class SetFactory:
    faker: Faker = field(default_factory=Faker)

    def build(
        self,
        set_id: str,
        *,
        plain: int = 10,
        cards: Iterable[SupplyCard] = (),
        events: int = 0,
        landmarks: int = 0,
        projects: int = 0,
        ways: int = 0,
    ) -> CardSet:
        factory = CardFactory(set_id=set_id, faker=self.faker)
        return CardSet(
            set_id=set_id,
            name=set_id.title(),
            supply_cards=(*cards, *factory.batch(plain)),
            events=tuple(factory.addon(Event) for _ in range(events)),
            landmarks=tuple(factory.addon(Landmark) for _ in range(landmarks)),
            projects=tuple(factory.addon(Project) for _ in range(projects)),
            ways=tuple(factory.addon(Way) for _ in range(ways)),
        )
