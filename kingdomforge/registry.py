"""Runtime registry for card sets."""

from __future__ import annotations

from .domain.cards import CardCatalog, CardSet


class CatalogRegistry:
    """Facade around CardCatalog with chainable API."""

    def __init__(self) -> None:
        self.catalog = CardCatalog()

    def card_set(self, card_set: CardSet) -> "CatalogRegistry":
        self.catalog.register_set(card_set)
        return self


__all__ = ["CatalogRegistry"]
