"""Exceptions raised by KingdomForge domain services."""

from __future__ import annotations

from typing import Sequence


class KingdomForgeError(RuntimeError):
    """Base class for domain exceptions."""


class InvalidRandomizerOptions(KingdomForgeError):
    """Raised when a randomization request is structurally malformed."""

    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__("Invalid randomizer options: " + "; ".join(errors))
        self.errors = tuple(errors)


class CardNotInKingdom(KingdomForgeError):
    """Raised when locking a card that is not part of the current kingdom."""

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Card {card_id} is not in the current kingdom")
        self.card_id = card_id


class CatalogError(KingdomForgeError):
    """Raised when catalog registration would break id uniqueness."""
