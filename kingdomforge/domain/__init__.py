"""Domain models and services."""

from .cards import (
    AddonCard,
    AnyCard,
    Capability,
    CardCatalog,
    CardKind,
    CardSet,
    CardType,
    Cost,
    CostTier,
    Event,
    Landmark,
    Project,
    SupplyCard,
    Way,
)
from .assembly import KingdomAssembler, PartialOutcome
from .events import EventBus, FailureKind, RandomizeKind
from .exceptions import (
    CardNotInKingdom,
    CatalogError,
    InvalidRandomizerOptions,
    KingdomForgeError,
)
from .kingdom import AddonBundle, Kingdom, Supply
from .options import RandomizerOptions, RandomizerOptionsBuilder
from .randomizer import RandomizeOutcome, RandomizerService
from .sampler import SamplingEngine, Unsatisfiable
from .selection import Selection

__all__ = [
    "AddonCard",
    "AnyCard",
    "Capability",
    "CardCatalog",
    "CardKind",
    "CardSet",
    "CardType",
    "Cost",
    "CostTier",
    "Event",
    "Landmark",
    "Project",
    "SupplyCard",
    "Way",
    "KingdomAssembler",
    "PartialOutcome",
    "EventBus",
    "FailureKind",
    "RandomizeKind",
    "CardNotInKingdom",
    "CatalogError",
    "InvalidRandomizerOptions",
    "KingdomForgeError",
    "AddonBundle",
    "Kingdom",
    "Supply",
    "RandomizerOptions",
    "RandomizerOptionsBuilder",
    "RandomizeOutcome",
    "RandomizerService",
    "SamplingEngine",
    "Unsatisfiable",
    "Selection",
]
