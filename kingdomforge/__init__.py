"""KingdomForge public API."""

from .app import RandomizerApp
from .config import RandomizerConfig, RandomizerSettings, SamplingWeights
from .registry import CatalogRegistry

__all__ = [
    "RandomizerApp",
    "RandomizerConfig",
    "RandomizerSettings",
    "SamplingWeights",
    "CatalogRegistry",
]
