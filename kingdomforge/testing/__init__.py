"""Testing utilities for KingdomForge."""

from .factory import CardFactory, SetFactory
from .fixtures import app_fixture, sample_app

__all__ = [
    "CardFactory",
    "SetFactory",
    "app_fixture",
    "sample_app",
]
