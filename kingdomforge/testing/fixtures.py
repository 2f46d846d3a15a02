"""Pytest fixtures for KingdomForge."""

from __future__ import annotations

from random import Random

import pytest

from ..app import RandomizerApp
from ..config import RandomizerConfig
from .factory import SetFactory


@pytest.fixture()
def sample_app() -> RandomizerApp:
    config = RandomizerConfig(selected_sets=("base",), rng_seed=7)
    app = RandomizerApp(config)
    app.sets.card_set(SetFactory().build("base", plain=15, events=2))
    return app


def app_fixture(*set_ids: str, rng: Random | None = None, **kwargs) -> RandomizerApp:
    """Build an app with one factory-made set per id, outside of pytest fixtures."""
    config = RandomizerConfig(selected_sets=set_ids or ("base",), **kwargs)
    app = RandomizerApp(config, rng=rng)
    factory = SetFactory()
    for set_id in config.selected_sets:
        app.sets.card_set(factory.build(set_id))
    return app
