"""Example integration: register the bundled catalog and print a few kingdoms."""

from __future__ import annotations

import logging
from pathlib import Path

from kingdomforge import RandomizerApp, RandomizerConfig, RandomizerSettings
from kingdomforge.cli import console, render_kingdom
from kingdomforge.domain.events import KINGDOM_RANDOMIZE_FAILED
from kingdomforge.loaders import load_catalog_from_json


def register(app: RandomizerApp) -> None:
    """Register card sets on the app (used by ``kingdomforge-validate --module``)."""
    load_catalog_from_json(app, Path(__file__).with_name("catalog.json"))
    if not app.config.selected_sets:
        app.config.selected_sets = ("baseset2", "empires", "renaissance")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = RandomizerConfig(
        randomizer=RandomizerSettings(
            require_action_provider=True,
            require_buy_provider=True,
            require_reaction=True,
            distribute_cost=True,
        ),
    )
    app = RandomizerApp(config)
    register(app)
    app.event_bus.subscribe(KINGDOM_RANDOMIZE_FAILED, lambda payload: console.print(payload))

    app.randomizer.randomize()
    console.print(render_kingdom(app.randomizer.kingdom))

    # Keep the two cheapest cards and reroll the rest.
    for card in sorted(app.randomizer.kingdom.supply, key=lambda c: c.cost.treasure)[:2]:
        app.randomizer.select_card(card.card_id)
    app.randomizer.randomize()
    console.print(render_kingdom(app.randomizer.kingdom))


if __name__ == "__main__":
    main()
