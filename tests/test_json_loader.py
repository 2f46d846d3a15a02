import json
import logging
from pathlib import Path

import pytest

from kingdomforge.app import RandomizerApp
from kingdomforge.config import RandomizerConfig
from kingdomforge.domain.cards import Capability, CardType, Cost, Way
from kingdomforge.loaders import (
    load_catalog_from_json,
    parse_catalog_dict,
    validate_catalog_dict,
    validate_catalog_file,
)

EXAMPLE_CATALOG = Path(__file__).resolve().parents[1] / "examples" / "catalog.json"


def minimal_catalog(**overrides):
    card = {
        "id": "alchemy_familiar",
        "shortId": "familiar",
        "name": "Familiar",
        "cost": {"treasure": 3, "potion": 1},
        "types": ["action", "attack"],
        "tags": ["drawer", "cursing"],
    }
    card.update(overrides)
    return {"sets": [{"id": "alchemy", "name": "Alchemy", "cards": [card]}]}


def test_parse_catalog_dict_builds_cards():
    data = minimal_catalog()
    data["sets"][0]["ways"] = [
        {"id": "menagerie_wayoftheox", "name": "Way of the Ox", "replaces": "+2 Actions"}
    ]

    definition = parse_catalog_dict(data)

    card_set = definition.sets[0]
    card = card_set.supply_cards[0]
    assert card.short_id == "familiar"
    assert card.cost == Cost(treasure=3, potion=1)
    assert card.types == frozenset({CardType.ACTION, CardType.ATTACK})
    assert card.provides(Capability.CURSING)
    assert card.provides(Capability.ATTACK)
    way = card_set.ways[0]
    assert isinstance(way, Way)
    assert way.replaces == "+2 Actions"
    assert way.short_id == "menagerie_wayoftheox"
    assert definition.card_count() == 2


def test_parse_catalog_dict_rejects_unknown_type():
    with pytest.raises(ValueError, match="invalid type 'spell'"):
        parse_catalog_dict(minimal_catalog(types=["spell"]))


@pytest.mark.parametrize(
    ("override", "message"),
    [
        ({"tags": ["villager"]}, "unknown tag 'villager'"),
        ({"cost": -1}, "cost must be non-negative"),
        ({"cost": {"coffers": 2}}, "unknown component 'coffers'"),
        ({"name": ""}, "non-empty 'name'"),
    ],
)
def test_validate_catalog_dict_reports_card_errors(override, message):
    errors = validate_catalog_dict(minimal_catalog(**override))
    assert any(message in err for err in errors)


def test_validate_catalog_dict_detects_duplicates():
    data = minimal_catalog()
    data["sets"].append(dict(data["sets"][0]))

    errors = validate_catalog_dict(data)

    assert "Set id 'alchemy' defined multiple times." in errors
    assert "Card id 'alchemy_familiar' defined multiple times." in errors


def test_validate_catalog_dict_requires_sets():
    assert validate_catalog_dict({"sets": []}) == ["Catalog must contain non-empty 'sets' array."]


def test_load_catalog_from_json_registers_sets(tmp_path: Path, caplog):
    json_path = tmp_path / "catalog.json"
    json_path.write_text(json.dumps(minimal_catalog()), encoding="utf-8")

    app = RandomizerApp(RandomizerConfig())
    with caplog.at_level(logging.INFO, logger="kingdomforge.loaders.json_loader"):
        definition = load_catalog_from_json(app, json_path)

    assert app.catalog.has_set("alchemy")
    assert app.catalog.get_card("alchemy_familiar").name == "Familiar"
    assert definition.card_count() == 1
    assert "Loaded 1 sets with 1 cards" in caplog.text


def test_bundled_example_catalog_is_valid():
    assert validate_catalog_file(EXAMPLE_CATALOG) == []

    app = RandomizerApp(RandomizerConfig(selected_sets=("baseset2", "menagerie"), rng_seed=1))
    load_catalog_from_json(app, EXAMPLE_CATALOG)
    app.config.randomizer.require_reaction = True
    app.config.randomizer.require_action_provider = True

    outcome = app.randomizer.randomize()

    assert outcome.ok
    assert any(card.provides(Capability.ACTION_SUPPLIER) for card in outcome.kingdom.supply)
