"""Load card sets from JSON definitions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence, TYPE_CHECKING

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

if TYPE_CHECKING:
    from ..app import RandomizerApp

logger = logging.getLogger(__name__)

_ADDON_SECTIONS: dict[str, type] = {
    "events": Event,
    "landmarks": Landmark,
    "projects": Project,
    "ways": Way,
}


@dataclass(slots=True)
class CatalogDefinition:
    sets: Sequence[CardSet]

    def card_count(self) -> int:
        return sum(len(card_set.all_cards()) for card_set in self.sets)


def load_catalog_from_json(app: "RandomizerApp", path: str | Path) -> CatalogDefinition:
    """Load card sets from a JSON file and register them on the app."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    definition = parse_catalog_dict(data)
    for card_set in definition.sets:
        app.sets.card_set(card_set)
    logger.info(
        "Loaded %d sets with %d cards from %s", len(definition.sets), definition.card_count(), path
    )
    return definition


def parse_catalog_dict(data: dict[str, Any]) -> CatalogDefinition:
    """Parse a JSON dict (already decoded) into domain objects."""
    errors = validate_catalog_dict(data)
    if errors:
        raise ValueError(_format_errors("Catalog validation failed", errors))
    return CatalogDefinition(sets=tuple(parse_set(entry) for entry in data["sets"]))


def parse_set(entry: dict[str, Any]) -> CardSet:
    set_id = entry["id"]
    addons: dict[str, tuple[AddonCard, ...]] = {
        section: tuple(parse_addon(item, set_id, factory) for item in entry.get(section, []))
        for section, factory in _ADDON_SECTIONS.items()
    }
    return CardSet(
        set_id=set_id,
        name=entry.get("name", set_id.title()),
        supply_cards=tuple(parse_supply_card(item, set_id) for item in entry.get("cards", [])),
        events=addons["events"],
        landmarks=addons["landmarks"],
        projects=addons["projects"],
        ways=addons["ways"],
    )


def parse_cost(raw: dict[str, Any] | int | None) -> Cost:
    if raw is None:
        return Cost()
    if isinstance(raw, int):
        return Cost(treasure=raw)
    return Cost(
        treasure=int(raw.get("treasure", 0)),
        potion=int(raw.get("potion", 0)),
        debt=int(raw.get("debt", 0)),
    )


def parse_supply_card(entry: dict[str, Any], set_id: str) -> SupplyCard:
    return SupplyCard(
        card_id=entry["id"],
        short_id=entry.get("shortId", entry["id"]),
        set_id=set_id,
        name=entry["name"],
        cost=parse_cost(entry.get("cost")),
        capabilities=frozenset(Capability(tag) for tag in entry.get("tags", [])),
        types=frozenset(CardType(value) for value in entry.get("types", [])),
        way_id=entry.get("wayId"),
    )


def parse_addon(entry: dict[str, Any], set_id: str, factory: Callable[..., AddonCard]) -> AddonCard:
    kwargs: dict[str, Any] = {
        "card_id": entry["id"],
        "short_id": entry.get("shortId", entry["id"]),
        "set_id": set_id,
        "name": entry["name"],
        "cost": parse_cost(entry.get("cost")),
        "capabilities": frozenset(Capability(tag) for tag in entry.get("tags", [])),
    }
    if factory is Way:
        kwargs["replaces"] = entry.get("replaces", "")
    return factory(**kwargs)


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate catalog JSON file and return a list of errors."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_catalog_dict(data)


def validate_catalog_dict(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    sets_raw = data.get("sets") if isinstance(data, dict) else None
    if not isinstance(sets_raw, list) or not sets_raw:
        return ["Catalog must contain non-empty 'sets' array."]

    set_ids: set[str] = set()
    card_ids: set[str] = set()
    for idx, entry in enumerate(sets_raw, start=1):
        if not isinstance(entry, dict):
            errors.append(f"Set #{idx} must be an object.")
            continue
        set_id = entry.get("id")
        if not isinstance(set_id, str) or not set_id.strip():
            errors.append(f"Set #{idx} must define non-empty 'id'.")
            continue
        if set_id in set_ids:
            errors.append(f"Set id '{set_id}' defined multiple times.")
        set_ids.add(set_id)

        cards = entry.get("cards", [])
        if not isinstance(cards, list):
            errors.append(f"Set '{set_id}' has invalid 'cards' array.")
            cards = []
        for card_idx, card in enumerate(cards, start=1):
            errors.extend(_validate_card(card, f"Set '{set_id}' card #{card_idx}", card_ids))
            if not isinstance(card, dict):
                continue
            types = card.get("types", [])
            if not isinstance(types, list):
                errors.append(f"Card '{card.get('id')}' types must be an array.")
                continue
            for value in types:
                try:
                    CardType(value)
                except ValueError:
                    errors.append(f"Card '{card.get('id')}' has invalid type '{value}'.")

        for section in _ADDON_SECTIONS:
            addons = entry.get(section, [])
            if not isinstance(addons, list):
                errors.append(f"Set '{set_id}' has invalid '{section}' array.")
                continue
            for addon_idx, addon in enumerate(addons, start=1):
                errors.extend(
                    _validate_card(addon, f"Set '{set_id}' {section} #{addon_idx}", card_ids)
                )

    return errors


def _validate_card(entry: Any, label: str, card_ids: set[str]) -> list[str]:
    if not isinstance(entry, dict):
        return [f"{label} must be an object."]
    card_id = entry.get("id")
    if not isinstance(card_id, str) or not card_id.strip():
        return [f"{label} must define non-empty 'id'."]

    errors: list[str] = []
    if card_id in card_ids:
        errors.append(f"Card id '{card_id}' defined multiple times.")
    card_ids.add(card_id)

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append(f"Card '{card_id}' must define non-empty 'name'.")

    cost = entry.get("cost")
    if isinstance(cost, int):
        if cost < 0:
            errors.append(f"Card '{card_id}' cost must be non-negative.")
    elif isinstance(cost, dict):
        for key, amount in cost.items():
            if key not in {"treasure", "potion", "debt"}:
                errors.append(f"Card '{card_id}' cost has unknown component '{key}'.")
            elif not isinstance(amount, int) or amount < 0:
                errors.append(f"Card '{card_id}' cost '{key}' must be non-negative integer.")
    elif cost is not None:
        errors.append(f"Card '{card_id}' has invalid 'cost' value '{cost}'.")

    tags = entry.get("tags", [])
    if not isinstance(tags, list):
        errors.append(f"Card '{card_id}' tags must be an array.")
    else:
        for tag in tags:
            try:
                Capability(tag)
            except ValueError:
                errors.append(f"Card '{card_id}' has unknown tag '{tag}'.")
    return errors


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
