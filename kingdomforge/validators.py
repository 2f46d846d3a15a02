"""Validation utilities for KingdomForge applications."""

from __future__ import annotations

from dataclasses import fields

from .app import RandomizerApp
from .domain.cards import Capability
from .domain.options import SUPPLY_SIZE


def validate_app(app: RandomizerApp) -> list[str]:
    """Return list of validation errors discovered in configured app."""
    errors: list[str] = []
    catalog = app.catalog

    if not list(catalog.iter_sets()):
        errors.append("No card sets registered in application.")

    selected = list(app.config.selected_sets)
    if not selected:
        errors.append("No sets selected for randomization.")
    for set_id in selected:
        if not catalog.has_set(set_id):
            errors.append(f"Selected set '{set_id}' is not in the catalog.")

    known = [set_id for set_id in selected if catalog.has_set(set_id)]
    pool = catalog.cards_for_sets(known)
    if known and len(pool) < SUPPLY_SIZE:
        errors.append(
            f"Selected sets provide {len(pool)} supply cards; at least {SUPPLY_SIZE} are needed."
        )

    settings = app.config.randomizer
    required = {
        Capability.ACTION_SUPPLIER: settings.require_action_provider,
        Capability.BUY_SUPPLIER: settings.require_buy_provider,
        Capability.TRASHING: settings.require_trashing,
    }
    for capability, enabled in required.items():
        if enabled and known and not any(card.provides(capability) for card in pool):
            errors.append(f"No selected card provides required capability '{capability.value}'.")

    if settings.prioritize_set and settings.prioritize_set not in selected:
        errors.append(f"Prioritized set '{settings.prioritize_set}' is not selected.")
    if settings.max_addons < 0:
        errors.append("Randomizer setting 'max_addons' cannot be negative.")

    weights = app.config.weights
    for weight_field in fields(weights):
        value = getattr(weights, weight_field.name)
        if value < 0:
            errors.append(f"Sampling weight '{weight_field.name}' cannot be negative.")
    if weights.base <= 0:
        errors.append("Sampling weight 'base' must be positive.")

    return errors


__all__ = ["validate_app"]
