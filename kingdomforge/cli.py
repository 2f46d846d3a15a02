"""Command line helpers for KingdomForge."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .app import RandomizerApp
from .config import RandomizerConfig
from .diagnostics.simulator import RandomizerSimulator
from .domain.kingdom import Kingdom
from .loaders import load_catalog_from_json, validate_catalog_file
from .validators import validate_app

console = Console()


def run_randomize() -> None:
    parser = _base_parser("KingdomForge kingdom randomizer")
    parser.add_argument("--count", type=int, default=1, help="Number of kingdoms to generate")
    args = parser.parse_args()

    app = _build_app(args)
    for _ in range(max(1, args.count)):
        outcome = app.randomizer.randomize_full()
        if not outcome.ok:
            console.print(f"[bold red]Randomization failed ({outcome.failure.value}):[/bold red] {outcome.reason}")
            sys.exit(1)
        console.print(render_kingdom(outcome.kingdom))


def run_simulate() -> None:
    parser = _base_parser("KingdomForge sampling simulator")
    parser.add_argument("--runs", type=int, default=1000, help="Number of supplies to sample")
    args = parser.parse_args()

    app = _build_app(args)
    result = RandomizerSimulator(app).simulate(runs=args.runs)
    console.print(f"Simulated {result.runs} supplies: {result.successes} ok, {result.unsatisfiable} unsatisfiable.")

    tiers = Table(title="Cost tiers")
    tiers.add_column("Tier")
    tiers.add_column("Cards", justify="right")
    for tier, count in result.tier_frequency.items():
        tiers.add_row(tier.value, str(count))
    console.print(tiers)

    top = Table(title="Most frequent cards")
    top.add_column("Card")
    top.add_column("Supplies", justify="right")
    for card_id, count in result.card_frequency.most_common(10):
        top.add_row(card_id, str(count))
    console.print(top)
    if result.attacks_without_reaction:
        console.print(f"Supplies with an attack but no reaction: {result.attacks_without_reaction}")


def run_validate() -> None:
    parser = argparse.ArgumentParser(description="KingdomForge validator")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--catalog",
        help="Path to catalog JSON file for validation",
    )
    group.add_argument(
        "--module",
        help="Python module with register(app) function to validate",
    )
    args = parser.parse_args()

    if args.catalog:
        errors = validate_catalog_file(Path(args.catalog))
        if errors:
            console.print("[bold red]Catalog errors:[/bold red]")
            for err in errors:
                console.print(f"- {err}")
            sys.exit(1)
        console.print("Catalog is valid")
        return

    app = RandomizerApp(RandomizerConfig.from_env())
    _load_module(args.module, app)
    issues = validate_app(app)
    if issues:
        console.print("[bold red]Configuration errors:[/bold red]")
        for issue in issues:
            console.print(f"- {issue}")
        sys.exit(1)
    console.print("Randomizer configuration is valid")


def render_kingdom(kingdom: Kingdom) -> Table:
    table = Table(title=f"Kingdom {kingdom.kingdom_id}")
    table.add_column("Card")
    table.add_column("Set")
    table.add_column("Cost", justify="right")
    table.add_column("Kind")
    for card in sorted(kingdom.supply, key=lambda c: (c.cost.treasure, c.name)):
        table.add_row(card.name, card.set_id, str(card.cost), ", ".join(sorted(t.value for t in card.types)))
    for addon in kingdom.addons.all_cards():
        table.add_row(addon.name, addon.set_id, str(addon.cost), addon.kind.value)
    return table


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--catalog", help="Path to catalog JSON file (defaults to KINGDOMFORGE_CATALOG)")
    parser.add_argument("--sets", help="Comma separated set ids (defaults to KINGDOMFORGE_SETS)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--require-actions", action="store_true")
    parser.add_argument("--require-buys", action="store_true")
    parser.add_argument("--require-trashing", action="store_true")
    parser.add_argument("--require-reaction", action="store_true")
    parser.add_argument("--no-attacks", action="store_true")
    parser.add_argument("--distribute-cost", action="store_true")
    parser.add_argument("--prioritize-set")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _build_app(args: argparse.Namespace) -> RandomizerApp:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = RandomizerConfig.from_env()
    if args.sets:
        config.selected_sets = tuple(s.strip() for s in args.sets.split(",") if s.strip())
    if args.seed is not None:
        config.rng_seed = args.seed
    settings = config.randomizer
    settings.require_action_provider |= args.require_actions
    settings.require_buy_provider |= args.require_buys
    settings.require_trashing |= args.require_trashing
    settings.require_reaction |= args.require_reaction
    settings.allow_attacks = settings.allow_attacks and not args.no_attacks
    settings.distribute_cost |= args.distribute_cost
    if args.prioritize_set:
        settings.prioritize_set = args.prioritize_set

    catalog_path = args.catalog or config.catalog_path
    if not catalog_path:
        console.print("[bold red]No catalog given; use --catalog or KINGDOMFORGE_CATALOG.[/bold red]")
        sys.exit(2)

    app = RandomizerApp(config)
    load_catalog_from_json(app, catalog_path)
    if not config.selected_sets:
        config.selected_sets = tuple(card_set.set_id for card_set in app.catalog.iter_sets())
    return app


def _load_module(path: str, app: RandomizerApp) -> None:
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(path)
    if hasattr(module, "register"):
        module.register(app)
    else:
        raise RuntimeError(f"Module {path} does not define register(app).")
