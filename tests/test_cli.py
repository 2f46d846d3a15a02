import sys
from pathlib import Path

import pytest

from kingdomforge import cli
from kingdomforge.domain.kingdom import AddonBundle, Kingdom, Supply
from kingdomforge.testing import SetFactory

EXAMPLE_CATALOG = Path(__file__).resolve().parents[1] / "examples" / "catalog.json"


def test_render_kingdom_lists_supply_and_addons():
    card_set = SetFactory().build("base", plain=10, events=2)
    kingdom = Kingdom.create(Supply(tuple(card_set.supply_cards)), AddonBundle.from_cards(card_set.events))

    table = cli.render_kingdom(kingdom)

    assert table.row_count == 12


def test_run_validate_accepts_example_catalog(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["kingdomforge-validate", "--catalog", str(EXAMPLE_CATALOG)])

    cli.run_validate()

    assert "Catalog is valid" in capsys.readouterr().out


def test_run_randomize_prints_kingdoms(monkeypatch, capsys):
    monkeypatch.delenv("KINGDOMFORGE_SETS", raising=False)
    monkeypatch.setattr(
        sys,
        "argv",
        ["kingdomforge-randomize", "--catalog", str(EXAMPLE_CATALOG), "--sets", "baseset2", "--seed", "3"],
    )

    cli.run_randomize()

    assert "Kingdom" in capsys.readouterr().out


def test_run_randomize_exits_on_unsatisfiable(monkeypatch):
    def load_plain_set(app, path):
        app.sets.card_set(SetFactory().build("plain", plain=12))

    monkeypatch.setattr(cli, "load_catalog_from_json", load_plain_set)
    monkeypatch.setattr(
        sys,
        "argv",
        ["kingdomforge-randomize", "--catalog", "unused.json", "--sets", "plain", "--require-trashing"],
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.run_randomize()
    assert excinfo.value.code == 1
