from random import Random

from kingdomforge.app import RandomizerApp
from kingdomforge.config import RandomizerConfig
from kingdomforge.diagnostics import RandomizerSimulator
from kingdomforge.domain.cards import CardType
from kingdomforge.testing import CardFactory, SetFactory, app_fixture


def build_app() -> RandomizerApp:
    app = RandomizerApp(RandomizerConfig(selected_sets=("base",)))
    attacks = list(CardFactory(set_id="base").batch(3, types=(CardType.ACTION, CardType.ATTACK)))
    app.sets.card_set(SetFactory().build("base", plain=15, cards=attacks))
    return app


def test_simulation_counts_cards_and_tiers():
    result = RandomizerSimulator(build_app(), rng=Random(2)).simulate(runs=25)

    assert result.successes == 25
    assert result.unsatisfiable == 0
    assert sum(result.tier_frequency.values()) == 250
    assert sum(result.card_frequency.values()) == 250
    assert result.failure_rate == 0.0


def test_simulation_counts_unsatisfiable_runs():
    app = build_app()
    app.config.randomizer.require_trashing = True

    result = RandomizerSimulator(app, rng=Random(2)).simulate(runs=10)

    assert result.unsatisfiable == 10
    assert result.failure_rate == 1.0


def test_reaction_requirement_shows_in_simulation():
    app = build_app()
    app.config.randomizer.require_reaction = True

    result = RandomizerSimulator(app, rng=Random(9)).simulate(runs=20)

    assert result.successes == 20
    assert result.attacks_without_reaction == 0


def test_simulation_over_several_sets():
    app = app_fixture("base", "intrigue", rng=Random(1))

    result = RandomizerSimulator(app, rng=Random(1)).simulate(runs=5)

    assert result.successes == 5
    assert {card_id.split("_")[0] for card_id in result.card_frequency} <= {"base", "intrigue"}


def test_configured_seed_makes_simulation_repeatable():
    shared = SetFactory().build("base", plain=30)
    results = []
    for _ in range(2):
        app = RandomizerApp(RandomizerConfig(selected_sets=("base",), rng_seed=5))
        app.sets.card_set(shared)
        results.append(RandomizerSimulator(app).simulate(runs=20))

    assert results[0].card_frequency == results[1].card_frequency
