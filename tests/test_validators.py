from kingdomforge import RandomizerApp, RandomizerConfig, SamplingWeights
from kingdomforge.testing import SetFactory
from kingdomforge.validators import validate_app


def build_app(**config) -> RandomizerApp:
    app = RandomizerApp(RandomizerConfig(**config))
    app.sets.card_set(SetFactory().build("base", plain=12))
    return app


def test_validate_app_success():
    assert validate_app(build_app(selected_sets=("base",))) == []


def test_validate_app_detects_empty_catalog():
    app = RandomizerApp(RandomizerConfig(selected_sets=("base",)))
    issues = validate_app(app)
    assert "No card sets registered in application." in issues
    assert "Selected set 'base' is not in the catalog." in issues


def test_validate_app_detects_missing_selection():
    assert "No sets selected for randomization." in validate_app(build_app())


def test_validate_app_detects_small_pool():
    app = RandomizerApp(RandomizerConfig(selected_sets=("tiny",)))
    app.sets.card_set(SetFactory().build("tiny", plain=6))
    issues = validate_app(app)
    assert any("provide 6 supply cards" in issue for issue in issues)


def test_validate_app_detects_missing_capability():
    app = build_app(selected_sets=("base",))
    app.config.randomizer.require_trashing = True
    issues = validate_app(app)
    assert "No selected card provides required capability 'trashing'." in issues


def test_validate_app_checks_settings_and_weights():
    app = build_app(selected_sets=("base",), weights=SamplingWeights(base=0.0, reaction=-1.0))
    app.config.randomizer.prioritize_set = "seaside"
    app.config.randomizer.max_addons = -1
    issues = validate_app(app)
    assert "Prioritized set 'seaside' is not selected." in issues
    assert "Randomizer setting 'max_addons' cannot be negative." in issues
    assert "Sampling weight 'reaction' cannot be negative." in issues
    assert "Sampling weight 'base' must be positive." in issues
