from random import Random

import pytest

from kingdomforge.config import SamplingWeights
from kingdomforge.domain.assembly import KingdomAssembler
from kingdomforge.domain.cards import CardCatalog, CardType
from kingdomforge.domain.kingdom import AddonBundle, Kingdom, Supply
from kingdomforge.domain.options import RandomizerOptionsBuilder
from kingdomforge.domain.sampler import SamplingEngine
from kingdomforge.domain.selection import Selection
from kingdomforge.testing import CardFactory, SetFactory


@pytest.fixture()
def base_set():
    return SetFactory().build("base", plain=20, events=3)


@pytest.fixture()
def assembler(base_set):
    catalog = CardCatalog()
    catalog.register_set(base_set)
    engine = SamplingEngine(rng=Random(17), weights=SamplingWeights(avoid_factor=0.0))
    return KingdomAssembler(catalog, engine)


@pytest.fixture()
def current(base_set):
    return Kingdom.create(
        Supply(tuple(base_set.supply_cards[:10])),
        AddonBundle.from_cards(base_set.events[:2]),
        kingdom_id=1234,
        metadata={"source": "test"},
    )


@pytest.fixture()
def options():
    return RandomizerOptionsBuilder().set_set_ids(["base"]).build()


def lock(kingdom: Kingdom, *card_ids: str) -> Selection:
    selection = Selection()
    for card_id in card_ids:
        selection = selection.with_added(card_id, kingdom.find(card_id))
    return selection


def test_full_kingdom(assembler, options):
    kingdom = assembler.build_full_kingdom(options)
    assert isinstance(kingdom, Kingdom)
    assert kingdom.supply.is_complete


def test_everything_locked_keeps_the_kingdom(assembler, current, options):
    outcome = assembler.build_partial_kingdom(current, lock(current, *current.card_ids()), options)

    assert outcome.ok
    assert outcome.kingdom is current
    assert not outcome.supply_resampled
    assert not outcome.addons_resampled


def test_nothing_locked_draws_a_fresh_kingdom(assembler, current, options):
    outcome = assembler.build_partial_kingdom(current, Selection(), options)

    assert outcome.ok
    assert outcome.kingdom.supply.is_complete
    assert outcome.supply_resampled
    assert outcome.addons_resampled
    assert outcome.kingdom.kingdom_id == current.kingdom_id


def test_locked_supply_cards_survive_and_replaced_cards_change(assembler, current, options):
    locked = current.supply.ids()[:3]

    outcome = assembler.build_partial_kingdom(current, lock(current, *locked), options)

    new_ids = set(outcome.kingdom.supply.ids())
    replaced = set(current.supply.ids()) - set(locked)
    assert outcome.ok
    assert outcome.kingdom.supply.is_complete
    assert set(locked) <= new_ids
    assert not replaced & new_ids
    assert outcome.kingdom.kingdom_id == 1234
    assert outcome.kingdom.metadata["source"] == "test"


def test_locked_addons_are_kept(assembler, current, options):
    kept = current.events[0].card_id
    supply_id = current.supply.ids()[0]

    outcome = assembler.build_partial_kingdom(current, lock(current, kept, supply_id), options)

    assert outcome.addons_resampled
    assert kept in outcome.kingdom.addons.ids()
    assert len(outcome.kingdom.addons) == 2


def test_unsatisfiable_partial_returns_prior_kingdom(assembler, current, options):
    demanding = options.evolve(require_trashing=True)

    outcome = assembler.build_partial_kingdom(current, lock(current, current.supply.ids()[0]), demanding)

    assert not outcome.ok
    assert outcome.kingdom is current
    assert outcome.unsatisfiable.reason


def test_complete_kingdom_fills_missing_slots(assembler, base_set, options):
    partial = Kingdom.create(
        Supply(tuple(base_set.supply_cards[:4])),
        AddonBundle.from_cards(base_set.events[:1]),
        metadata={"loaded": True},
    )

    completed = assembler.complete_kingdom(partial, options)

    assert completed.supply.is_complete
    assert set(partial.supply.ids()) <= set(completed.supply.ids())
    assert completed.addons.ids() == partial.addons.ids()
    assert completed.metadata["loaded"] is True


def test_complete_kingdom_keeps_full_supplies(assembler, current, options):
    assert assembler.complete_kingdom(current, options) is current


def test_locked_card_survives_a_later_type_exclusion():
    factory = CardFactory(set_id="base")
    militia = factory.build(types=(CardType.ACTION, CardType.ATTACK))
    spy = factory.build(types=(CardType.ACTION, CardType.ATTACK))
    base_set = SetFactory().build("base", plain=20, cards=[militia, spy])
    catalog = CardCatalog()
    catalog.register_set(base_set)
    assembler = KingdomAssembler(catalog, SamplingEngine(rng=Random(23)))
    current = Kingdom.create(Supply((militia, spy, *base_set.supply_cards[2:10])))
    options = (
        RandomizerOptionsBuilder().set_set_ids(["base"]).set_exclude_types([CardType.ATTACK]).build()
    )

    outcome = assembler.build_partial_kingdom(current, lock(current, militia.card_id), options)

    assert outcome.ok
    assert militia.card_id in outcome.kingdom.supply.ids()
    assert spy.card_id not in outcome.kingdom.supply.ids()
