"""Per-candidate score functions and requirement feasibility for supply sampling.

Requirements are existential ("at least one card providing X"), plus the
conditional reaction rule ("an attack needs a reaction"). A selection is
summarised by the set of tracked capabilities it provides, so whether a
partial selection can still be completed only depends on that set, the
number of free slots and how many pool cards carry each capability
signature. That keeps the check exact without any backtracking over cards.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Mapping

from .cards import Capability, CostTier, SupplyCard
from .options import RandomizerOptions
from ..config import SamplingWeights

Signature = frozenset[Capability]


class ScoreKind(str, Enum):
    ACTION = "action"
    BUY = "buy"
    TRASHING = "trashing"
    REACTION = "reaction"
    COST_SPREAD = "cost_spread"
    PRIORITIZED_SET = "prioritized_set"


@dataclass(frozen=True, slots=True)
class Requirements:
    """Capabilities that must be present in a complete supply."""

    required: frozenset[Capability] = frozenset()
    reaction_if_attacks: bool = False

    @classmethod
    def from_options(cls, options: RandomizerOptions) -> "Requirements":
        required: set[Capability] = set()
        if options.require_action_provider:
            required.add(Capability.ACTION_SUPPLIER)
        if options.require_buy_provider:
            required.add(Capability.BUY_SUPPLIER)
        if options.require_trashing:
            required.add(Capability.TRASHING)
        return cls(frozenset(required), options.require_reaction_if_attacks)

    @property
    def tracked(self) -> frozenset[Capability]:
        if self.reaction_if_attacks:
            return self.required | {Capability.ATTACK, Capability.REACTION}
        return self.required

    def signature(self, card: SupplyCard) -> Signature:
        return frozenset(cap for cap in self.tracked if card.provides(cap))

    def unmet(self, provided: Signature) -> frozenset[Capability]:
        missing = set(self.required - provided)
        if (
            self.reaction_if_attacks
            and Capability.ATTACK in provided
            and Capability.REACTION not in provided
        ):
            missing.add(Capability.REACTION)
        return frozenset(missing)

    def satisfied(self, provided: Signature) -> bool:
        return not self.unmet(provided)

    def can_complete(self, provided: Signature, pool: Mapping[Signature, int], slots: int) -> bool:
        """Whether ``slots`` more cards from ``pool`` can yield a satisfied supply.

        Explores the capability sets reachable by adding cards that each
        contribute something new; a reachable satisfied set works if enough
        pool cards add nothing beyond it to fill the rest of the slots.
        """
        if slots < 0:
            return False
        available = [sig for sig, count in pool.items() if count > 0]
        reached = {provided: 0}
        frontier = [provided]
        while frontier:
            next_frontier = []
            for state in frontier:
                depth = reached[state]
                if depth >= slots:
                    continue
                for sig in available:
                    if sig <= state:
                        continue
                    grown = state | sig
                    if grown not in reached:
                        reached[grown] = depth + 1
                        next_frontier.append(grown)
            frontier = next_frontier
        for state in reached:
            if not self.satisfied(state):
                continue
            fillers = sum(count for sig, count in pool.items() if sig <= state)
            if fillers >= slots:
                return True
        return False


@dataclass(slots=True)
class SamplingState:
    """Partial supply being assembled by a single sampling pass."""

    requirements: Requirements
    options: RandomizerOptions
    selected: list[SupplyCard] = field(default_factory=list)
    provided: Signature = frozenset()
    tiers: Counter = field(default_factory=Counter)

    def add(self, card: SupplyCard) -> None:
        self.selected.append(card)
        self.provided = self.provided | self.requirements.signature(card)
        self.tiers[card.cost.tier] += 1

    @property
    def unmet(self) -> frozenset[Capability]:
        return self.requirements.unmet(self.provided)


Scorer = Callable[[SupplyCard, SamplingState], float]


def _requirement_scorer(capability: Capability, weight: float) -> Scorer:
    def score(card: SupplyCard, state: SamplingState) -> float:
        if capability in state.unmet and card.provides(capability):
            return weight
        return 0.0

    return score


def _cost_spread_scorer(weight: float) -> Scorer:
    def score(card: SupplyCard, state: SamplingState) -> float:
        if not state.options.distribute_cost:
            return 0.0
        tier: CostTier = card.cost.tier
        return weight / (1 + state.tiers[tier])

    return score


def _prioritized_set_scorer(weight: float) -> Scorer:
    def score(card: SupplyCard, state: SamplingState) -> float:
        prioritized = state.options.prioritize_set
        if prioritized and card.set_id == prioritized:
            return weight
        return 0.0

    return score


def build_scorers(weights: SamplingWeights) -> dict[ScoreKind, Scorer]:
    return {
        ScoreKind.ACTION: _requirement_scorer(Capability.ACTION_SUPPLIER, weights.requirement),
        ScoreKind.BUY: _requirement_scorer(Capability.BUY_SUPPLIER, weights.requirement),
        ScoreKind.TRASHING: _requirement_scorer(Capability.TRASHING, weights.requirement),
        ScoreKind.REACTION: _requirement_scorer(Capability.REACTION, weights.reaction),
        ScoreKind.COST_SPREAD: _cost_spread_scorer(weights.cost_spread),
        ScoreKind.PRIORITIZED_SET: _prioritized_set_scorer(weights.prioritized_set),
    }


def score_candidate(
    card: SupplyCard,
    state: SamplingState,
    scorers: Mapping[ScoreKind, Scorer],
    weights: SamplingWeights,
) -> float:
    total = weights.base + sum(scorer(card, state) for scorer in scorers.values())
    if card.card_id in state.options.avoid_card_ids:
        total *= weights.avoid_factor
    return total


def signature_counts(requirements: Requirements, cards: Iterable[SupplyCard]) -> Counter:
    return Counter(requirements.signature(card) for card in cards)

