"""Interchangeable scoring formulas.

Every strategy turns the VSCC ratios of one scenario into raw scores built
from three terms:

* a performance term that grows with the faction's ratio;
* a cluster bonus split evenly among the impunity group;
* a flat participation bonus for every faction not fully eliminated.

Strategies are small frozen dataclasses with a ``score`` method, so new
variants can be added without touching the comparison driver.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

from src.scoring_engine.allocator import DegenerateScenarioError, ensure_finite, finite_sum
from src.scoring_engine.config import (
    CURRENT_CLUSTER_BONUS,
    CURRENT_IMPUNITY_FLOOR,
    PARTICIPATION_BONUS,
    PERFORMANCE_MULTIPLIER,
    PROPOSED_CLUSTER_BONUS,
    PROPOSED_EXPONENTS,
    PROPOSED_IMPUNITY_FLOOR,
    PROPOSED_PERFORMANCE_POOL,
)
from src.scoring_engine.grouping import find_impunity_group

logger = logging.getLogger(__name__)


class ScoringStrategy(Protocol):
    """Anything with a ``name`` and a ``score(ratios) -> scores`` method."""

    name: str

    def score(self, ratios: Sequence[float]) -> List[float]:
        ...


def participation_bonus(ratio: float) -> float:
    """Flat bonus for every faction that still holds a supply center."""
    return PARTICIPATION_BONUS if ratio > -1.0 else 0.0


@dataclass(frozen=True)
class CurrentScoring:
    """The scoring formula in use today.

    ``100 * max(ratio, 0)`` plus 500 split across the impunity group plus
    the participation bonus. Only factions at or past their victory
    threshold can join the impunity group.
    """

    cluster_bonus: float = CURRENT_CLUSTER_BONUS
    impunity_floor: Optional[float] = CURRENT_IMPUNITY_FLOOR
    name: str = "current"

    def score(self, ratios: Sequence[float]) -> List[float]:
        group = find_impunity_group(ratios, floor=self.impunity_floor)
        share = group.bonus_share(self.cluster_bonus)

        scores = [
            PERFORMANCE_MULTIPLIER * max(r, 0.0)
            + (share if group.is_eligible(r) else 0.0)
            + participation_bonus(r)
            for r in ratios
        ]
        ensure_finite(scores, f"{self.name} scores")
        return scores


@dataclass(frozen=True)
class ProposedScoring:
    """Power-law scoring.

    Each positive ratio is weighted as ``(100 * ratio) ** exponent`` and a
    pool of 1000 points is split in proportion to the weights. A smaller
    cluster bonus (300) is split across the impunity group, which here is
    based on closeness alone.
    """

    exponent: float
    performance_pool: float = PROPOSED_PERFORMANCE_POOL
    cluster_bonus: float = PROPOSED_CLUSTER_BONUS
    impunity_floor: Optional[float] = PROPOSED_IMPUNITY_FLOOR

    @property
    def name(self) -> str:
        return f"proposed_{self.exponent:.1f}"

    def weight(self, ratio: float) -> float:
        if ratio <= 0:
            return 0.0
        try:
            return (PERFORMANCE_MULTIPLIER * ratio) ** self.exponent
        except OverflowError as e:
            raise DegenerateScenarioError(
                f"{self.name}: performance weight overflows for ratio {ratio}"
            ) from e

    def score(self, ratios: Sequence[float]) -> List[float]:
        weights = [self.weight(r) for r in ratios]
        total_weight = finite_sum(weights, f"{self.name} weights")
        if total_weight <= 0:
            raise DegenerateScenarioError(
                f"{self.name}: no faction has positive performance (total weight {total_weight})"
            )

        group = find_impunity_group(ratios, floor=self.impunity_floor)
        share = group.bonus_share(self.cluster_bonus)

        scores = [
            self.performance_pool * w / total_weight
            + (share if group.is_eligible(r) else 0.0)
            + participation_bonus(r)
            for r, w in zip(ratios, weights)
        ]
        ensure_finite(scores, f"{self.name} scores")
        return scores


def default_strategies() -> Tuple[ScoringStrategy, ...]:
    """Current scoring followed by each proposed exponent."""
    strategies: Tuple[ScoringStrategy, ...] = (CurrentScoring(),) + tuple(
        ProposedScoring(exponent=p) for p in PROPOSED_EXPONENTS
    )
    logger.debug("Default strategies: %s", [s.name for s in strategies])
    return strategies
