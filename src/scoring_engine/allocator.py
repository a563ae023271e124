"""Convert raw scores into zero-sum rating changes.

Each faction's share of the total score is applied to a fixed rating pool,
then the break-even share (pool / faction count) is subtracted. Because the
baseline is exactly the average payout, the changes always sum to zero.
"""

import logging
import math
from typing import List, Sequence

from src.scoring_engine.config import RATING_BASELINE, RATING_POOL_PER_GAME

logger = logging.getLogger(__name__)


class DegenerateScenarioError(Exception):
    """Raised when a scenario's scores cannot be normalized.

    Typically every faction is eliminated or no faction made progress, so a
    normalizing total is zero and the result would be NaN or infinite.
    """


def ensure_finite(values: Sequence[float], what: str) -> None:
    """Raise :class:`DegenerateScenarioError` if any value is NaN or infinite."""
    bad = [i for i, v in enumerate(values) if not math.isfinite(v)]
    if bad:
        raise DegenerateScenarioError(f"Non-finite {what} at positions {bad}")


def finite_sum(values: Sequence[float], what: str) -> float:
    """Sum *values* with :func:`math.fsum`, rejecting non-finite input or overflow."""
    ensure_finite(values, what)
    try:
        total = math.fsum(values)
    except OverflowError as e:
        raise DegenerateScenarioError(f"Sum of {what} overflows a float") from e
    return total


def scores_to_proportions(scores: Sequence[float]) -> List[float]:
    """Return each score as a fraction of the scenario total."""
    total = finite_sum(scores, "scores")
    if total <= 0:
        raise DegenerateScenarioError(
            f"Score total is {total}; every faction appears to be eliminated"
        )
    return [s / total for s in scores]


def allocate_ratings(
    scores: Sequence[float],
    pool: float = RATING_POOL_PER_GAME,
    baseline: float = RATING_BASELINE,
) -> List[float]:
    """Return the net rating change for each score.

    Args:
        scores: Raw scores for one scenario under one strategy.
        pool: Rating points redistributed per game.
        baseline: Points each faction stakes (pool / faction count).

    Raises:
        DegenerateScenarioError: if the scores do not sum to a positive,
            finite total.
    """
    changes = [p * pool - baseline for p in scores_to_proportions(scores)]
    ensure_finite(changes, "rating changes")
    logger.debug(
        "Allocated ratings: best=%+.1f worst=%+.1f net=%.6f",
        max(changes), min(changes), math.fsum(changes),
    )
    return changes
