"""VSCC (victory supply-center completion) normalization.

Turns a faction's final supply-center count into a signed performance
ratio:

* below the starting count the ratio is the negated fractional shortfall,
  from -1 (eliminated) up towards 0;
* at or above the starting count it is the progress towards the victory
  threshold, 0 at the start and 1 at the threshold (it may exceed 1).
"""

import logging
from enum import Enum
from typing import Dict, Mapping

from src.scoring_engine.allocator import DegenerateScenarioError
from src.scoring_engine.factions import Faction

logger = logging.getLogger(__name__)


class Normalization(Enum):
    """Divisor used for factions at or above their starting count."""

    DISTANCE_TO_VICTORY = "distance_to_victory"  # threshold - start
    VICTORY_SHARE = "victory_share"  # threshold

    @classmethod
    def parse(cls, value) -> "Normalization":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid normalization: {value!r}. "
                f"Must be one of {[n.value for n in cls]}."
            ) from None


def normalize(
    faction: Faction,
    final_count: int,
    normalization: Normalization = Normalization.DISTANCE_TO_VICTORY,
) -> float:
    """Return the VSCC ratio for *faction* finishing with *final_count* centers."""
    if final_count < 0:
        raise ValueError(
            f"Supply-center count for {faction} must be non-negative, got {final_count}"
        )

    start = faction.starting_count
    if final_count < start:
        return -(1.0 - final_count / start)

    threshold = faction.victory_threshold
    divisor = threshold if normalization is Normalization.VICTORY_SHARE else threshold - start
    try:
        return (final_count - start) / divisor
    except OverflowError as e:
        raise DegenerateScenarioError(
            f"Supply-center count for {faction} is too large to normalize: {final_count}"
        ) from e


def normalize_scenario(
    counts: Mapping[Faction, int],
    normalization: Normalization = Normalization.DISTANCE_TO_VICTORY,
) -> Dict[Faction, float]:
    """Normalize every faction's count in one scenario."""
    ratios = {faction: normalize(faction, count, normalization) for faction, count in counts.items()}
    logger.debug(
        "Normalized %d factions (%s): max=%.3f, min=%.3f",
        len(ratios), normalization.value,
        max(ratios.values(), default=0.0), min(ratios.values(), default=0.0),
    )
    return ratios
