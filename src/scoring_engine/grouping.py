"""Impunity grouping: find the cluster of top performers treated as tied.

Walking the ratios from best to worst, a faction joins the cluster while it
is within ``gap`` of the faction immediately above it (and, when a floor is
set, while its own ratio is at least the floor). The first ratio that fails
becomes the cluster boundary. When every ratio joins, the boundary is the
lowest ratio, so that faction is not bonus-eligible under the strict
``ratio > boundary`` comparison.
"""

import logging
from typing import Optional, Sequence

from src.scoring_engine.config import IMPUNITY_GAP
from src.scoring_engine.models import ImpunityGroup

logger = logging.getLogger(__name__)


def find_impunity_group(
    ratios: Sequence[float],
    floor: Optional[float] = None,
    gap: float = IMPUNITY_GAP,
) -> ImpunityGroup:
    """Return the top cluster of *ratios*.

    Args:
        ratios: VSCC ratios for one scenario, in any order.
        floor: Minimum ratio required to join the cluster, or ``None``
            for closeness only.
        gap: Maximum drop from the previous (higher) ratio.

    Raises:
        ValueError: if *ratios* is empty.
    """
    if not ratios:
        raise ValueError("Cannot group an empty ratio list")

    ordered = sorted(ratios, reverse=True)
    prev = ordered[0]
    size = 0
    for value in ordered:
        joins = (prev - value) <= gap and (floor is None or value >= floor)
        prev = value
        if not joins:
            break
        size += 1

    group = ImpunityGroup(size=size, boundary=prev)
    logger.debug(
        "Impunity group: size=%d boundary=%.3f (floor=%s)", group.size, group.boundary, floor,
    )
    return group
