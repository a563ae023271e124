"""Evaluate scenarios under several scoring strategies side by side.

The comparator is stateless apart from its configuration: every scenario
is normalized once, scored by each strategy, and converted to rating
changes independently of every other scenario.
"""

import logging
import math
import numbers
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from src.scoring_engine.allocator import DegenerateScenarioError, allocate_ratings
from src.scoring_engine.config import DEFAULT_NORMALIZATION, ZERO_SUM_TOLERANCE
from src.scoring_engine.factions import FACTION_ORDER, Faction
from src.scoring_engine.models import BatchResult, ScenarioFailure, ScenarioResult
from src.scoring_engine.normalizer import Normalization, normalize_scenario
from src.scoring_engine.strategies import ScoringStrategy, default_strategies

logger = logging.getLogger(__name__)


class MalformedScenarioError(ValueError):
    """Raised when a scenario is not exactly 25 non-negative integer counts."""


def scenario_label(prefix: str, index: int) -> str:
    """Label the *index*-th scenario: ``A2A``, ``A2B``, ..., ``A2Z``, ``A2AA``."""
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return f"{prefix}{letters}"


def counts_from_sequence(values: Sequence) -> Dict[Faction, int]:
    """Map a positional record onto factions in registry order.

    Raises:
        MalformedScenarioError: wrong length, or a value that is not a
            non-negative integer.
    """
    if len(values) != len(FACTION_ORDER):
        raise MalformedScenarioError(
            f"Expected {len(FACTION_ORDER)} counts, got {len(values)}"
        )
    return validate_counts(dict(zip(FACTION_ORDER, values)))


def validate_counts(counts: Mapping[Faction, int]) -> Dict[Faction, int]:
    """Check that *counts* covers all 25 factions with non-negative integers.

    Returns a new dict in registry order.
    """
    missing = [f.display_name for f in FACTION_ORDER if f not in counts]
    extra = [str(k) for k in counts if not isinstance(k, Faction)]
    if missing or extra:
        raise MalformedScenarioError(
            f"Scenario must cover every faction exactly once "
            f"(missing={missing}, unexpected={extra})"
        )

    validated: Dict[Faction, int] = {}
    for faction in FACTION_ORDER:
        value = counts[faction]
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            else:
                raise MalformedScenarioError(
                    f"Count for {faction} is not an integer: {value!r}"
                )
        if value < 0:
            raise MalformedScenarioError(f"Count for {faction} is negative: {value}")
        validated[faction] = int(value)
    return validated


class ScenarioComparator:
    """Score scenarios under several strategies and report rating changes."""

    def __init__(
        self,
        strategies: Optional[Sequence[ScoringStrategy]] = None,
        normalization=DEFAULT_NORMALIZATION,
    ):
        self.strategies: Tuple[ScoringStrategy, ...] = (
            tuple(strategies) if strategies is not None else default_strategies()
        )
        if not self.strategies:
            raise ValueError("At least one scoring strategy is required")
        self.normalization = Normalization.parse(normalization)

    @property
    def strategy_names(self) -> List[str]:
        return [s.name for s in self.strategies]

    # ------------------------------------------------------------------
    # Single scenario
    # ------------------------------------------------------------------

    def evaluate(self, counts: Mapping[Faction, int]) -> Dict[Faction, Tuple[float, ...]]:
        """Return each faction's rating change under every strategy.

        Args:
            counts: Final supply-center count for all 25 factions.

        Returns:
            Dict mapping each faction (registry order) to a tuple with one
            rating change per strategy, in strategy order.

        Raises:
            MalformedScenarioError: if *counts* is incomplete or invalid.
            DegenerateScenarioError: if any strategy cannot normalize.
        """
        counts = validate_counts(counts)
        ratios_by_faction = normalize_scenario(counts, self.normalization)
        ratios = [ratios_by_faction[f] for f in FACTION_ORDER]

        columns: List[List[float]] = []
        for strategy in self.strategies:
            changes = allocate_ratings(strategy.score(ratios))
            net = math.fsum(changes)
            if abs(net) > ZERO_SUM_TOLERANCE:
                raise DegenerateScenarioError(
                    f"{strategy.name}: rating changes sum to {net}, expected 0"
                )
            columns.append(changes)

        return {
            faction: tuple(column[i] for column in columns)
            for i, faction in enumerate(FACTION_ORDER)
        }

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def evaluate_batch(
        self,
        scenarios: Iterable[Mapping[Faction, int]],
        label_prefix: str = "",
        labels: Optional[Sequence[str]] = None,
    ) -> BatchResult:
        """Evaluate scenarios in order; a failing scenario does not stop the rest.

        Args:
            scenarios: Complete ``Faction -> count`` mappings.
            label_prefix: Prefix for generated labels (``"A2"`` -> ``A2A``...).
            labels: Explicit labels, one per scenario; overrides the prefix.
        """
        batch = BatchResult()
        for i, counts in enumerate(scenarios):
            label = labels[i] if labels is not None else scenario_label(label_prefix, i)
            try:
                changes = self.evaluate(counts)
            except (MalformedScenarioError, DegenerateScenarioError) as e:
                logger.warning("Skipping scenario %s: %s", label, e)
                batch.failures.append(ScenarioFailure(label=label, reason=str(e)))
                continue
            batch.results.append(
                ScenarioResult(
                    label=label,
                    strategy_names=self.strategy_names,
                    rating_changes=changes,
                )
            )

        logger.info(
            "Evaluated %d scenarios (%d rejected) with %s",
            len(batch.results) + len(batch.failures),
            len(batch.failures),
            ", ".join(self.strategy_names),
        )
        return batch

    def to_frame(self, results: Iterable[ScenarioResult]) -> pd.DataFrame:
        """Flatten results into one row per scenario and faction.

        Columns: ``Scenario``, ``Faction``, then one column per strategy.
        """
        rows = []
        for result in results:
            for faction, deltas in result.rating_changes.items():
                row = {"Scenario": result.label, "Faction": faction.display_name}
                row.update(zip(result.strategy_names, deltas))
                rows.append(row)
        return pd.DataFrame(rows, columns=["Scenario", "Faction"] + self.strategy_names)
