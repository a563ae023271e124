"""Data models for the scoring engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from src.scoring_engine.factions import Faction


@dataclass(frozen=True)
class ImpunityGroup:
    """Top cluster of near-tied performers in one scenario."""

    size: int  # Factions in the cluster (0 when no one reaches the floor)
    boundary: float  # First ratio that broke the chain; bonus requires ratio > boundary

    def is_eligible(self, ratio: float) -> bool:
        return self.size > 0 and ratio > self.boundary

    def bonus_share(self, bonus: float) -> float:
        """Per-faction share of a cluster bonus split evenly across the group."""
        return bonus / self.size if self.size else 0.0


@dataclass
class ScenarioResult:
    """Rating changes for one scenario, one value per strategy per faction."""

    label: str
    strategy_names: List[str]
    rating_changes: Dict[Faction, Tuple[float, ...]] = field(default_factory=dict)

    def for_strategy(self, name: str) -> Dict[Faction, float]:
        """Rating changes of every faction under strategy *name*."""
        column = self.strategy_names.index(name)
        return {faction: deltas[column] for faction, deltas in self.rating_changes.items()}


@dataclass
class ScenarioFailure:
    """A scenario rejected during evaluation."""

    label: str
    reason: str


@dataclass
class BatchResult:
    """Outcome of evaluating a sequence of scenarios."""

    results: List[ScenarioResult] = field(default_factory=list)
    failures: List[ScenarioFailure] = field(default_factory=list)
