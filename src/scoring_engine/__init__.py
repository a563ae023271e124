from src.scoring_engine.allocator import DegenerateScenarioError, allocate_ratings
from src.scoring_engine.comparison import MalformedScenarioError, ScenarioComparator
from src.scoring_engine.factions import (
    FACTION_ORDER,
    Faction,
    InvalidStartingCountError,
    UnknownFactionError,
)
from src.scoring_engine.normalizer import Normalization, normalize
from src.scoring_engine.strategies import CurrentScoring, ProposedScoring

__all__ = [
    "CurrentScoring",
    "DegenerateScenarioError",
    "FACTION_ORDER",
    "Faction",
    "InvalidStartingCountError",
    "MalformedScenarioError",
    "Normalization",
    "ProposedScoring",
    "ScenarioComparator",
    "UnknownFactionError",
    "allocate_ratings",
    "normalize",
]
