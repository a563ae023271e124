"""Shared fixtures for the scoring test suite."""

import pytest

from src.scoring_engine.comparison import ScenarioComparator
from src.scoring_engine.factions import FACTION_ORDER, Faction
from src.scoring_engine.strategies import CurrentScoring, ProposedScoring


# ------------------------------------------------------------------
# Strategies and comparators – stateless, shared per module
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def current():
    return CurrentScoring()


@pytest.fixture(scope="module")
def proposed_15():
    return ProposedScoring(exponent=1.5)


@pytest.fixture(scope="module")
def proposed_20():
    return ProposedScoring(exponent=2.0)


@pytest.fixture(scope="module")
def all_strategies(current, proposed_15, proposed_20):
    return (current, proposed_15, proposed_20)


@pytest.fixture(scope="module")
def comparator():
    """Comparator with the default strategies and normalization."""
    return ScenarioComparator()


# ------------------------------------------------------------------
# Scenario data
# ------------------------------------------------------------------

@pytest.fixture
def portugal_solo_counts():
    """Portugal reaches exactly its victory threshold, everyone else is wiped out."""
    counts = {f: 0 for f in FACTION_ORDER}
    counts[Faction.PORTUGAL] = 64
    return counts


@pytest.fixture
def starting_counts():
    """Every faction finishes exactly where it started."""
    return {f: f.starting_count for f in FACTION_ORDER}
