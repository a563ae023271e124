# Rating pool redistributed per game (25 factions x 105)
RATING_POOL_PER_GAME = 2625.0
FACTION_COUNT = 25
RATING_BASELINE = RATING_POOL_PER_GAME / FACTION_COUNT  # 105.0, break-even share

# Starting supply centers -> supply centers needed for a victory
VICTORY_THRESHOLDS = {
    4: 32,
    5: 36,
    7: 42,
    10: 48,
    14: 56,
    16: 64,
}

# VSCC normalization for factions at or above their starting count.
# "distance_to_victory": (final - start) / (threshold - start)
# "victory_share":       (final - start) / threshold
DEFAULT_NORMALIZATION = "distance_to_victory"

# Impunity grouping
IMPUNITY_GAP = 0.25  # max drop between consecutive top performers
CURRENT_IMPUNITY_FLOOR = 1.0  # Current scoring only clusters factions at/over VSCC
PROPOSED_IMPUNITY_FLOOR = None

# Score components
PERFORMANCE_MULTIPLIER = 100.0
PARTICIPATION_BONUS = 15.0  # every faction not fully eliminated
CURRENT_CLUSTER_BONUS = 500.0
PROPOSED_CLUSTER_BONUS = 300.0
PROPOSED_PERFORMANCE_POOL = 1000.0

# Exponents evaluated for the proposed power-law scoring
PROPOSED_EXPONENTS = (1.5, 2.0)

# Tolerance used when checking that rating changes sum to zero
ZERO_SUM_TOLERANCE = 1e-3
