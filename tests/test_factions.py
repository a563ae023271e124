"""Tests for src.scoring_engine.factions."""

import pytest

from src.scoring_engine.config import VICTORY_THRESHOLDS
from src.scoring_engine.factions import (
    FACTION_ORDER,
    Faction,
    InvalidStartingCountError,
    UnknownFactionError,
    validate_registry,
    victory_threshold_for,
)


class TestRegistry:
    def test_twenty_five_factions(self):
        assert len(FACTION_ORDER) == 25
        assert len(set(FACTION_ORDER)) == 25

    def test_order_endpoints(self):
        assert FACTION_ORDER[0] is Faction.PORTUGAL
        assert FACTION_ORDER[13] is Faction.UTE_SHOSHONE
        assert FACTION_ORDER[-1] is Faction.TOKUGAWA

    def test_starting_counts(self):
        assert Faction.PORTUGAL.starting_count == 16
        assert Faction.ENGLAND.starting_count == 14
        assert Faction.RUSSIA.starting_count == 10
        assert Faction.POLAND.starting_count == 7
        assert Faction.QING.starting_count == 5
        assert Faction.KONGO.starting_count == 4
        # 2x16 + 3x14 + 2x10 + 7 + 6x5 + 11x4
        assert sum(f.starting_count for f in FACTION_ORDER) == 175

    def test_every_starting_count_is_tabulated(self):
        for faction in FACTION_ORDER:
            assert faction.starting_count in VICTORY_THRESHOLDS, faction
        validate_registry()

    def test_victory_thresholds(self):
        assert Faction.PORTUGAL.victory_threshold == 64
        assert Faction.FRANCE.victory_threshold == 56
        assert Faction.OTTOMAN.victory_threshold == 48
        assert Faction.POLAND.victory_threshold == 42
        assert Faction.INUIT.victory_threshold == 36
        assert Faction.MALI.victory_threshold == 32

    def test_display_names_unique(self):
        names = [f.display_name for f in FACTION_ORDER]
        assert len(set(names)) == 25

    def test_display_names_match_members(self):
        assert str(Faction.AYMARA) == "aymara"
        assert str(Faction.AYUTTHAYA) == "ayutthaya"
        assert str(Faction.KONGO) == "kongo"
        assert str(Faction.UTE_SHOSHONE) == "ute-shoshone"


class TestIndex:
    def test_index_round_trip(self):
        for i, faction in enumerate(FACTION_ORDER):
            assert faction.index == i
            assert Faction.from_index(i) is faction

    @pytest.mark.parametrize("index", [-1, 25, 100])
    def test_out_of_range(self, index):
        with pytest.raises(IndexError):
            Faction.from_index(index)


class TestAliases:
    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("portugal", Faction.PORTUGAL),
            ("POR", Faction.PORTUGAL),
            ("Dutch", Faction.NETHERLANDS),
            ("eng", Faction.ENGLAND),
            ("Ottomans", Faction.OTTOMAN),
            ("poland-lithuania", Faction.POLAND),
            ("ute", Faction.UTE_SHOSHONE),
            ("Shoshone", Faction.UTE_SHOSHONE),
            ("aby", Faction.ABYSSINIA),
            ("aju", Faction.AJUURAAN),
            ("atha", Faction.ATHAPASCA),
            ("ayu", Faction.AYUTTHAYA),
            ("  toku ", Faction.TOKUGAWA),
        ],
    )
    def test_resolves(self, alias, expected):
        assert Faction.from_alias(alias) is expected

    def test_every_display_name_resolves(self):
        for faction in FACTION_ORDER:
            assert Faction.from_alias(faction.display_name.upper()) is faction

    @pytest.mark.parametrize("alias", ["", "prussia", "ute shoshone", "16"])
    def test_unknown_alias(self, alias):
        with pytest.raises(UnknownFactionError):
            Faction.from_alias(alias)

    def test_unknown_faction_is_value_error(self):
        with pytest.raises(ValueError, match="Unknown faction"):
            Faction.from_alias("atlantis")


class TestVictoryThresholdLookup:
    @pytest.mark.parametrize("start, threshold", sorted(VICTORY_THRESHOLDS.items()))
    def test_table(self, start, threshold):
        assert victory_threshold_for(start) == threshold

    @pytest.mark.parametrize("start", [0, 3, 6, 12, 64])
    def test_untabulated_count_is_fatal(self, start):
        with pytest.raises(InvalidStartingCountError, match=str(start)):
            victory_threshold_for(start)
