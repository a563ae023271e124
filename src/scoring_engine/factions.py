"""Faction registry for the 25-player map.

Enumeration order is load-bearing: a scenario record lists supply-center
counts in exactly this order, so ``Faction.from_index(i)`` must stay stable.
"""

from enum import Enum
from typing import Dict, Tuple

from src.scoring_engine.config import VICTORY_THRESHOLDS


class UnknownFactionError(ValueError):
    """Raised when an alias does not resolve to any faction."""


class InvalidStartingCountError(Exception):
    """Raised when a starting count has no victory threshold.

    The threshold table covers every permitted starting count, so this
    always indicates a defect in the registry data rather than bad input.
    """


def victory_threshold_for(starting_count: int) -> int:
    """Return the supply centers needed for a victory from *starting_count*.

    Raises:
        InvalidStartingCountError: if *starting_count* is not tabulated.
    """
    try:
        return VICTORY_THRESHOLDS[starting_count]
    except KeyError:
        raise InvalidStartingCountError(
            f"No victory threshold for starting count {starting_count!r}. "
            f"Expected one of {sorted(VICTORY_THRESHOLDS)}"
        ) from None


class Faction(Enum):
    """The 25 playable factions, in scenario column order.

    Each member carries ``(display_name, starting_count, extra_aliases)``.
    """

    PORTUGAL = ("portugal", 16, ("por",))
    SPAIN = ("spain", 16, ())
    NETHERLANDS = ("netherlands", 14, ("dutch",))
    ENGLAND = ("england", 14, ("eng",))
    FRANCE = ("france", 14, ())
    OTTOMAN = ("ottoman", 10, ("ottomans",))
    RUSSIA = ("russia", 10, ())
    POLAND = ("poland", 7, ("poland-lithuania",))
    INUIT = ("inuit", 5, ())
    MING = ("ming", 5, ())
    MUGHAL = ("mughal", 5, ())
    QING = ("qing", 5, ())
    SAFAVID = ("safavid", 5, ())
    UTE_SHOSHONE = ("ute-shoshone", 5, ("ute", "shoshone"))
    ABYSSINIA = ("abyssinia", 4, ("aby",))
    AJUURAAN = ("ajuuraan", 4, ("aju",))
    ATHAPASCA = ("athapasca", 4, ("atha",))
    AUSTRIA = ("austria", 4, ())
    AYMARA = ("aymara", 4, ())
    AYUTTHAYA = ("ayutthaya", 4, ("ayu",))
    KONGO = ("kongo", 4, ())
    MALI = ("mali", 4, ())
    MAPUCHE = ("mapuche", 4, ())
    SWEDEN = ("sweden", 4, ())
    TOKUGAWA = ("tokugawa", 4, ("toku",))

    def __init__(self, display_name: str, starting_count: int, extra_aliases: Tuple[str, ...]):
        self.display_name = display_name
        self.starting_count = starting_count
        self.aliases = frozenset((display_name,) + extra_aliases)

    def __str__(self) -> str:
        return self.display_name

    @property
    def victory_threshold(self) -> int:
        return victory_threshold_for(self.starting_count)

    @property
    def index(self) -> int:
        """Column position of this faction in a scenario record."""
        return _INDEX_BY_FACTION[self]

    @classmethod
    def from_index(cls, index: int) -> "Faction":
        if not 0 <= index < len(FACTION_ORDER):
            raise IndexError(f"Faction index out of range: {index}")
        return FACTION_ORDER[index]

    @classmethod
    def from_alias(cls, text: str) -> "Faction":
        """Resolve a case-insensitive alias such as ``"Dutch"`` or ``"toku"``.

        Raises:
            UnknownFactionError: if *text* matches no faction.
        """
        key = str(text).strip().lower()
        try:
            return _FACTION_BY_ALIAS[key]
        except KeyError:
            raise UnknownFactionError(f"Unknown faction: {text!r}") from None


FACTION_ORDER: Tuple[Faction, ...] = tuple(Faction)

_INDEX_BY_FACTION: Dict[Faction, int] = {f: i for i, f in enumerate(FACTION_ORDER)}

_FACTION_BY_ALIAS: Dict[str, Faction] = {
    alias: faction for faction in FACTION_ORDER for alias in faction.aliases
}


def validate_registry() -> None:
    """Check that every faction's starting count has a victory threshold.

    Raises:
        InvalidStartingCountError: on the first faction that fails.
    """
    for faction in FACTION_ORDER:
        victory_threshold_for(faction.starting_count)


validate_registry()
