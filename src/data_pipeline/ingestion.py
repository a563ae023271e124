"""Scenario file ingestion.

A scenario file holds one recorded game per line: 25 supply-center counts,
tab- or comma-separated, in faction registry order. Handles:
- Blank lines (skipped, do not consume a scenario label)
- An optional header line of faction aliases giving a custom column order
- Malformed records (rejected individually, the rest still load)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import SCENARIO_DELIMITERS
from src.scoring_engine.comparison import MalformedScenarioError, validate_counts
from src.scoring_engine.factions import FACTION_ORDER, Faction, UnknownFactionError

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = r"\+?\d+"


class IngestionError(Exception):
    """Raised when a scenario file cannot be read at all."""


@dataclass
class ScenarioRecord:
    """One parsed scenario line."""

    position: int  # 0-based scenario index among non-blank data lines
    line_number: int  # 1-based line in the source file
    counts: dict[Faction, int]


@dataclass
class RejectedRecord:
    """A scenario line that failed to parse."""

    position: int
    line_number: int
    reason: str


@dataclass
class IngestedScenarios:
    records: list[ScenarioRecord] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)
    column_order: tuple[Faction, ...] = FACTION_ORDER

    def to_frame(self) -> pd.DataFrame:
        """Accepted scenarios as a DataFrame (one row each, one column per faction)."""
        return pd.DataFrame(
            [[r.counts[f] for f in FACTION_ORDER] for r in self.records],
            index=[r.position for r in self.records],
            columns=[f.display_name for f in FACTION_ORDER],
        )


def detect_delimiter(line: str) -> str:
    """Return the first known delimiter present in *line* (tab by default)."""
    for delimiter in SCENARIO_DELIMITERS:
        if delimiter in line:
            return delimiter
    return SCENARIO_DELIMITERS[0]


def tokenize(records: pd.Series, delimiter: str) -> pd.DataFrame:
    """Split raw records into a frame of stripped string tokens.

    One row per record, one column per field. Short rows are padded with
    NaN, so ``row.dropna()`` recovers a record's own fields.
    """
    tokens = records.str.strip().str.split(delimiter, expand=True)
    return tokens.apply(lambda col: col.str.strip())


def split_record(line: str, delimiter: str) -> pd.Series:
    """Split a single record into stripped string tokens."""
    return tokenize(pd.Series([line], dtype="object"), delimiter).iloc[0].dropna()


def parse_counts(tokens: pd.Series) -> list[int]:
    """Parse *tokens* as non-negative integers.

    Raises:
        MalformedScenarioError: wrong field count or a non-integer field.
    """
    if len(tokens) != len(FACTION_ORDER):
        raise MalformedScenarioError(
            f"Expected {len(FACTION_ORDER)} fields, got {len(tokens)}"
        )

    valid = tokens.str.fullmatch(_INTEGER_PATTERN).fillna(False).astype(bool)
    if not valid.all():
        bad = tokens[~valid].tolist()
        raise MalformedScenarioError(f"Non-integer or negative fields: {bad}")

    return [int(v) for v in tokens]


def parse_header(tokens: pd.Series) -> tuple[Faction, ...]:
    """Resolve a header line of faction aliases to a column order.

    Raises:
        UnknownFactionError: if an alias is not recognized.
        IngestionError: if the header does not name all 25 factions once.
    """
    order = tuple(Faction.from_alias(t) for t in tokens)
    if len(order) != len(FACTION_ORDER) or set(order) != set(FACTION_ORDER):
        missing = [f.display_name for f in FACTION_ORDER if f not in order]
        duplicated = sorted({f.display_name for f in order if order.count(f) > 1})
        raise IngestionError(
            f"Header must name every faction exactly once "
            f"(missing={missing}, duplicated={duplicated})"
        )
    return order


def is_header(tokens: pd.Series) -> bool:
    """True when every token is a recognized faction alias."""
    if tokens.empty:
        return False
    try:
        for token in tokens:
            Faction.from_alias(token)
    except UnknownFactionError:
        return False
    return True


class ScenarioIngester:
    """Reads scenario files into complete ``Faction -> count`` mappings."""

    def __init__(self, filepath: Path, delimiter: str | None = None):
        self.filepath = Path(filepath)
        self.delimiter = delimiter

    def read_lines(self) -> list[str]:
        if not self.filepath.exists():
            raise FileNotFoundError(f"Scenario file not found: {self.filepath}")
        try:
            return self.filepath.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise IngestionError(f"Failed to read {self.filepath}: {e}") from e

    def _detect_delimiter(self, lines: list[str]) -> str:
        """Use the first line that contains any known delimiter."""
        for line in lines:
            if any(d in line for d in SCENARIO_DELIMITERS):
                return detect_delimiter(line)
        return SCENARIO_DELIMITERS[0]

    def read_all(self) -> IngestedScenarios:
        """Parse every scenario in the file.

        Malformed records, including an unrecognizable first line, are
        collected in ``rejected`` rather than raised, so a single bad line
        does not discard the rest of the file.

        Raises:
            FileNotFoundError: if the file does not exist.
            IngestionError: if the file is unreadable, or its header names
                known factions but not all 25 exactly once.
        """
        lines = self.read_lines()
        logger.info("Reading scenarios: %s", self.filepath.name)

        records = pd.Series(
            {n: line for n, line in enumerate(lines, start=1) if line.strip()},
            dtype="object",
        )
        result = IngestedScenarios()
        if records.empty:
            logger.warning("No scenarios found in %s", self.filepath.name)
            return result

        delimiter = self.delimiter or self._detect_delimiter(records.tolist())
        tokens = tokenize(records, delimiter)

        first = tokens.iloc[0].dropna()
        if is_header(first):
            result.column_order = parse_header(first)
            logger.info("Using header column order from line %d", tokens.index[0])
            tokens = tokens.iloc[1:]

        for position, (line_number, row) in enumerate(tokens.iterrows()):
            try:
                values = parse_counts(row.dropna())
                counts = validate_counts(dict(zip(result.column_order, values)))
            except MalformedScenarioError as e:
                logger.warning("Rejected line %d: %s", line_number, e)
                result.rejected.append(
                    RejectedRecord(position=position, line_number=line_number, reason=str(e))
                )
                continue
            result.records.append(
                ScenarioRecord(position=position, line_number=line_number, counts=counts)
            )

        logger.info(
            "Loaded %d scenarios (%d rejected)", len(result.records), len(result.rejected)
        )
        return result
