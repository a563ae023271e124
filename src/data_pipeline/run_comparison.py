"""Compare current and proposed rating formulas over recorded scenarios.

Usage:
    python -m src.data_pipeline.run_comparison [scenario_file] [normalization]

Examples:
    python -m src.data_pipeline.run_comparison
    python -m src.data_pipeline.run_comparison data/raw/a2.txt
    python -m src.data_pipeline.run_comparison data/raw/a2.txt victory_share
"""

import logging
import sys
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import DEFAULT_SCENARIO_FILE, FACTION_COLUMN_WIDTH
from src.data_pipeline.ingestion import ScenarioIngester
from src.logging_config import setup_logging
from src.scoring_engine.comparison import ScenarioComparator, scenario_label
from src.scoring_engine.config import DEFAULT_NORMALIZATION
from src.scoring_engine.models import BatchResult, ScenarioFailure

logger = logging.getLogger(__name__)


def format_table(frame: pd.DataFrame, strategy_names: list[str]) -> str:
    """Render a comparison frame as one block per scenario.

    Each block is a ``<label>:`` heading followed by one line per faction:
    the faction name padded to a fixed width, then each strategy's rating
    change rounded to a whole number, tab-separated.
    """
    lines: list[str] = []
    for label, block in frame.groupby("Scenario", sort=False):
        lines.append("")
        lines.append(f"{label}:")
        for _, row in block.iterrows():
            values = "\t".join(f"{row[name]:.0f}" for name in strategy_names)
            lines.append(f"{row['Faction']:<{FACTION_COLUMN_WIDTH}}{values}")
    return "\n".join(lines)


def run_comparison(
    scenario_file: Path | None = None,
    normalization: str = DEFAULT_NORMALIZATION,
    label_prefix: str | None = None,
) -> tuple[pd.DataFrame, BatchResult]:
    """Load scenarios and evaluate every scoring strategy on each.

    Args:
        scenario_file: Scenario text file. Defaults to ``data/raw/a2.txt``.
        normalization: ``"distance_to_victory"`` or ``"victory_share"``.
        label_prefix: Scenario label prefix. Defaults to the upper-cased
            file stem (``a2.txt`` -> ``A2A``, ``A2B``, ...).

    Returns:
        ``(frame, batch)``: the comparison table and the raw batch result,
        whose ``failures`` include records rejected while loading.

    Raises:
        FileNotFoundError: If the scenario file doesn't exist.
    """
    if scenario_file is None:
        scenario_file = DEFAULT_SCENARIO_FILE
    scenario_file = Path(scenario_file)
    if label_prefix is None:
        label_prefix = scenario_file.stem.upper()

    logger.info(
        "Starting comparison for %s (normalization: %s)", scenario_file, normalization
    )

    # 1. Ingest
    logger.info("Step 1/3: Reading scenarios...")
    ingested = ScenarioIngester(scenario_file).read_all()

    # 2. Score
    logger.info("Step 2/3: Scoring %d scenarios...", len(ingested.records))
    comparator = ScenarioComparator(normalization=normalization)
    batch = comparator.evaluate_batch(
        [r.counts for r in ingested.records],
        labels=[scenario_label(label_prefix, r.position) for r in ingested.records],
    )
    batch.failures[:0] = [
        ScenarioFailure(
            label=scenario_label(label_prefix, r.position),
            reason=f"line {r.line_number}: {r.reason}",
        )
        for r in ingested.rejected
    ]

    # 3. Tabulate
    logger.info("Step 3/3: Building comparison table...")
    frame = comparator.to_frame(batch.results)

    logger.info("Comparison complete: %d scenarios scored", len(batch.results))
    if batch.failures:
        logger.warning(
            "  %d scenarios rejected: %s",
            len(batch.failures),
            ", ".join(f.label for f in batch.failures),
        )
    return frame, batch


if __name__ == "__main__":
    setup_logging()

    scenario_file = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    normalization = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_NORMALIZATION

    try:
        frame, batch = run_comparison(scenario_file, normalization)
    except Exception:
        logger.exception("Comparison failed")
        sys.exit(1)

    print(format_table(frame, [c for c in frame.columns if c not in ("Scenario", "Faction")]))
    for failure in batch.failures:
        print(f"\n{failure.label}: rejected ({failure.reason})")
