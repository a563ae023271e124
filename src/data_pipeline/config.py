from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"

# Default scenario file (one game per line, 25 counts in faction order)
DEFAULT_SCENARIO_FILE = RAW_DATA_DIR / "a2.txt"

# Field separators accepted in scenario files, in detection order
SCENARIO_DELIMITERS = ("\t", ",")

# Console table layout
FACTION_COLUMN_WIDTH = 16
