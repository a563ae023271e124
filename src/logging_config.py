import logging
import logging.handlers
from pathlib import Path

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = LOG_DIR,
    log_name: str = "vscc_scoring.log",
) -> None:
    """Configure root logging for the rating comparison.

    Console output follows *log_level*; the rotating log file (5MB, 3
    backups) always records DEBUG so individual scenario groupings can be
    inspected after a run. Pass ``log_dir=None`` to log to the console only.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / log_name, maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(level)

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, file=%s)",
        log_level, log_dir / log_name if log_dir is not None else None,
    )
