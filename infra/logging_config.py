# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.operational_support import TraceIdLogFilter
from infra.path import default_log_dir


def setup_logging(log_dir: Path | str | None = None, level: str | int = "INFO") -> Path:
    """
    Configure application logging.
    Logs go to the per-user data directory unless log_dir is given.
    Returns the log file path.
    """
    directory = Path(log_dir) if log_dir is not None else default_log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    log_file = directory / "engine.log"

    logger = logging.getLogger()
    logger.setLevel(level if isinstance(level, int) else str(level).upper())

    # Clear any existing handlers so repeated setup does not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # File handler (rotating)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    trace_filter = TraceIdLogFilter()
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
