# src/task_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ManagerChatterFilter(logging.Filter):
    """Keep per-operation DEBUG lines from task_tracker.tasks out of the REPL."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("task_tracker.tasks."):
            return record.levelno >= logging.INFO
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/task_tracker",
    console_level: int = logging.INFO,
) -> Path:
    """
    Log to stderr (console_level, manager chatter filtered) and to
    <log_dir>/task_tracker.log (everything). Returns the log file path.
    """
    log_file = Path(log_dir) / "task_tracker.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ManagerChatterFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    for handler in (console, file_handler):
        handler.setFormatter(formatter)

    # force=True drops handlers from an earlier call.
    logging.basicConfig(level=logging.DEBUG, handlers=[console, file_handler], force=True)
    return log_file
