"""
Review Analysis Logging
=======================

Log output for the CLI and ingestion workers. Records emitted by the
analysis pipeline carry review context as `extra` fields:

    operation  - analyzer that failed soft (set by @fail_soft)
    stage      - pipeline stage, e.g. "enrich" or "metrics"
    review_id  - scraper review id of the record being processed
    count      - number of records a summary line covers

Both formats render that context: JSON lines as top-level keys, the
human format as a trailing [key=value ...] block.

Usage:
    from src.reviews.config import load_config
    from src.reviews.logging_config import setup_logging

    setup_logging(load_config())
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Dict

from .config import AnalysisConfig

REVIEW_CONTEXT_FIELDS = ("operation", "stage", "review_id", "count")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUPS = 5


def review_context(record: logging.LogRecord) -> Dict:
    """The review context fields set on `record`, in display order."""
    context = {}
    for key in REVIEW_CONTEXT_FIELDS:
        val = getattr(record, key, None)
        if val is not None:
            context[key] = val
    return context


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON lines.

    Output format:
        {"ts": "2025-...", "level": "WARNING", "logger": "src.reviews.review_enrichment",
         "msg": "...", "stage": "enrich", "review_id": "R1"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        log_entry.update(review_context(record))
        return json.dumps(log_entry, default=str)


class ReviewContextFormatter(logging.Formatter):
    """Human-readable lines with the review context appended."""

    def __init__(self):
        super().__init__(
            "%(asctime)s [%(levelname)-8s] %(name)-30s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = review_context(record)
        if not context:
            return line

        # Keep the context on the message line, ahead of any traceback
        head, sep, tail = line.partition("\n")
        suffix = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{head} [{suffix}]{sep}{tail}"


def setup_logging(config: AnalysisConfig, verbose: bool = False):
    """
    Configure root logging from an AnalysisConfig.

    Console output goes to stderr so CLI JSON on stdout stays parseable.
    LOG_FILE adds a rotating file handler with the same format.

    Args:
        config: log_level / log_json / log_file source
        verbose: force DEBUG regardless of config.log_level
    """
    level = "DEBUG" if verbose else config.log_level

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    formatter = JSONFormatter() if config.log_json else ReviewContextFormatter()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if config.log_file:
        os.makedirs(os.path.dirname(config.log_file) or ".", exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # scikit-learn chatter
    logging.getLogger("sklearn").setLevel(logging.WARNING)

    root.debug(
        "Logging configured: level=%s json=%s file=%s",
        level, config.log_json, config.log_file or "none",
    )
