"""Logging setup for hosts that embed the scoring engine.

Scorers attach their decision context (breakdowns, triggered rules, gate
outcomes) through ``extra={...}``. The formatter here prints that context
as sorted JSON after the message so a single line explains a score.
"""

import json
import logging
import sys
from typing import Any

from blogcanvas.config import settings

LOGGER_NAME = "blogcanvas"
LINE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s%(_scoring_context)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came from `extra`.
_BUILTIN_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def scoring_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the `extra` fields a scorer attached to `record`."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _BUILTIN_RECORD_ATTRS and not key.startswith("_")
    }


class ScoringContextFormatter(logging.Formatter):
    """One line per record: timestamp, level, logger, message, JSON context."""

    def __init__(self, datefmt: str | None = DATE_FORMAT) -> None:
        super().__init__(fmt=LINE_FORMAT, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        context = scoring_context(record)
        record._scoring_context = (
            " " + json.dumps(context, default=str, ensure_ascii=False, sort_keys=True)
            if context
            else ""
        )
        return super().format(record)


def setup_logging(level: str | None = None) -> None:
    """Route 'blogcanvas' records to stdout through `ScoringContextFormatter`.

    Safe to call again; later calls only change the level.
    """
    resolved_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved_level)
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ScoringContextFormatter())
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(resolved_level)
