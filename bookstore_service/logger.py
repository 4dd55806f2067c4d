"""
Shared logger for the bookstore service.

Query results are printed to stdout; this logger carries progress and
errors on stderr so the two streams never interleave in captured output.
"""

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def resolve_level(name: str) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


logger = logging.getLogger("bookstore")

if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)

logger.setLevel(resolve_level(LOG_LEVEL))
if not isinstance(logging.getLevelName(LOG_LEVEL.strip().upper()), int):
    logger.warning("Unknown LOG_LEVEL %r, using INFO", LOG_LEVEL)
