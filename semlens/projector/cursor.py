"""Pagination cursors: plain base-10 offsets into a freshly projected node list."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_OFFSET = re.compile(r"[0-9]+", re.ASCII)


def parse_cursor(cursor: str | None) -> int:
    """Return the start offset for ``cursor``. Malformed cursors restart at 0."""
    if not cursor:
        return 0
    if not _OFFSET.fullmatch(cursor):
        logger.debug("Malformed cursor %r, starting from offset 0", cursor)
        return 0
    return int(cursor)


def format_cursor(offset: int) -> str:
    return str(offset)
