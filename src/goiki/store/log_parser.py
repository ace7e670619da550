"""Parse ``git log`` output into :class:`Revision` records.

Expected line shape (see ``revisions.LOG_FORMAT``)::

    <short-id> <author name> <<email>> <N unit[s][, M unit[s]] ago> <subject>

A commit dated after the local clock reads ``in the future`` instead.

Lines that do not match are skipped. Each skipped line is handed to the
``on_skip`` hook and the total is logged, so drift in git's output format
shows up in the logs instead of silently shortening a history.
"""

import logging
import re
from collections.abc import Callable

from .models import Author, Revision

logger = logging.getLogger(__name__)

_LOG_LINE = re.compile(
    r"^(?P<object_id>[0-9a-f]{4,40}) "
    r"(?P<name>.*?) "
    r"<(?P<email>[^<>]*)> "
    r"(?P<timestamp>\d+ \w+(?:, \d+ \w+)? ago|in the future)"
    r"(?: (?P<description>.*))?$"
)


def _log_skipped(line: str) -> None:
    logger.debug("Skipping unparseable log line: %r", line)


def parse_log_line(line: str) -> Revision | None:
    """Parse a single log line, or return ``None`` if it does not match."""
    match = _LOG_LINE.match(line)
    if match is None:
        return None
    return Revision(
        object_id=match["object_id"],
        author=Author(name=match["name"], email=match["email"]),
        timestamp_label=match["timestamp"],
        description=match["description"] or "",
    )


def parse_log(
    text: str, on_skip: Callable[[str], None] | None = None
) -> list[Revision]:
    """Parse log output into revisions, preserving line order.

    Args:
        text: Decoded ``git log`` output.
        on_skip: Called with every non-empty line that does not match.
            Defaults to a DEBUG log entry.

    Returns:
        Revisions newest first, with ``title`` left empty.
    """
    hook = on_skip or _log_skipped
    revisions: list[Revision] = []
    skipped = 0

    for line in text.splitlines():
        if not line.strip():
            continue
        revision = parse_log_line(line)
        if revision is None:
            skipped += 1
            hook(line)
            continue
        revisions.append(revision)

    if skipped:
        logger.warning(
            "Skipped %d of %d log lines that did not match the expected format",
            skipped,
            skipped + len(revisions),
        )
    return revisions
