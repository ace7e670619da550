"""Parse ``git grep --null`` output into :class:`SearchResult` records.

Each line is ``<path>.<extension>\\0<matched line>``; the path is printed
verbatim, whatever characters it contains. Lines for other file types,
``Binary file ... matches`` notices and blank lines are skipped; that is
expected noise, so the skip count is only logged at DEBUG.
"""

import logging
from collections.abc import Callable

from .errors import ParseError
from .models import SearchResult
from .paths import PathMapper

logger = logging.getLogger(__name__)


def _log_skipped(line: str) -> None:
    logger.debug("Skipping grep line: %r", line)


def parse_grep(
    text: str,
    mapper: PathMapper,
    on_skip: Callable[[str], None] | None = None,
) -> list[SearchResult]:
    """Parse grep output into search results in tool order.

    Args:
        text: Decoded ``git grep --null`` output.
        mapper: Supplies the document extension and path-to-title mapping.
        on_skip: Called with every non-empty line that is not a document
            match. Defaults to a DEBUG log entry.
    """
    hook = on_skip or _log_skipped
    results: list[SearchResult] = []
    skipped = 0

    # Records end with "\n" only; other line breaks belong to the content.
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if not line:
            continue
        path, separator, content = line.partition("\0")
        if not separator:
            skipped += 1
            hook(line)
            continue
        try:
            title = mapper.to_title(path)
        except ParseError:
            skipped += 1
            hook(line)
            continue
        results.append(SearchResult(title=title, content=content))

    if skipped:
        logger.debug("Skipped %d non-matching grep lines", skipped)
    return results
