"""Git-backed versioned content store.

Modules:

- ``runner``      -- ``CommandRunner``: runs git against one working tree.
- ``paths``       -- ``PathMapper``: title <-> file path mapping.
- ``revisions``   -- ``RevisionStore``: show/add/commit/log/grep.
- ``log_parser``  -- ``parse_log``: ``git log`` text -> ``Revision`` list.
- ``grep_parser`` -- ``parse_grep``: ``git grep`` text -> ``SearchResult`` list.
- ``content``     -- ``ContentStore``: load/save/history/search.
- ``models``      -- ``Author``, ``Revision``, ``SearchResult``, ``Document``.
- ``errors``      -- ``StoreError`` hierarchy.

Usage example
-------------
::

    from goiki.config import load_config
    from goiki.store import Author, ContentStore

    store = ContentStore.open(load_config(data_dir="./data", init=True))
    store.save("FrontPage", "# Welcome", author=Author(name="Ann", email="ann@example.com"))
    for revision in store.history("FrontPage"):
        print(revision.object_id, revision.description)
"""

from .content import ContentStore
from .errors import (
    ExecutionError,
    NothingToCommitError,
    NotFoundError,
    ParseError,
    StoreError,
)
from .grep_parser import parse_grep
from .log_parser import parse_log
from .models import Author, Document, Revision, SearchResult
from .paths import PathMapper
from .revisions import RevisionStore
from .runner import CommandRunner

__all__ = [
    "Author",
    "CommandRunner",
    "ContentStore",
    "Document",
    "ExecutionError",
    "NotFoundError",
    "NothingToCommitError",
    "ParseError",
    "PathMapper",
    "Revision",
    "RevisionStore",
    "SearchResult",
    "StoreError",
    "parse_grep",
    "parse_log",
]
