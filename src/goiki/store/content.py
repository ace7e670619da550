"""Document-level operations over a git working tree.

``ContentStore`` composes :class:`PathMapper`, :class:`RevisionStore` and the
log/grep parsers into the four operations the wiki needs: ``load``,
``save``, ``history`` and ``search``.

Concurrency: reads run without locking and may observe the tree before or
after an in-flight save. ``save`` holds a per-store lock across the whole
write/add/commit sequence so the staging area is never shared between two
writers.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from charset_normalizer import from_bytes

from ..validators import validate_content, validate_revision
from .errors import (
    ExecutionError,
    NotFoundError,
    NothingToCommitError,
    StoreError,
)
from .grep_parser import parse_grep
from .log_parser import parse_log
from .models import Author, Document, Revision, SearchResult
from .paths import PathMapper
from .revisions import CURRENT, RevisionStore
from .runner import CommandRunner

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)


def decode_body(raw: bytes) -> str:
    """Decode document bytes, preferring UTF-8.

    Content committed by other tools may use another encoding; in that
    case charset-normalizer picks the most plausible one.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        result = from_bytes(raw).best()
        if result is None:
            return raw.decode("utf-8", errors="replace")
        logger.debug("Decoded document as %s", result.encoding)
        return str(result)


class ContentStore:
    """Versioned document store backed by a git working tree.

    Construct once at startup (see :meth:`open`) and pass the instance to
    every consumer.

    Args:
        revisions: Git operations bound to the working tree.
        mapper: Title/path mapping for the same working tree.
        max_content_size: Largest accepted body, in UTF-8 bytes.
        name: Wiki name shown to clients.
        index_page: Title served when a client asks for no particular page.
    """

    def __init__(
        self,
        revisions: RevisionStore,
        mapper: PathMapper,
        max_content_size: int = 1_000_000,
        name: str = "Goiki",
        index_page: str = "FrontPage",
    ) -> None:
        self.revisions = revisions
        self.mapper = mapper
        self.max_content_size = max_content_size
        self.name = name
        self.index_page = index_page
        self._write_lock = threading.Lock()

    @classmethod
    def open(cls, config: Config) -> ContentStore:
        """Open the working tree named by ``config.data_dir``.

        Raises:
            StoreError: If the directory is not the top level of a git
                working tree and ``config.init`` is false, or initialisation
                fails. With ``config.init`` a subdirectory of another
                repository gets its own nested repository.
        """
        root = Path(config.data_dir)
        runner = CommandRunner(
            root,
            git_binary=config.git_binary,
            timeout=config.command_timeout,
        )
        revisions = RevisionStore(runner)

        if not root.is_dir() or not revisions.is_top_level():
            if not config.init:
                raise StoreError(
                    f"Unable to open the repository at {root}. "
                    "Check that it exists and is the top level of an "
                    "initialized repository, "
                    "or start with --init."
                )
            logger.info("Initializing repository at %s", root)
            try:
                revisions.init()
            except ExecutionError as e:
                raise StoreError(
                    f"Unable to initialize repository at {root}: {e}"
                ) from e

        logger.info(
            "Opened content store at %s (extension: .%s)",
            root,
            config.file_extension,
        )
        return cls(
            revisions,
            PathMapper(root, config.file_extension),
            max_content_size=config.max_content_size,
            name=config.name,
            index_page=config.index_page,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self, title: str, revision: str | None = None) -> Document:
        """Return *title* as it existed at *revision* (default: current).

        Raises:
            NotFoundError: If the document cannot be read at that revision.
            ValueError: If *title* or *revision* is malformed.
        """
        path = self.mapper.to_path(title)
        revision = revision or CURRENT
        if revision != CURRENT:
            is_valid, reason = validate_revision(revision)
            if not is_valid:
                raise ValueError(reason)

        try:
            raw = self.revisions.show(path, revision)
        except NotFoundError:
            raise
        except ExecutionError as e:
            logger.warning(
                "Unable to load %s at %s: %s", path, revision, e
            )
            raise NotFoundError.from_error(e) from e

        return Document(
            title=title,
            body=decode_body(raw),
            revision="HEAD" if revision == CURRENT else revision,
        )

    def exists(self, title: str) -> bool:
        """True if *title* has been committed at the current revision."""
        try:
            self.load(title)
        except NotFoundError:
            return False
        return True

    def history(self, title: str) -> list[Revision]:
        """Return the revisions of *title*, most recent first."""
        path = self.mapper.to_path(title)
        out = self.revisions.log(path)
        revisions = parse_log(out.decode("utf-8", errors="replace"))
        return [r.model_copy(update={"title": title}) for r in revisions]

    def search(self, keyword: str) -> list[SearchResult]:
        """Case-insensitive full-text search across current documents.

        Search is best-effort: a git failure is logged and yields no results.
        """
        if not keyword or not keyword.strip():
            return []
        try:
            out = self.revisions.grep(keyword)
        except ExecutionError:
            logger.exception("Search for %r failed", keyword)
            return []
        return parse_grep(out.decode("utf-8", errors="replace"), self.mapper)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(
        self,
        title: str,
        body: str,
        message: str = "",
        author: Author | None = None,
    ) -> None:
        """Write *body* to *title* and commit it.

        An empty *message* becomes ``"Update {path}"``. Saving an unchanged
        body is a no-op. If the commit fails, the staged file is unstaged
        before the error is re-raised; the file on disk keeps the new body.

        Raises:
            ValueError: If *title* or *body* is invalid.
            ExecutionError: If git fails to stage or commit.
            OSError: If the file cannot be written.
        """
        path = self.mapper.to_path(title)
        is_valid, reason = validate_content(body, self.max_content_size)
        if not is_valid:
            raise ValueError(reason)
        message = message.strip() or f"Update {path}"
        target = self.mapper.absolute(path)

        with self._write_lock:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(body.encode("utf-8"))

            self.revisions.add(path)
            try:
                out = self.revisions.commit(message, author)
            except NothingToCommitError:
                logger.info("No changes to commit for %s", path)
                return
            except ExecutionError:
                self._unstage(path)
                raise

        logger.info("Committed %s: %s", path, message)
        logger.debug("commit: %s", out.decode("utf-8", errors="replace"))

    def _unstage(self, path: str) -> None:
        try:
            self.revisions.reset(path)
        except ExecutionError as e:
            logger.error("Unable to unstage %s after failed commit: %s", path, e)
