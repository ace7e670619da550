"""Revision-level git operations: show, add, commit, log and grep.

Every method is a single git invocation through :class:`CommandRunner`.
Failures that callers need to tell apart are re-classified here:

* ``show`` of a path missing at a revision -> :class:`NotFoundError`
* ``commit`` with nothing staged -> :class:`NothingToCommitError`
* ``log`` on a branch without commits and ``grep`` without matches
  return empty output instead of failing.
"""

import logging
from pathlib import Path

from .errors import ExecutionError, NotFoundError, NothingToCommitError
from .models import Author
from .runner import CommandRunner

logger = logging.getLogger(__name__)

CURRENT = "current"

# Format consumed by log_parser: short-id, name, <email>, relative date, subject.
LOG_FORMAT = "--pretty=format:%h %an <%ae> %ad %s"

_NOT_FOUND_MARKERS = (
    "does not exist in",
    "exists on disk, but not in",
    "invalid object name",
    "bad revision",
    "unknown revision",
    "invalid object",
    "not a valid object name",
)

_NOTHING_TO_COMMIT_MARKERS = (
    "nothing to commit",
    "nothing added to commit",
    "no changes added to commit",
)

_NO_COMMITS_MARKERS = (
    "does not have any commits yet",
    "bad default revision 'head'",
)


def _matches(error: ExecutionError, markers: tuple[str, ...]) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in markers)


class RevisionStore:
    """Show, stage, commit, log and grep files in a git working tree."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def show(self, path: str, revision: str | None = CURRENT) -> bytes:
        """Return the exact bytes of *path* at *revision*.

        Args:
            path: File path relative to the working tree root.
            revision: Commit identifier, or ``"current"``/``None`` for HEAD.

        Raises:
            NotFoundError: If *path* or *revision* does not exist.
            ExecutionError: For any other git failure.
        """
        if not revision or revision == CURRENT:
            revision = "HEAD"
        try:
            # "rev:./path" is resolved against the runner root, not the
            # repository top level.
            return self.runner.run("show", f"{revision}:./{path}")
        except ExecutionError as e:
            if _matches(e, _NOT_FOUND_MARKERS):
                raise NotFoundError.from_error(e) from e
            raise

    def add(self, path: str) -> None:
        """Stage the current on-disk content of *path*."""
        self.runner.run("add", "--", path)

    def commit(self, message: str, author: Author | None = None) -> bytes:
        """Create a revision from all staged changes.

        An empty (or missing) *author* leaves attribution to git's configured
        identity; otherwise ``--author "Name <email>"`` is passed.

        Raises:
            NothingToCommitError: If nothing is staged.
            ExecutionError: For any other git failure.
        """
        args = ["-m", message]
        if author is not None and not author.is_empty:
            args += ["--author", str(author)]
        try:
            return self.runner.run("commit", *args)
        except ExecutionError as e:
            if _matches(e, _NOTHING_TO_COMMIT_MARKERS):
                raise NothingToCommitError.from_error(e) from e
            raise

    def reset(self, path: str) -> None:
        """Unstage *path*, leaving the working tree file untouched."""
        self.runner.run("reset", "--quiet", "--", path)

    def log(self, path: str) -> bytes:
        """Return one line per revision touching *path*, newest first."""
        try:
            return self.runner.run(
                "log", LOG_FORMAT, "--date=relative", "--", path
            )
        except ExecutionError as e:
            if _matches(e, _NO_COMMITS_MARKERS):
                return b""
            raise

    def grep(self, keyword: str) -> bytes:
        """Case-insensitive literal search over tracked files.

        Output is one ``path<NUL>line`` record per matching line; ``--null``
        keeps paths verbatim (never C-quoted).
        """
        try:
            return self.runner.run(
                "grep",
                "--null",
                "--ignore-case",
                "--fixed-strings",
                "-e",
                keyword,
            )
        except ExecutionError as e:
            # git grep exits 1 without output when nothing matches.
            if e.returncode == 1 and not e.stderr:
                return b""
            raise

    def is_top_level(self) -> bool:
        """True if the runner's root is the top level of a git working tree.

        A subdirectory of an enclosing repository does not count: documents
        saved there would be committed into that repository.
        """
        try:
            out = self.runner.run("rev-parse", "--show-toplevel")
        except ExecutionError as e:
            logger.debug("Not a git working tree: %s", e)
            return False
        top_level = Path(out.decode("utf-8", errors="replace").strip())
        return top_level.resolve() == self.runner.root.resolve()

    def init(self) -> None:
        """Create an empty repository at the runner's root."""
        self.runner.root.mkdir(parents=True, exist_ok=True)
        self.runner.run("init", "--quiet", "--initial-branch=main")
