"""Error taxonomy for the git-backed content store.

::

    StoreError
    ├── ExecutionError        git could not run, or reported a failure
    │   ├── NotFoundError     path absent at the requested revision
    │   └── NothingToCommitError
    └── ParseError            tool output or path did not have the expected shape
"""


class StoreError(Exception):
    """Base class for all content store errors."""


class ExecutionError(StoreError):
    """The git process could not be started or reported an error.

    Attributes:
        stdout: Whatever the process wrote to stdout before failing.
        stderr: Decoded stderr text.
        returncode: Process exit status, or ``None`` if it never started.
    """

    def __init__(
        self,
        message: str,
        stdout: bytes = b"",
        stderr: str = "",
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode

    @classmethod
    def from_error(cls, error: "ExecutionError") -> "ExecutionError":
        """Re-classify *error* as this subclass, keeping its diagnostics."""
        return cls(
            str(error),
            stdout=error.stdout,
            stderr=error.stderr,
            returncode=error.returncode,
        )


class NotFoundError(ExecutionError):
    """A requested document or revision does not exist."""


class NothingToCommitError(ExecutionError):
    """A commit was attempted with no staged changes."""


class ParseError(StoreError, ValueError):
    """Text did not match the shape a parser or mapper expects."""
