"""Title <-> file path mapping for documents in the working tree.

A title maps to ``{title}.{extension}``; ``/`` inside a title denotes
nested directories relative to the store root. ``to_title`` is the exact
inverse and refuses paths that do not carry the configured extension.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from ..validators import validate_title
from .errors import ParseError


class PathMapper:
    """Map document titles to relative file paths and back.

    Args:
        root: Working tree root, used by :meth:`absolute`.
        extension: File extension without the leading dot (e.g. ``"md"``).
    """

    def __init__(self, root: Path, extension: str = "md") -> None:
        extension = extension.lstrip(".")
        if not extension:
            raise ValueError("File extension cannot be empty")
        self.root = Path(root)
        self.extension = extension
        self._suffix = f".{extension}"

    def to_path(self, title: str) -> str:
        """Return the POSIX path, relative to the root, backing *title*.

        Raises:
            ValueError: If *title* is not a valid document title.
        """
        is_valid, reason = validate_title(title)
        if not is_valid:
            raise ValueError(reason)
        return str(PurePosixPath(title + self._suffix))

    def to_title(self, path: str) -> str:
        """Recover the document title from a relative file path.

        Raises:
            ParseError: If *path* does not end with the configured extension.
        """
        if not path.endswith(self._suffix) or len(path) == len(self._suffix):
            raise ParseError(
                f"'{path}' does not end with extension '{self._suffix}'"
            )
        return path[: -len(self._suffix)]

    def absolute(self, path: str) -> Path:
        """Return the on-disk location of a relative document path.

        Raises:
            ValueError: If the resolved location escapes the store root.
        """
        root = self.root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise ValueError(
                f"Path is outside the store root: {target} not under {root}"
            )
        return target
