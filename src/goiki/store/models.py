"""Pydantic value objects returned by the content store.

- ``Author``: commit identity; the empty author means "git's default".
- ``Revision``: one entry of a document's history.
- ``SearchResult``: one matching line from a full-text search.
- ``Document``: a document body read at a given revision.

All models are frozen (immutable).
"""

from __future__ import annotations

from pydantic import BaseModel


class Author(BaseModel):
    """Commit author identity.

    Attributes:
        name: Display name.
        email: E-mail address, without angle brackets.
    """

    name: str = ""
    email: str = ""

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """True when neither name nor email is set."""
        return not self.name and not self.email

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Revision(BaseModel):
    """A single revision of a document.

    Attributes:
        object_id: Abbreviated commit hash.
        author: Commit author.
        timestamp_label: Relative date as printed by git (e.g. "3 days ago").
        description: Commit subject line.
        title: Document title; filled in by the content store.
    """

    object_id: str
    author: Author
    timestamp_label: str
    description: str
    title: str = ""

    model_config = {"frozen": True}


class SearchResult(BaseModel):
    """A single line matched by a full-text search."""

    title: str
    content: str

    model_config = {"frozen": True}


class Document(BaseModel):
    """Document content as it existed at ``revision``."""

    title: str
    body: str
    revision: str

    model_config = {"frozen": True}
