"""
Input validation functions for Goiki.

Provides validation for document titles, revision identifiers, and
document bodies before they are turned into git arguments or file paths.
"""

import re

# Revision names git accepts that we pass through: hashes, refs, HEAD~2, @{1}.
_REVISION_PATTERN = re.compile(r"^[A-Za-z0-9_./~^@{}-]+$")


# ---------------------------------------------------------------------------
# Error message formatting helpers
# ---------------------------------------------------------------------------


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Human-readable field name (e.g., "Title")
        reason: Description of validation failure (e.g., "cannot be empty")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def validate_title(title: str) -> tuple[bool, str]:
    """
    Validate a document title.

    Args:
        title: The title to validate

    Returns:
        Tuple of (is_valid, error_message).
        Returns (True, "") if valid, (False, reason) if invalid.

    Validation rules:
        - Cannot be empty or whitespace-only
        - Cannot contain '..' (path traversal protection)
        - Cannot have empty path segments (e.g., 'Page//Name')
        - Cannot start or end with '/'
        - Cannot start with '-' (would be read as a git option)
        - Cannot contain NUL, newline or carriage return
    """
    if not title or not title.strip():
        return (
            False,
            format_validation_error("Title", "cannot be empty"),
        )

    if ".." in title:
        return (
            False,
            format_validation_error("Title", "cannot contain '..'"),
        )

    if "//" in title:
        return (
            False,
            format_validation_error(
                "Title", "cannot have empty path segments"
            ),
        )

    if title.startswith("/") or title.endswith("/"):
        return (
            False,
            format_validation_error(
                "Title", "cannot start or end with '/'"
            ),
        )

    if title.startswith("-"):
        return (
            False,
            format_validation_error("Title", "cannot start with '-'"),
        )

    if any(ch in title for ch in ("\x00", "\n", "\r")):
        return (
            False,
            format_validation_error(
                "Title", "cannot contain control characters"
            ),
        )

    return (True, "")


def validate_revision(revision: str) -> tuple[bool, str]:
    """
    Validate a revision identifier (commit hash or ref name).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not revision:
        return (
            False,
            format_validation_error("Revision", "cannot be empty"),
        )

    if revision.startswith("-") or not _REVISION_PATTERN.match(revision):
        return (
            False,
            format_validation_error(
                "Revision", f"'{revision}' is not a valid revision name"
            ),
        )

    return (True, "")


def validate_content(
    content: str, max_size: int = 1_000_000
) -> tuple[bool, str]:
    """
    Validate a document body.

    Empty bodies are allowed: saving an empty document is a valid edit.

    Args:
        content: The content to validate
        max_size: Maximum size in bytes (default: 1,000,000)

    Returns:
        Tuple of (is_valid, error_message).
    """
    content_bytes = len(content.encode("utf-8"))
    if content_bytes > max_size:
        return (
            False,
            format_validation_error(
                "Content", f"exceeds maximum size of {max_size} bytes"
            ),
        )

    return (True, "")
