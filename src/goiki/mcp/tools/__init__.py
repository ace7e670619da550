"""MCP tool handlers for wiki operations.

Each tool wraps a ``ContentStore`` operation with an async handler and
structured error responses.
"""

from .errors import build_error_response, translate_store_error
from .registry import ToolRegistry, ToolSpec
from .wiki import WIKI_SPECS

ALL_SPECS: list[ToolSpec] = list(WIKI_SPECS)

__all__ = [
    "ALL_SPECS",
    "WIKI_SPECS",
    "ToolRegistry",
    "ToolSpec",
    "build_error_response",
    "translate_store_error",
]
