"""Helpers shared by the MCP server and other async consumers."""

from .async_utils import run_sync

__all__ = ["run_sync"]
