"""Lifespan management for MCP server startup and shutdown."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from ..config import load_config
from ..config_loader import discover_config_files, load_hierarchical_config
from ..config_schema import build_config, yaml_fallbacks
from ..core.async_utils import run_sync
from ..store import ContentStore, StoreError

logger = logging.getLogger(__name__)


def _stderr_print(msg: str) -> None:
    """Print message to stderr for user feedback (safe in MCP mode)."""
    print(msg, file=sys.stderr, flush=True)


@asynccontextmanager
async def server_lifespan(
    config_overrides: dict[str, Any] | None = None,
) -> AsyncIterator[dict[str, Any]]:
    """
    Manage server startup and shutdown lifecycle.

    On startup:
    - Load YAML config files as fallbacks (main() has already loaded .env)
    - Merge all sources via load_config(): CLI > env vars > .env > YAML > defaults
    - Open the content store once; fail fast if the data dir is not a repository

    Args:
        config_overrides: Optional dict with values from CLI (data_dir, file_extension, init)

    Yields:
        Dict with 'store' (the ContentStore) and 'config' keys

    Raises:
        RuntimeError: If configuration is invalid or the store cannot be opened.
    """
    logger.info("MCP server starting...")
    _stderr_print("Goiki MCP Server starting...")

    try:
        fallbacks: dict[str, Any] | None = None
        sources = []
        config_files = discover_config_files()
        if config_files:
            fallbacks = yaml_fallbacks(build_config(load_hierarchical_config()))
            sources.append(f"config file: {config_files[0]}")

        overrides = config_overrides or {}
        config = load_config(
            data_dir=overrides.get("data_dir"),
            file_extension=overrides.get("file_extension"),
            init=overrides.get("init", False),
            debug=overrides.get("debug", False),
            yaml_fallbacks=fallbacks,
        )

        if overrides:
            sources.append("CLI arguments")
        sources.append("environment variables")
        source_desc = ", ".join(sources)
        logger.info("Configuration loaded from: %s", source_desc)
        _stderr_print(f"  Configuration loaded from: {source_desc}")
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        _stderr_print(f"ERROR: Configuration error: {e}")
        raise RuntimeError(f"Configuration error: {e}") from e

    try:
        store = await run_sync(ContentStore.open, config)
    except StoreError as e:
        logger.error("Failed to open content store: %s", e)
        _stderr_print(f"ERROR: {e}")
        raise RuntimeError(str(e)) from e

    _stderr_print(f"  Wiki: {config.name} (index page: {config.index_page})")
    _stderr_print(f"  Data directory: {config.data_dir}")
    _stderr_print("Server ready. Waiting for MCP client connection...")

    yield {"store": store, "config": config}

    logger.info("MCP server shutting down")
    _stderr_print("Goiki MCP Server shutting down.")
