"""MCP Server exposing the Goiki content store over stdio transport.

Transport: stdio
Protocol: JSON-RPC 2.0 over MCP
"""

import argparse
import asyncio
import logging
import sys

import mcp.server.stdio
import mcp.types as types
from dotenv import find_dotenv, load_dotenv
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from .. import __version__
from ..config import resolve_bool
from ..config_loader import load_hierarchical_config
from ..config_schema import build_config
from ..logger import setup_logging
from ..store import ContentStore
from .lifespan import server_lifespan
from .tools import ALL_SPECS, ToolRegistry, build_error_response
from .tools.registry import ToolSpec

logger = logging.getLogger(__name__)

server = Server("goiki")

# Installed by main() once the lifespan has opened the store
_store: ContentStore | None = None
_registry: ToolRegistry | None = None


async def _handle_ping(
    store: ContentStore, args: dict
) -> types.CallToolResult:
    """Handle ping tool -- report the wiki name and store location."""
    return types.CallToolResult(
        content=[
            types.TextContent(
                type="text",
                text=(
                    f"{store.name} (Goiki {__version__}) serving "
                    f"{store.mapper.root} (*.{store.mapper.extension}), "
                    f"index page '{store.index_page}'"
                ),
            )
        ],
        structuredContent={
            "name": store.name,
            "version": __version__,
            "data_dir": str(store.mapper.root),
            "file_extension": store.mapper.extension,
            "index_page": store.index_page,
        },
    )


PING_SPEC = ToolSpec(
    tool=types.Tool(
        name="ping",
        description="Test Goiki MCP server connectivity and report the wiki name, data directory and index page",
        inputSchema={"type": "object", "properties": {}, "required": []},
    ),
    read_only=True,
    handler=_handle_ping,
)


def get_store() -> ContentStore:
    """Return the store opened by the server lifespan.

    Raises:
        RuntimeError: If the lifespan has not started.
    """
    if _store is None:
        raise RuntimeError("ContentStore not initialized. Server lifespan not started.")
    return _store


def set_store(store: ContentStore | None) -> None:
    global _store
    _store = store


def get_registry() -> ToolRegistry:
    if _registry is None:
        raise RuntimeError("ToolRegistry not initialized.")
    return _registry


def set_registry(registry: ToolRegistry | None) -> None:
    global _registry
    _registry = registry


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """List available wiki tools."""
    return get_registry().list_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict | None
) -> types.CallToolResult:
    """Handle tool execution via ToolRegistry dispatch."""
    store = get_store()
    try:
        return await get_registry().call_tool(name, arguments, store)
    except ValueError as e:
        return build_error_response(
            "unknown_tool",
            str(e),
            "Use list_tools to see available tools.",
        )


async def main(config_overrides: dict | None = None):
    """Run the MCP server with stdio transport.

    Args:
        config_overrides: Optional dict with CLI values (data_dir,
            file_extension, init, debug, read_only, log_file)
    """
    overrides = config_overrides or {}

    # .env feeds LOG_LEVEL/LOG_FILE as well as the GOIKI_* settings
    load_dotenv(find_dotenv(usecwd=True))

    try:
        unified = build_config(load_hierarchical_config())
    except ValueError as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        raise RuntimeError(f"Configuration error: {e}") from e

    # Must happen before stdio_server starts: stdout belongs to the protocol
    setup_logging(
        mode="mcp",
        debug=resolve_bool(
            overrides.get("debug", False), "GOIKI_DEBUG", unified.wiki.debug
        ),
        log_file=overrides.get("log_file") or unified.logging.file,
        level=unified.logging.level,
    )

    all_specs = [PING_SPEC] + ALL_SPECS
    registry = ToolRegistry(all_specs, read_only=overrides.get("read_only", False))
    logger.info(
        "Registered %d tools (of %d total)",
        registry.tool_count(),
        len(all_specs),
    )
    set_registry(registry)

    async with server_lifespan(config_overrides=overrides) as ctx:
        set_store(ctx["store"])
        try:
            async with mcp.server.stdio.stdio_server() as (
                read_stream,
                write_stream,
            ):
                init_options = InitializationOptions(
                    server_name="goiki",
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                )
                await server.run(read_stream, write_stream, init_options)
        finally:
            set_store(None)
            set_registry(None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goiki-mcp",
        description="Goiki MCP Server - git-backed wiki pages over the Model Context Protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve pages from ./data (must already be a git repository)
  goiki-mcp

  # Serve another directory, creating the repository if needed
  goiki-mcp --data-dir ~/wiki --init

  # Expose only read tools
  goiki-mcp --read-only

Note: This server uses stdio transport. All user-facing messages go to stderr.
        """,
    )
    parser.add_argument(
        "--data-dir",
        help="Git working tree holding the pages (overrides GOIKI_DATA_DIR and config files)",
    )
    parser.add_argument(
        "--file-extension",
        help="Page file extension (default: md)",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize the data directory as a git repository if it is not one",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level (overrides LOG_LEVEL)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Do not register tools that create revisions",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path (default: LOG_FILE env var or /tmp/goiki.log)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"goiki version {__version__}",
    )
    return parser


def run() -> None:
    """Entry point that parses CLI arguments and handles startup errors."""
    args = build_parser().parse_args()

    config_overrides = {
        key: value
        for key, value in (
            ("data_dir", args.data_dir),
            ("file_extension", args.file_extension),
            ("init", args.init),
            ("debug", args.debug),
            ("read_only", args.read_only),
            ("log_file", args.log_file),
        )
        if value
    }

    try:
        asyncio.run(main(config_overrides=config_overrides))
    except RuntimeError:
        # Error already printed to stderr by lifespan manager
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    run()
