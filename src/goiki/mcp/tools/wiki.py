"""Wiki tool handlers for the MCP server.

Implements wiki_get, wiki_put, wiki_history and wiki_search on top of
``ContentStore``. Store calls block on git, so every handler goes through
run_sync() and concurrent tool calls run on separate worker threads.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...store import Author, ContentStore
from .errors import build_error_response
from .registry import ToolSpec

WIKI_GET_TOOL = types.Tool(
    name="wiki_get",
    description="Get the raw content of a wiki page, optionally at an earlier revision.",
    inputSchema={
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Page title; '/' separates nested pages (optional, defaults to the index page)",
            },
            "revision": {
                "type": "string",
                "description": "Revision id from wiki_history (optional, defaults to current)",
            },
        },
        "required": [],
    },
)

WIKI_PUT_TOOL = types.Tool(
    name="wiki_put",
    description="Create or update a wiki page. Each change is committed as a new revision; saving unchanged content creates no revision.",
    inputSchema={
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Page title (required)",
            },
            "body": {
                "type": "string",
                "description": "Full page content (required)",
            },
            "message": {
                "type": "string",
                "description": "Change description (optional, defaults to 'Update <file>')",
            },
            "author_name": {
                "type": "string",
                "description": "Author name (optional, defaults to the repository identity)",
            },
            "author_email": {
                "type": "string",
                "description": "Author e-mail (optional)",
            },
        },
        "required": ["title", "body"],
    },
)

WIKI_HISTORY_TOOL = types.Tool(
    name="wiki_history",
    description="List the revisions of a wiki page, most recent first.",
    inputSchema={
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Page title (required)",
            },
        },
        "required": ["title"],
    },
)

WIKI_SEARCH_TOOL = types.Tool(
    name="wiki_search",
    description="Case-insensitive full-text search over current page content. The query is matched as literal text, not as a pattern. Returns one result per matching line.",
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Literal text to search for (required)",
            },
            "limit": {
                "type": "integer",
                "description": "Maximum results (default: 50, max: 500)",
                "default": 50,
                "minimum": 1,
                "maximum": 500,
            },
        },
        "required": ["query"],
    },
)


def _missing(param: str) -> types.CallToolResult:
    return build_error_response(
        "validation_error",
        f"{param} is required",
        f"Provide {param} parameter.",
    )


async def _handle_get(
    store: ContentStore, args: dict
) -> types.CallToolResult:
    """Handle wiki_get; without a title, serve the index page."""
    title = args.get("title") or store.index_page

    document = await run_sync(store.load, title, args.get("revision"))

    return types.CallToolResult(
        content=[
            types.TextContent(
                type="text",
                text=f"# {document.title}\nRevision: {document.revision}\n----\n\n{document.body}",
            )
        ],
        structuredContent=document.model_dump(),
    )


async def _handle_put(
    store: ContentStore, args: dict
) -> types.CallToolResult:
    """Handle wiki_put."""
    title = args.get("title")
    if not title:
        return _missing("title")
    body = args.get("body")
    if body is None:
        return _missing("body")

    author = Author(
        name=args.get("author_name", ""),
        email=args.get("author_email", ""),
    )
    created = not await run_sync(store.exists, title)
    await run_sync(store.save, title, body, args.get("message", ""), author)

    action = "Created" if created else "Saved"
    return types.CallToolResult(
        content=[
            types.TextContent(type="text", text=f"{action} page '{title}'.")
        ],
        structuredContent={"title": title, "created": created},
    )


async def _handle_history(
    store: ContentStore, args: dict
) -> types.CallToolResult:
    """Handle wiki_history."""
    title = args.get("title")
    if not title:
        return _missing("title")

    revisions = await run_sync(store.history, title)
    if not revisions:
        return types.CallToolResult(
            content=[
                types.TextContent(
                    type="text", text=f"No revisions found for '{title}'."
                )
            ],
            structuredContent={"title": title, "revisions": []},
        )

    lines = [f"History of {title} ({len(revisions)} revisions):", ""]
    for r in revisions:
        lines.append(
            f"- {r.object_id} {r.timestamp_label} by {r.author.name}: {r.description}"
        )

    return types.CallToolResult(
        content=[types.TextContent(type="text", text="\n".join(lines))],
        structuredContent={
            "title": title,
            "revisions": [r.model_dump() for r in revisions],
        },
    )


async def _handle_search(
    store: ContentStore, args: dict
) -> types.CallToolResult:
    """Handle wiki_search."""
    query = args.get("query")
    if not query:
        return _missing("query")
    limit = min(max(1, args.get("limit", 50)), 500)

    results = await run_sync(store.search, query)
    if not results:
        return types.CallToolResult(
            content=[
                types.TextContent(
                    type="text", text="No wiki pages found matching query."
                )
            ],
            structuredContent={"query": query, "results": [], "total": 0},
        )

    total = len(results)
    results = results[:limit]
    header = f"Search results for '{query}':"
    if total > limit:
        header += f" (showing {limit} of {total})"
    lines = [header, ""]
    lines += [f"- {r.title}: {r.content.strip()}" for r in results]

    return types.CallToolResult(
        content=[types.TextContent(type="text", text="\n".join(lines))],
        structuredContent={
            "query": query,
            "results": [r.model_dump() for r in results],
            "total": total,
        },
    )


WIKI_SPECS: list[ToolSpec] = [
    ToolSpec(tool=WIKI_GET_TOOL, read_only=True, handler=_handle_get),
    ToolSpec(tool=WIKI_PUT_TOOL, read_only=False, handler=_handle_put),
    ToolSpec(tool=WIKI_HISTORY_TOOL, read_only=True, handler=_handle_history),
    ToolSpec(tool=WIKI_SEARCH_TOOL, read_only=True, handler=_handle_search),
]
