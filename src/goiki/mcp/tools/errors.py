"""Error response builders for MCP tool handlers.

Structured error responses carry a corrective action so agents can
recover without human intervention.
"""

import mcp.types as types

from ...store.errors import (
    ExecutionError,
    NotFoundError,
    ParseError,
    StoreError,
)


def build_error_response(
    error_type: str, message: str, corrective_action: str
) -> types.CallToolResult:
    """Build a structured error response with corrective action.

    Args:
        error_type: Error category (not_found, validation_error, server_error, unknown_tool)
        message: Human-readable error description
        corrective_action: Specific action the agent can take to resolve the error

    Returns:
        CallToolResult with isError=True

    Examples:
        >>> build_error_response("not_found", "No page FrontPage", "Use wiki_search to find pages.")
        CallToolResult(content=[TextContent(...)], isError=True)
    """
    error_text = f"Error ({error_type}): {message}\n\nAction: {corrective_action}"

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=error_text)],
        isError=True,
    )


def translate_store_error(
    error: StoreError, title: str | None = None
) -> types.CallToolResult:
    """Translate a content store error to a structured error response.

    Args:
        error: Error raised by the content store.
        title: Optional document title for contextual suggestions.
    """
    match error:
        case NotFoundError():
            if title:
                message = f"Page '{title}' not found"
                action = (
                    f"Use wiki_search to find pages similar to '{title}', "
                    f"or create it with wiki_put(title='{title}')."
                )
            else:
                message = str(error)
                action = "Use wiki_search to find available pages."
            return build_error_response("not_found", message, action)

        case ParseError():
            return build_error_response(
                "validation_error",
                str(error),
                "Check parameter values and retry.",
            )

        case ExecutionError():
            return build_error_response(
                "server_error",
                f"git failed: {error}",
                "Check the wiki data directory and retry later.",
            )

        case _:
            return build_error_response(
                "server_error",
                str(error),
                "Check the wiki data directory and retry later.",
            )
