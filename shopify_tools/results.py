"""Tool result envelope — a text summary plus structured content."""

import logging
from functools import wraps

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel

from shared.constants import ERROR_UNKNOWN
from .errors import ShopifyConfigError, ShopifyToolError

logger = logging.getLogger("shopify_mcp.tools")


def tool_result(summary: str, output: BaseModel) -> CallToolResult:
    """Successful result: ``summary`` for humans, ``output`` as structured content."""
    return CallToolResult(
        content=[TextContent(type="text", text=summary)],
        structuredContent=output.model_dump(mode="json"),
    )


def tool_error(message: str, code: str = "error", **extra) -> CallToolResult:
    """Error result with ``{"error": message, "code": code, ...extra}`` as structured content."""
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {message}")],
        structuredContent={"error": message, "code": code, **extra},
        isError=True,
    )


def handle_tool_errors(action: str, **fallback):
    """Convert any exception raised by a tool into an error result.

    Args:
        action: Prefix for the error message, e.g. "Error al obtener productos"
        fallback: Extra structured fields every error result of this tool
            carries (e.g. ``orders=[]``)
    """

    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs) -> CallToolResult:
            try:
                return await fn(*args, **kwargs)
            except ShopifyConfigError as exc:
                return tool_error(exc.message, exc.code, **fallback)
            except ShopifyToolError as exc:
                logger.warning("%s failed [%s]: %s", fn.__name__, exc.code, exc.message)
                return tool_error(f"{action}: {exc.message}", exc.code, **fallback)
            except Exception as exc:
                logger.exception("%s failed with an unexpected error", fn.__name__)
                return tool_error(f"{action}: {str(exc) or ERROR_UNKNOWN}", **fallback)

        return wrapper

    return decorator
