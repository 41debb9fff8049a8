"""Exceptions raised by the Shopify helpers and tools.

Every tool converts these into an error result at its boundary (see
``results.handle_tool_errors``); none of them reach the MCP transport.
"""

from typing import Any

from shared.constants import (
    ERROR_DRAFT_ALREADY_COMPLETED,
    ERROR_NOT_CONFIGURED,
    ERROR_UNPARSEABLE_RESPONSE,
    ERROR_UPSTREAM_UNREACHABLE,
)


class ShopifyToolError(Exception):
    """Base class. ``code`` is the machine-readable tag put in error results."""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ShopifyConfigError(ShopifyToolError):
    """Store URL or access token missing from the environment."""

    code = "not_configured"

    def __init__(self, message: str = ERROR_NOT_CONFIGURED):
        super().__init__(message)


class InvalidInputError(ShopifyToolError, ValueError):
    """Tool input rejected before any call to Shopify."""

    code = "invalid_input"


class ShopifyAPIError(ShopifyToolError):
    """Shopify answered with a non-success status, or GraphQL ``errors``."""

    code = "upstream_error"

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ShopifyNotFoundError(ShopifyAPIError):
    """404 on a single-resource lookup."""

    code = "not_found"


class ShopifyResponseError(ShopifyToolError):
    """Shopify returned a body that is not JSON."""

    code = "invalid_response"

    def __init__(self, message: str = ERROR_UNPARSEABLE_RESPONSE):
        super().__init__(message)


class DraftOrderAlreadyCompletedError(ShopifyToolError):
    code = "already_completed"

    def __init__(self, draft_order_id: int, order_id: int | None = None):
        super().__init__(ERROR_DRAFT_ALREADY_COMPLETED)
        self.draft_order_id = draft_order_id
        self.order_id = order_id


class ShopifyConnectionError(ShopifyToolError):
    """Shopify could not be reached: timeout, DNS or connection failure."""

    code = "upstream_unreachable"

    def __init__(self, message: str = ERROR_UPSTREAM_UNREACHABLE):
        super().__init__(message)
