"""Shopify MCP tools package — registers all tools with the MCP server."""

from typing import NamedTuple

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel

from . import order, order_draft, product, utilities
from .cache import TTLCache
from .models import (
    CompleteDraftOrderResult,
    CreateOrderResult,
    CustomerVerificationResult,
    DeleteDraftOrderResult,
    DraftOrderList,
    DraftOrderResult,
    OrderList,
    OrderResult,
    ProductList,
    ProductResult,
)


class ToolContract(NamedTuple):
    name: str
    output_model: type[BaseModel]


TOOL_CONTRACTS: tuple[ToolContract, ...] = (
    ToolContract("list_products", ProductList),
    ToolContract("get_product", ProductResult),
    ToolContract("search_orders", OrderList),
    ToolContract("get_order", OrderResult),
    ToolContract("create_order", CreateOrderResult),
    ToolContract("update_order", OrderResult),
    ToolContract("create_draft_order", DraftOrderResult),
    ToolContract("list_draft_orders", DraftOrderList),
    ToolContract("get_draft_order", DraftOrderResult),
    ToolContract("update_draft_order", DraftOrderResult),
    ToolContract("complete_draft_order", CompleteDraftOrderResult),
    ToolContract("delete_draft_order", DeleteDraftOrderResult),
    ToolContract("verify_customer", CustomerVerificationResult),
)


def register_all(mcp: FastMCP, cache: TTLCache) -> None:
    """Register every tool module with the given MCP server instance."""
    product.register(mcp, cache)
    order.register(mcp)
    order_draft.register(mcp)
    utilities.register(mcp)
