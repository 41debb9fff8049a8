"""MCP Server for a Shopify store — Admin REST + GraphQL API.

This server provides tools for:
─── Products ───
 1. list_products          — first 5 products (cached for 5 minutes)
 2. get_product            — one product with its variants

─── Orders ───
 3. search_orders          — search orders (GraphQL), newest first
 4. get_order              — one order with line items and note attributes
 5. create_order           — find-or-create the customer, then create the order
 6. update_order           — note, tags, note attributes, contact fields

─── Draft orders ───
 7. create_draft_order     — create a draft order
 8. list_draft_orders      — list draft orders by status
 9. get_draft_order        — one draft order
10. update_draft_order     — edit an open draft order
11. complete_draft_order   — complete a draft order and tag the new order
12. delete_draft_order     — delete a draft order

─── Utilities ───
13. verify_customer        — check customer details before ordering

Environment:
    SHOPIFY_STORE_URL   store hostname, e.g. my-shop.myshopify.com (required)
    SHOPIFY_API_TOKEN   Admin API access token (required)
    PORT                listen port (default 3000)

Run the server:
    python server.py
"""

import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from shared.logging_setup import setup_logger
from shopify_tools import TOOL_CONTRACTS, register_all
from shopify_tools.cache import TTLCache
from shopify_tools.config import HOST, LOG_DIR, LOG_LEVEL, PORT

# ── Logging ─────────────────────────────────────
logger = setup_logger(
    "shopify_mcp",
    Path(LOG_DIR) if LOG_DIR else None,
    "shopify_mcp.log" if LOG_DIR else None,
    level=LOG_LEVEL,
)

# ── MCP Server ──────────────────────────────────
mcp = FastMCP(
    "Shopify Commerce",
    stateless_http=True,
    json_response=True,
    host=HOST,
    port=PORT,
)

# ── Register all tools ──────────────────────────
product_cache = TTLCache()
register_all(mcp, product_cache)


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {"status": "ok", "service": "shopify-mcp", "tools": len(TOOL_CONTRACTS)}
    )


def main() -> None:
    logger.info("Shopify MCP server running on http://%s:%d/mcp", HOST, PORT)
    try:
        mcp.run(transport="streamable-http")
    except OSError as exc:
        logger.error("Server error: %s", exc)
        sys.exit(1)


# ── Run ─────────────────────────────────────────
if __name__ == "__main__":
    main()
