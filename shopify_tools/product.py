"""Product tools — list (cached) and get products."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from .cache import PRODUCTS_CACHE_KEY, TTLCache
from .config import api_get, store_base_url
from .errors import ShopifyNotFoundError
from .mappers import map_product, map_product_detail
from .models import ProductList, ProductResult
from .results import handle_tool_errors, tool_result
from .utilities import extract_numeric_id

LIST_LIMIT = 5

logger = logging.getLogger("shopify_mcp.product")


def register(mcp: FastMCP, cache: TTLCache) -> None:

    @mcp.tool()
    @handle_tool_errors("Error al obtener productos")
    async def list_products() -> CallToolResult:
        """
        Get the first 5 products from the Shopify store, including price,
        description, image and product page URL.

        Results are cached for 5 minutes.

        Returns:
            List of products
        """
        base_url = store_base_url()

        products = cache.get(PRODUCTS_CACHE_KEY)
        if products is None:
            raw = await api_get("products", {"limit": LIST_LIMIT})
            products = [
                map_product(p, base_url).model_dump(mode="json")
                for p in raw.get("products") or []
            ]
            cache.set(PRODUCTS_CACHE_KEY, products)
            logger.info("Fetched %d products from Shopify", len(products))
        else:
            logger.debug("Serving %d products from cache", len(products))

        output = ProductList.model_validate({"products": products})
        return tool_result(json.dumps(products, indent=2, ensure_ascii=False), output)

    @mcp.tool()
    @handle_tool_errors("Error al obtener el producto")
    async def get_product(product_id: str) -> CallToolResult:
        """
        Get a single product by ID, with all its variants.

        Args:
            product_id: Numeric product ID or gid://shopify/Product/<id>

        Returns:
            Product details or not-found message
        """
        base_url = store_base_url()
        numeric_id = extract_numeric_id(product_id, "Product")

        try:
            raw = await api_get(f"products/{numeric_id}")
        except ShopifyNotFoundError:
            raw = {}

        product = raw.get("product")
        if not product:
            return tool_result(
                f"Product with ID {numeric_id} not found",
                ProductResult(found=False),
            )

        detail = map_product_detail(product, base_url)
        return tool_result(
            f"{detail.title} - {detail.price} ({len(detail.variants)} variants)",
            ProductResult(found=True, product=detail),
        )
