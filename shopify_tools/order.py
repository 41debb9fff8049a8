"""Order tools — search, get, create and update orders."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from shared.constants import NO_ORDERS_FOUND
from .config import api_get, api_post, api_put, graphql
from .errors import (
    InvalidInputError,
    ShopifyNotFoundError,
    ShopifyResponseError,
    ShopifyToolError,
)
from .mappers import map_order, map_order_node
from .models import CreateOrderResult, LineItemInput, OrderList, OrderResult
from .results import handle_tool_errors, tool_error, tool_result
from .utilities import (
    extract_numeric_id,
    line_items_payload,
    merge_note_attributes,
    merge_tags,
    missing_customer_fields,
    normalize_phone,
)

MAX_SEARCH_RESULTS = 250

logger = logging.getLogger("shopify_mcp.order")

SEARCH_ORDERS_QUERY = """
query getOrders($first: Int!, $query: String) {
  orders(first: $first, query: $query, sortKey: CREATED_AT, reverse: true) {
    edges {
      node {
        id
        name
        createdAt
        displayFinancialStatus
        displayFulfillmentStatus
        totalPriceSet { shopMoney { amount currencyCode } }
        customer { firstName lastName email phone }
        shippingAddress { address1 city province country zip }
      }
    }
  }
}
"""


# ──────────────────────────────────────────────
# create_order steps
# ──────────────────────────────────────────────
async def find_customer(email: str | None, phone: str | None) -> dict | None:
    """First customer matching ``email``, then ``phone``; ``None`` if neither matches."""
    queries = []
    if email:
        queries.append(f"email:{email}")
    if phone:
        queries.append(f"phone:{phone}")

    for query in queries:
        raw = await api_get("customers/search", {"query": query, "limit": 1})
        customers = raw.get("customers") or []
        if customers:
            return customers[0]
    return None


async def find_or_create_customer(customer: dict, address: dict) -> tuple[dict, bool]:
    """Return ``(customer, created)``.

    Not atomic with the order that follows: if that order fails, a customer
    created here stays in Shopify.
    """
    existing = await find_customer(customer.get("email"), customer.get("phone"))
    if existing:
        return existing, False

    body = {"customer": {**customer, "addresses": [address]}}
    raw = await api_post("customers", body)
    created = raw.get("customer") or {}
    logger.info("Created Shopify customer %s", created.get("id"))
    return created, True


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    @handle_tool_errors("Error al obtener pedidos", orders=[])
    async def search_orders(query: str = "", first: int = 5) -> CallToolResult:
        """
        Search orders by name, email, phone or free text. Without a query,
        returns the most recent orders.

        Args:
            query: Shopify search text (e.g. "email:ana@example.com", "#1001"); empty = most recent
            first: Number of orders to return (default 5, max 250)

        Returns:
            List of orders, newest first
        """
        first = max(1, min(first, MAX_SEARCH_RESULTS))
        data = await graphql(SEARCH_ORDERS_QUERY, {"first": first, "query": query or None})

        edges = ((data.get("orders") or {}).get("edges")) or []
        orders = [map_order_node(edge["node"]) for edge in edges if edge.get("node")]
        output = OrderList(orders=orders)

        if not orders:
            return tool_result(NO_ORDERS_FOUND, output)

        summary = json.dumps(output.model_dump(mode="json")["orders"], indent=2, ensure_ascii=False)
        return tool_result(summary, output)

    @mcp.tool()
    @handle_tool_errors("Error al obtener el pedido")
    async def get_order(order_id: str) -> CallToolResult:
        """
        Get one order by ID, including its line items and note attributes.

        Args:
            order_id: Numeric order ID or gid://shopify/Order/<id>

        Returns:
            Order details or not-found message
        """
        numeric_id = extract_numeric_id(order_id, "Order")
        try:
            raw = await api_get(f"orders/{numeric_id}")
        except ShopifyNotFoundError:
            raw = {}

        if not raw.get("order"):
            return tool_result(f"Order with ID {numeric_id} not found", OrderResult(found=False))

        order = map_order(raw["order"])
        return tool_result(
            f"Pedido {order.name}: {order.financial_status or '-'} / {order.fulfillment_status}, "
            f"total {order.total} {order.currency}",
            OrderResult(found=True, order=order),
        )

    @mcp.tool()
    @handle_tool_errors("Error al crear el pedido")
    async def create_order(
        first_name: str,
        last_name: str,
        phone: str,
        address1: str,
        city: str,
        country: str,
        line_items: list[LineItemInput],
        email: str | None = None,
        province: str | None = None,
        zip: str | None = None,
        note: str = "",
        note_attributes: dict[str, str] | None = None,
        tags: list[str] | None = None,
    ) -> CallToolResult:
        """
        Create an order for a customer, creating the customer first if no
        existing one matches the email or phone.

        The customer's phone and email are also stored as note attributes.

        Args:
            first_name: Customer first name
            last_name: Customer last name
            phone: Customer phone; 10-digit numbers get the store's country code
            address1: Shipping street address
            city: Shipping city
            country: Shipping country
            line_items: Products — list of {variant_id, quantity} or {title, price, quantity}
            email: Customer email (optional)
            province: Shipping province/state (optional)
            zip: Postal code (optional)
            note: Order note (optional)
            note_attributes: Extra note attributes as {name: value} (optional)
            tags: Order tags (optional)

        Returns:
            Created order, plus the customer ID and whether it was created
        """
        # Step 1: validate everything before the first call to Shopify
        missing_fields = missing_customer_fields(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            address1=address1,
            city=city,
            country=country,
        )
        if missing_fields:
            return tool_error(
                f"Faltan datos del cliente: {', '.join(missing_fields)}",
                InvalidInputError.code,
                missing_fields=missing_fields,
            )

        normalized_phone = normalize_phone(phone)
        items = line_items_payload(line_items)
        address = {
            "first_name": first_name,
            "last_name": last_name,
            "address1": address1,
            "city": city,
            "province": province,
            "country": country,
            "zip": zip,
            "phone": normalized_phone,
        }

        # Step 2: find or create the customer
        customer, customer_created = await find_or_create_customer(
            {
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "phone": normalized_phone,
            },
            address,
        )
        customer_id = customer.get("id")
        if customer_id is None:
            logger.error("Shopify returned a customer without an id; order not created")
            raise ShopifyResponseError()

        # Step 3: create the order
        contact = {"phone": normalized_phone}
        if email:
            contact["email"] = email
        body = {
            "order": {
                "customer": {"id": customer_id},
                "line_items": items,
                "shipping_address": address,
                "email": email,
                "phone": normalized_phone,
                "note": note,
                "note_attributes": merge_note_attributes(contact, note_attributes),
                "tags": merge_tags("", tags),
                "financial_status": "pending",
            }
        }
        try:
            raw = await api_post("orders", body)
        except ShopifyToolError as exc:
            if customer_created:
                logger.warning(
                    "Order creation failed after creating customer %s; customer left in place",
                    customer_id,
                )
            return tool_error(
                f"Error al crear el pedido: {exc.message}",
                exc.code,
                customer_id=customer_id,
                customer_created=customer_created,
            )

        order = map_order(raw["order"])
        logger.info("Created order %s for customer %s", order.name, customer_id)
        return tool_result(
            f"Pedido {order.name} creado para {first_name} {last_name} (total {order.total} {order.currency})",
            CreateOrderResult(order=order, customer_id=customer_id, customer_created=customer_created),
        )

    @mcp.tool()
    @handle_tool_errors("Error al actualizar el pedido")
    async def update_order(
        order_id: str,
        note: str | None = None,
        tags: list[str] | None = None,
        note_attributes: dict[str, str | None] | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> CallToolResult:
        """
        Update an order's note, tags, note attributes, email or phone.

        Tags are added to the existing ones. Note attributes are merged into
        the existing ones; an attribute set to null is removed.

        Args:
            order_id: Numeric order ID or gid://shopify/Order/<id>
            note: New order note (optional)
            tags: Tags to add (optional)
            note_attributes: Attributes to set as {name: value} (optional)
            email: New contact email (optional)
            phone: New contact phone (optional)

        Returns:
            The updated order
        """
        numeric_id = extract_numeric_id(order_id, "Order")
        if note is None and not tags and not note_attributes and not email and not phone:
            raise InvalidInputError("No hay cambios para aplicar al pedido")
        normalized_phone = normalize_phone(phone) if phone else None

        current = (await api_get(f"orders/{numeric_id}")).get("order") or {}

        changes: dict = {"id": numeric_id}
        if note is not None:
            changes["note"] = note
        if tags:
            changes["tags"] = merge_tags(current.get("tags"), tags)
        if note_attributes:
            changes["note_attributes"] = merge_note_attributes(
                current.get("note_attributes"), note_attributes
            )
        if email:
            changes["email"] = email
        if normalized_phone:
            changes["phone"] = normalized_phone

        raw = await api_put(f"orders/{numeric_id}", {"order": changes})
        order = map_order(raw["order"])
        return tool_result(f"Pedido {order.name} actualizado", OrderResult(found=True, order=order))
