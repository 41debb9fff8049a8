"""Mapping functions from Shopify JSON to the tools' output models.

Each function takes one entity as returned by Shopify (REST or GraphQL) and
returns a validated model. Missing optional fields become ``None`` (or the
default noted on the function) instead of raising.
"""

from .models import (
    DraftOrderDetail,
    LineItem,
    NoteAttribute,
    OrderCustomer,
    OrderDetail,
    OrderSummary,
    ProductDetail,
    ProductSummary,
    ProductVariant,
    ShippingAddress,
)
from .utilities import summarize_description

UNFULFILLED = "UNFULFILLED"


def _or_none(value):
    """Empty strings and other falsy values (except 0) become ``None``."""
    if value == 0 and not isinstance(value, bool):
        return value
    return value or None


# ──────────────────────────────────────────────
# Products (REST)
# ──────────────────────────────────────────────
def _first_variant_price(product: dict) -> str:
    variants = product.get("variants") or []
    if variants:
        return str(variants[0].get("price") or "0.00")
    return "0.00"


def map_product(product: dict, store_base_url: str) -> ProductSummary:
    image = product.get("image") or {}
    return ProductSummary(
        id=product["id"],
        title=product.get("title") or "",
        price=_first_variant_price(product),
        description=summarize_description(product.get("body_html")),
        image_url=_or_none(image.get("src")),
        product_url=f"{store_base_url}/products/{product.get('handle') or ''}",
    )


def map_product_detail(product: dict, store_base_url: str) -> ProductDetail:
    summary = map_product(product, store_base_url)
    return ProductDetail(
        **summary.model_dump(),
        handle=_or_none(product.get("handle")),
        vendor=_or_none(product.get("vendor")),
        product_type=_or_none(product.get("product_type")),
        status=_or_none(product.get("status")),
        tags=_or_none(product.get("tags")),
        variants=[
            ProductVariant(
                id=v["id"],
                title=_or_none(v.get("title")),
                price=_or_none(v.get("price")),
                sku=_or_none(v.get("sku")),
                inventory_quantity=v.get("inventory_quantity"),
            )
            for v in product.get("variants") or []
        ],
    )


# ──────────────────────────────────────────────
# Shared pieces
# ──────────────────────────────────────────────
def _customer(data: dict | None, camel_case: bool = False) -> OrderCustomer | None:
    if not data:
        return None
    if camel_case:
        first_name, last_name = data.get("firstName"), data.get("lastName")
    else:
        first_name, last_name = data.get("first_name"), data.get("last_name")
    return OrderCustomer(
        id=_or_none(data.get("id")),
        first_name=_or_none(first_name),
        last_name=_or_none(last_name),
        email=_or_none(data.get("email")),
        phone=_or_none(data.get("phone")),
    )


def _shipping_address(data: dict | None) -> ShippingAddress | None:
    if not data:
        return None
    return ShippingAddress(
        address1=_or_none(data.get("address1")),
        city=_or_none(data.get("city")),
        province=_or_none(data.get("province")),
        country=_or_none(data.get("country")),
        zip=_or_none(data.get("zip")),
    )


def _line_items(items: list[dict] | None) -> list[LineItem]:
    return [
        LineItem(
            title=_or_none(item.get("title")),
            quantity=item.get("quantity") or 0,
            price=_or_none(item.get("price")),
            variant_id=item.get("variant_id"),
            sku=_or_none(item.get("sku")),
        )
        for item in items or []
    ]


def _note_attributes(attributes: list[dict] | None) -> list[NoteAttribute]:
    return [
        NoteAttribute(name=attr["name"], value=attr.get("value"))
        for attr in attributes or []
        if attr.get("name")
    ]


# ──────────────────────────────────────────────
# Orders
# ──────────────────────────────────────────────
def map_order_node(node: dict) -> OrderSummary:
    """Order from the GraphQL search. Missing statuses stay ``None``."""
    money = (node.get("totalPriceSet") or {}).get("shopMoney") or {}
    return OrderSummary(
        id=node["id"],
        name=node.get("name") or "",
        created_at=node.get("createdAt") or "",
        financial_status=_or_none(node.get("displayFinancialStatus")),
        fulfillment_status=_or_none(node.get("displayFulfillmentStatus")),
        total=_or_none(money.get("amount")),
        currency=_or_none(money.get("currencyCode")),
        customer=_customer(node.get("customer"), camel_case=True),
        shipping_address=_shipping_address(node.get("shippingAddress")),
    )


def map_order(order: dict) -> OrderDetail:
    """Order from the REST API. A missing fulfillment status reads as ``UNFULFILLED``."""
    fulfillment_status = order.get("fulfillment_status")
    return OrderDetail(
        id=order["id"],
        name=order.get("name") or "",
        email=_or_none(order.get("email")),
        phone=_or_none(order.get("phone")),
        created_at=_or_none(order.get("created_at")),
        financial_status=_or_none(order.get("financial_status")),
        fulfillment_status=fulfillment_status.upper() if fulfillment_status else UNFULFILLED,
        total=_or_none(order.get("total_price")),
        currency=_or_none(order.get("currency")),
        note=_or_none(order.get("note")),
        tags=order.get("tags") or "",
        note_attributes=_note_attributes(order.get("note_attributes")),
        line_items=_line_items(order.get("line_items")),
        customer=_customer(order.get("customer")),
        shipping_address=_shipping_address(order.get("shipping_address")),
        order_status_url=_or_none(order.get("order_status_url")),
    )


# ──────────────────────────────────────────────
# Draft orders
# ──────────────────────────────────────────────
def map_draft_order(draft: dict) -> DraftOrderDetail:
    return DraftOrderDetail(
        id=draft["id"],
        name=draft.get("name") or "",
        status=draft.get("status") or "open",
        email=_or_none(draft.get("email")),
        note=_or_none(draft.get("note")),
        tags=draft.get("tags") or "",
        invoice_url=_or_none(draft.get("invoice_url")),
        total_price=_or_none(draft.get("total_price")),
        currency=_or_none(draft.get("currency")),
        order_id=draft.get("order_id"),
        created_at=_or_none(draft.get("created_at")),
        completed_at=_or_none(draft.get("completed_at")),
        note_attributes=_note_attributes(draft.get("note_attributes")),
        line_items=_line_items(draft.get("line_items")),
    )
