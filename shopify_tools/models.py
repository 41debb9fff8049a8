"""Pydantic models shared across the Shopify MCP tools.

Output models are the tools' declared contracts: every structured result is
validated against one of them before it is returned.
"""

from pydantic import BaseModel, Field


# ── Inputs ──────────────────────────────────────


class LineItemInput(BaseModel):
    """A line item to put on an order or draft order."""
    variant_id: int | str | None = Field(
        default=None, description="Variant ID, numeric or gid://shopify/ProductVariant/<id>"
    )
    quantity: int = Field(default=1, ge=1, description="Units to order")
    title: str | None = Field(default=None, description="Title for a custom item (no variant)")
    price: str | None = Field(default=None, description="Unit price for a custom item")


class NoteAttribute(BaseModel):
    name: str
    value: str | None = None


# ── Products ────────────────────────────────────


class ProductSummary(BaseModel):
    id: int
    title: str
    price: str
    description: str | None = None
    image_url: str | None = None
    product_url: str


class ProductList(BaseModel):
    products: list[ProductSummary]


class ProductVariant(BaseModel):
    id: int
    title: str | None = None
    price: str | None = None
    sku: str | None = None
    inventory_quantity: int | None = None


class ProductDetail(ProductSummary):
    handle: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    status: str | None = None
    tags: str | None = None
    variants: list[ProductVariant] = Field(default_factory=list)


class ProductResult(BaseModel):
    found: bool
    product: ProductDetail | None = None


# ── Orders ──────────────────────────────────────


class OrderCustomer(BaseModel):
    id: int | str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None


class ShippingAddress(BaseModel):
    address1: str | None = None
    city: str | None = None
    province: str | None = None
    country: str | None = None
    zip: str | None = None


class LineItem(BaseModel):
    title: str | None = None
    quantity: int
    price: str | None = None
    variant_id: int | None = None
    sku: str | None = None


class OrderSummary(BaseModel):
    """One row of an order search (GraphQL)."""
    id: str = Field(description="Global ID, e.g. gid://shopify/Order/123")
    name: str
    created_at: str
    financial_status: str | None = None
    fulfillment_status: str | None = None
    total: str | None = None
    currency: str | None = None
    customer: OrderCustomer | None = None
    shipping_address: ShippingAddress | None = None


class OrderList(BaseModel):
    orders: list[OrderSummary]


class OrderDetail(BaseModel):
    """A single order as returned by the REST API."""
    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    created_at: str | None = None
    financial_status: str | None = None
    fulfillment_status: str = Field(description="UNFULFILLED when Shopify reports none")
    total: str | None = None
    currency: str | None = None
    note: str | None = None
    tags: str = ""
    note_attributes: list[NoteAttribute] = Field(default_factory=list)
    line_items: list[LineItem] = Field(default_factory=list)
    customer: OrderCustomer | None = None
    shipping_address: ShippingAddress | None = None
    order_status_url: str | None = None


class OrderResult(BaseModel):
    found: bool
    order: OrderDetail | None = None


class CreateOrderResult(BaseModel):
    order: OrderDetail
    customer_id: int
    customer_created: bool = Field(description="True when a new customer record was created")


# ── Draft orders ────────────────────────────────


class DraftOrderDetail(BaseModel):
    id: int
    name: str
    status: str
    email: str | None = None
    note: str | None = None
    tags: str = ""
    invoice_url: str | None = None
    total_price: str | None = None
    currency: str | None = None
    order_id: int | None = None
    created_at: str | None = None
    completed_at: str | None = None
    note_attributes: list[NoteAttribute] = Field(default_factory=list)
    line_items: list[LineItem] = Field(default_factory=list)


class DraftOrderResult(BaseModel):
    found: bool
    draft_order: DraftOrderDetail | None = None


class DraftOrderList(BaseModel):
    draft_orders: list[DraftOrderDetail]


class CompleteDraftOrderResult(BaseModel):
    draft_order: DraftOrderDetail
    order_id: int | None = None
    tags_applied: list[str] = Field(default_factory=list)
    tag_error: str | None = Field(
        default=None, description="Set when the order was created but tagging it failed"
    )


class DeleteDraftOrderResult(BaseModel):
    draft_order_id: int
    deleted: bool


# ── Utilities ───────────────────────────────────


class CustomerVerificationResult(BaseModel):
    """Result of customer details verification."""
    is_valid: bool = Field(description="Whether all required fields are present")
    missing_fields: list[str] = Field(description="List of missing required fields")
    normalized_phone: str | None = Field(default=None, description="Phone in +<country><number> form")
    message: str = Field(description="Verification status message")
