"""Draft order tools — create, list, get, update, complete and delete draft orders."""

import json
import logging
import re

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from shared.constants import NO_DRAFT_ORDERS_FOUND
from .config import api_delete, api_get, api_post, api_put
from .errors import (
    DraftOrderAlreadyCompletedError,
    InvalidInputError,
    ShopifyAPIError,
    ShopifyNotFoundError,
    ShopifyToolError,
)
from .mappers import map_draft_order
from .models import (
    CompleteDraftOrderResult,
    DeleteDraftOrderResult,
    DraftOrderList,
    DraftOrderResult,
    LineItemInput,
)
from .results import handle_tool_errors, tool_error, tool_result
from .utilities import (
    extract_numeric_id,
    line_items_payload,
    merge_note_attributes,
    merge_tags,
    normalize_phone,
)

DRAFT_STATUSES = ("open", "invoice_sent", "completed")
ALREADY_COMPLETED_PATTERN = re.compile(r"\balready\s+(?:been\s+)?completed\b", re.IGNORECASE)
MAX_LIST_RESULTS = 250

logger = logging.getLogger("shopify_mcp.order_draft")


def _already_completed(draft_order_id: int, order_id: int | None = None) -> CallToolResult:
    exc = DraftOrderAlreadyCompletedError(draft_order_id, order_id)
    logger.info("Draft order %s was already completed (order %s)", draft_order_id, order_id)
    return tool_error(exc.message, exc.code, draft_order_id=draft_order_id, order_id=order_id)


def _says_already_completed(error: ShopifyAPIError) -> bool:
    """Shopify answers 422 with a message about completion when the draft is already done."""
    if error.status_code != 422 or not error.details:
        return False
    return ALREADY_COMPLETED_PATTERN.search(json.dumps(error.details)) is not None


async def _fetch_draft(draft_order_id: int) -> dict:
    return (await api_get(f"draft_orders/{draft_order_id}")).get("draft_order") or {}


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    @handle_tool_errors("Error al crear el pedido borrador")
    async def create_draft_order(
        line_items: list[LineItemInput],
        email: str | None = None,
        phone: str | None = None,
        customer_id: str | None = None,
        note: str = "",
        note_attributes: dict[str, str] | None = None,
        tags: list[str] | None = None,
    ) -> CallToolResult:
        """
        Create a draft order (an unconfirmed order that can still be edited).

        Args:
            line_items: Products — list of {variant_id, quantity} or {title, price, quantity}
            email: Customer email (optional)
            phone: Customer phone, stored as a note attribute (optional)
            customer_id: Existing customer, numeric or gid://shopify/Customer/<id> (optional)
            note: Note (optional)
            note_attributes: Extra note attributes as {name: value} (optional)
            tags: Tags (optional)

        Returns:
            The created draft order with its invoice URL
        """
        draft: dict = {"line_items": line_items_payload(line_items), "note": note}
        if customer_id:
            draft["customer"] = {"id": extract_numeric_id(customer_id, "Customer")}
        if email:
            draft["email"] = email

        contact = {"phone": normalize_phone(phone)} if phone else {}
        attributes = merge_note_attributes(contact, note_attributes)
        if attributes:
            draft["note_attributes"] = attributes
        if tags:
            draft["tags"] = merge_tags("", tags)

        raw = await api_post("draft_orders", {"draft_order": draft})
        result = map_draft_order(raw["draft_order"])
        logger.info("Created draft order %s", result.name)
        return tool_result(
            f"Pedido borrador {result.name} creado (total {result.total_price} {result.currency})",
            DraftOrderResult(found=True, draft_order=result),
        )

    @mcp.tool()
    @handle_tool_errors("Error al obtener pedidos borrador", draft_orders=[])
    async def list_draft_orders(status: str = "open", limit: int = 10) -> CallToolResult:
        """
        List draft orders by status.

        Args:
            status: "open", "invoice_sent" or "completed" (default "open")
            limit: Maximum number of draft orders (default 10, max 250)

        Returns:
            List of draft orders
        """
        if status not in DRAFT_STATUSES:
            raise InvalidInputError(
                f"Estado inválido: {status!r} (usa {', '.join(DRAFT_STATUSES)})"
            )
        limit = max(1, min(limit, MAX_LIST_RESULTS))

        raw = await api_get("draft_orders", {"status": status, "limit": limit})
        drafts = [map_draft_order(d) for d in raw.get("draft_orders") or []]
        output = DraftOrderList(draft_orders=drafts)

        if not drafts:
            return tool_result(NO_DRAFT_ORDERS_FOUND, output)
        return tool_result(
            json.dumps(output.model_dump(mode="json")["draft_orders"], indent=2, ensure_ascii=False),
            output,
        )

    @mcp.tool()
    @handle_tool_errors("Error al obtener el pedido borrador")
    async def get_draft_order(draft_order_id: str) -> CallToolResult:
        """
        Get a draft order by ID.

        Args:
            draft_order_id: Numeric ID or gid://shopify/DraftOrder/<id>

        Returns:
            Draft order details or not-found message
        """
        numeric_id = extract_numeric_id(draft_order_id, "DraftOrder")
        try:
            draft = await _fetch_draft(numeric_id)
        except ShopifyNotFoundError:
            draft = {}

        if not draft:
            return tool_result(
                f"Draft order with ID {numeric_id} not found", DraftOrderResult(found=False)
            )

        result = map_draft_order(draft)
        return tool_result(
            f"Pedido borrador {result.name} ({result.status}), total {result.total_price} {result.currency}",
            DraftOrderResult(found=True, draft_order=result),
        )

    @mcp.tool()
    @handle_tool_errors("Error al actualizar el pedido borrador")
    async def update_draft_order(
        draft_order_id: str,
        note: str | None = None,
        note_attributes: dict[str, str | None] | None = None,
        email: str | None = None,
        tags: list[str] | None = None,
        line_items: list[LineItemInput] | None = None,
    ) -> CallToolResult:
        """
        Update an open draft order. Completed drafts cannot be edited.

        Note attributes are merged into the existing ones (null removes one),
        tags are added, and line_items, when given, replace the current items.

        Args:
            draft_order_id: Numeric ID or gid://shopify/DraftOrder/<id>
            note: New note (optional)
            note_attributes: Attributes to set as {name: value} (optional)
            email: New customer email (optional)
            tags: Tags to add (optional)
            line_items: Replacement products (optional)

        Returns:
            The updated draft order
        """
        numeric_id = extract_numeric_id(draft_order_id, "DraftOrder")
        if note is None and not note_attributes and not email and not tags and not line_items:
            raise InvalidInputError("No hay cambios para aplicar al pedido borrador")
        items = line_items_payload(line_items) if line_items else None

        current = await _fetch_draft(numeric_id)
        if current.get("status") == "completed":
            return _already_completed(numeric_id, current.get("order_id"))

        changes: dict = {"id": numeric_id}
        if note is not None:
            changes["note"] = note
        if note_attributes:
            changes["note_attributes"] = merge_note_attributes(
                current.get("note_attributes"), note_attributes
            )
        if email:
            changes["email"] = email
        if tags:
            changes["tags"] = merge_tags(current.get("tags"), tags)
        if items:
            changes["line_items"] = items

        raw = await api_put(f"draft_orders/{numeric_id}", {"draft_order": changes})
        result = map_draft_order(raw["draft_order"])
        return tool_result(
            f"Pedido borrador {result.name} actualizado",
            DraftOrderResult(found=True, draft_order=result),
        )

    @mcp.tool()
    @handle_tool_errors("Error al completar el pedido borrador")
    async def complete_draft_order(
        draft_order_id: str,
        payment_pending: bool = False,
        tags: list[str] | None = None,
    ) -> CallToolResult:
        """
        Turn a draft order into a real order, then optionally tag that order.

        Steps run one after another and are not rolled back: if tagging
        fails, the order still exists and the result carries tag_error.

        Args:
            draft_order_id: Numeric ID or gid://shopify/DraftOrder/<id>
            payment_pending: True to mark the order as payment pending instead of paid
            tags: Tags to add to the created order (optional)

        Returns:
            The completed draft order and the ID of the created order
        """
        numeric_id = extract_numeric_id(draft_order_id, "DraftOrder")

        # Step 1: refuse drafts that are already completed
        current = await _fetch_draft(numeric_id)
        if current.get("status") == "completed":
            return _already_completed(numeric_id, current.get("order_id"))

        # Step 2: complete
        params = {"payment_pending": "true"} if payment_pending else None
        try:
            raw = await api_put(f"draft_orders/{numeric_id}/complete", params=params)
        except ShopifyAPIError as exc:
            if _says_already_completed(exc):
                return _already_completed(numeric_id)
            raise

        draft = map_draft_order(raw["draft_order"])
        logger.info("Completed draft order %s -> order %s", draft.name, draft.order_id)

        # Step 3: tag the new order
        tags_applied: list[str] = []
        tag_error = None
        if tags and draft.order_id:
            merged = merge_tags(draft.tags, tags)
            try:
                await api_put(
                    f"orders/{draft.order_id}",
                    {"order": {"id": draft.order_id, "tags": merged}},
                )
                tags_applied = [tag.strip() for tag in merged.split(",")]
            except ShopifyToolError as exc:
                logger.warning("Order %s created but tagging failed: %s", draft.order_id, exc.message)
                tag_error = exc.message

        summary = f"Pedido borrador {draft.name} completado; pedido {draft.order_id} creado"
        if tag_error:
            summary += f" (no se pudieron agregar etiquetas: {tag_error})"
        return tool_result(
            summary,
            CompleteDraftOrderResult(
                draft_order=draft,
                order_id=draft.order_id,
                tags_applied=tags_applied,
                tag_error=tag_error,
            ),
        )

    @mcp.tool()
    @handle_tool_errors("Error al eliminar el pedido borrador")
    async def delete_draft_order(draft_order_id: str) -> CallToolResult:
        """
        Delete a draft order by ID.

        Args:
            draft_order_id: Numeric ID or gid://shopify/DraftOrder/<id>

        Returns:
            Whether the draft order was deleted
        """
        numeric_id = extract_numeric_id(draft_order_id, "DraftOrder")
        try:
            await api_delete(f"draft_orders/{numeric_id}")
        except ShopifyNotFoundError:
            return tool_result(
                f"Draft order with ID {numeric_id} not found",
                DeleteDraftOrderResult(draft_order_id=numeric_id, deleted=False),
            )

        logger.info("Deleted draft order %s", numeric_id)
        return tool_result(
            f"Pedido borrador {numeric_id} eliminado",
            DeleteDraftOrderResult(draft_order_id=numeric_id, deleted=True),
        )
