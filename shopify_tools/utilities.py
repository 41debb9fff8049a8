"""Input normalization helpers and the customer verification tool."""

import html
import re

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import ValidationError

from shared.constants import NO_DESCRIPTION
from .config import DEFAULT_COUNTRY_CODE
from .errors import InvalidInputError
from .models import CustomerVerificationResult, LineItemInput, NoteAttribute
from .results import handle_tool_errors, tool_result

GID_PREFIX = "gid://shopify/"
DESCRIPTION_LIMIT = 150

REQUIRED_CUSTOMER_FIELDS = ("first_name", "last_name", "phone", "address1", "city", "country")

_TAG_RE = re.compile(r"<[^>]*>?")
_WHITESPACE_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"[0-9]+")


# ──────────────────────────────────────────────
# Text
# ──────────────────────────────────────────────
def strip_html(value: str | None) -> str:
    if not value:
        return ""
    return html.unescape(_TAG_RE.sub("", value))


def summarize_description(body_html: str | None, limit: int = DESCRIPTION_LIMIT) -> str:
    """Plain-text product description: tags removed, whitespace collapsed, cut to ``limit`` chars.

    The ``"..."`` suffix is always appended, matching what the product
    listing has always returned.
    """
    text = _WHITESPACE_RE.sub(" ", strip_html(body_html)).strip()
    if not text:
        return NO_DESCRIPTION
    return text[:limit] + "..."


# ──────────────────────────────────────────────
# Identifiers and phones
# ──────────────────────────────────────────────
def extract_numeric_id(value: int | str | None, resource: str | None = None) -> int:
    """Return the numeric ID from ``123``, ``"123"`` or ``"gid://shopify/Order/123"``.

    Args:
        value: Raw identifier from the tool input
        resource: Expected GID resource type (e.g. "Order"); checked when given

    Raises:
        InvalidInputError: if nothing numeric is left after removing the GID prefix
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"Identificador inválido: {value!r}")
    if isinstance(value, int):
        if value <= 0:
            raise InvalidInputError(f"Identificador inválido: {value!r}")
        return value

    text = str(value).strip()
    if text.startswith(GID_PREFIX):
        kind, _, text = text[len(GID_PREFIX):].partition("/")
        if resource and kind != resource:
            raise InvalidInputError(
                f"Identificador inválido: se esperaba un {resource}, se recibió {kind or '?'}"
            )

    if not _DIGITS_RE.fullmatch(text):
        raise InvalidInputError(f"Identificador inválido: {value!r}")
    return int(text)


def normalize_phone(phone: str | None, country_code: str | None = None) -> str:
    """Normalize a phone number to ``+<digits>``.

    A 10-digit local number gets the default country code; anything else
    only gets a leading ``+`` when it does not already have one.
    """
    cleaned = re.sub(r"[^\d+]", "", phone or "")
    digits = cleaned[1:] if cleaned.startswith("+") else cleaned
    if not _DIGITS_RE.fullmatch(digits):
        raise InvalidInputError(f"Número de teléfono inválido: {phone!r}")

    if cleaned.startswith("+"):
        return cleaned
    if len(digits) == 10:
        return f"+{country_code or DEFAULT_COUNTRY_CODE}{digits}"
    return f"+{digits}"


# ──────────────────────────────────────────────
# Note attributes and tags
# ──────────────────────────────────────────────
def _attribute_pairs(attributes) -> list[tuple[str, str | None]]:
    if not attributes:
        return []
    if isinstance(attributes, dict):
        return list(attributes.items())

    pairs = []
    for attr in attributes:
        if isinstance(attr, NoteAttribute):
            pairs.append((attr.name, attr.value))
        elif attr.get("name"):
            pairs.append((attr["name"], attr.get("value")))
    return pairs


def merge_note_attributes(existing, updates) -> list[dict]:
    """Merge ``updates`` into ``existing`` note attributes.

    Existing order is kept, matching names are overwritten, new names are
    appended and names whose new value is ``None`` are removed. Both sides
    may be a ``{name: value}`` dict or a list of ``{"name", "value"}`` items.
    """
    merged: dict[str, str | None] = dict(_attribute_pairs(existing))
    for name, value in _attribute_pairs(updates):
        if value is None:
            merged.pop(name, None)
        else:
            merged[name] = str(value)
    return [{"name": name, "value": value} for name, value in merged.items()]


def merge_tags(existing: str | None, new: list[str] | str | None) -> str:
    """Comma-joined union of tags, first occurrence wins."""
    if isinstance(new, str):
        new = new.split(",")
    tags = []
    for tag in (existing or "").split(",") + list(new or []):
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return ", ".join(tags)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    location = ".".join(str(part) for part in err["loc"])
    return f"{location}: {err['msg']}" if location else err["msg"]


def line_items_payload(items) -> list[dict]:
    """REST ``line_items`` for an order or draft order.

    Raises:
        InvalidInputError: empty list, or an item with neither a variant nor title + price
    """
    if not items:
        raise InvalidInputError("Se requiere al menos un producto (line_items)")

    payload = []
    for item in items:
        if not isinstance(item, LineItemInput):
            try:
                item = LineItemInput.model_validate(item)
            except ValidationError as exc:
                raise InvalidInputError(f"Producto inválido: {_first_error(exc)}") from exc
        if item.variant_id is not None:
            payload.append({
                "variant_id": extract_numeric_id(item.variant_id, "ProductVariant"),
                "quantity": item.quantity,
            })
        elif item.title and item.price:
            payload.append({"title": item.title, "price": item.price, "quantity": item.quantity})
        else:
            raise InvalidInputError("Cada producto necesita variant_id, o title y price")
    return payload


def missing_customer_fields(**values) -> list[str]:
    return [
        field for field in REQUIRED_CUSTOMER_FIELDS
        if values.get(field) is None
        or (isinstance(values.get(field), str) and values[field].strip() == "")
    ]


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    @handle_tool_errors("Error al verificar el cliente")
    async def verify_customer(
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
        address1: str | None = None,
        city: str | None = None,
        country: str | None = None,
        email: str | None = None,
        province: str | None = None,
        zip: str | None = None,
    ) -> CallToolResult:
        """
        Check that the customer details needed to place an order are complete.

        Does not call Shopify. The same check runs inside create_order.

        Args:
            first_name: Customer first name
            last_name: Customer last name
            phone: Customer phone; 10-digit numbers get the store's country code
            address1: Street address
            city: City
            country: Country
            email: Customer email (optional)
            province: Province/state (optional)
            zip: Postal code (optional)

        Returns:
            Verification status, missing fields and the normalized phone
        """
        missing_fields = missing_customer_fields(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            address1=address1,
            city=city,
            country=country,
        )

        normalized_phone = None
        if "phone" not in missing_fields:
            try:
                normalized_phone = normalize_phone(phone)
            except InvalidInputError:
                missing_fields.append("phone")

        is_valid = len(missing_fields) == 0
        if is_valid:
            message = "Customer verification passed. All required fields are present."
        else:
            message = f"Customer verification failed. Missing fields: {', '.join(missing_fields)}"

        return tool_result(
            message,
            CustomerVerificationResult(
                is_valid=is_valid,
                missing_fields=missing_fields,
                normalized_phone=normalized_phone,
                message=message,
            ),
        )
