"""Root conftest.py — shared fixtures for the entire test suite."""

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Make project modules importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the Shopify env vars to safe test values."""
    monkeypatch.setenv("SHOPIFY_STORE_URL", "test-shop.myshopify.com")
    monkeypatch.setenv("SHOPIFY_API_TOKEN", "shpat_test_token_123")


@pytest.fixture
def missing_env_vars(monkeypatch):
    """Remove the Shopify env vars."""
    monkeypatch.delenv("SHOPIFY_STORE_URL", raising=False)
    monkeypatch.delenv("SHOPIFY_API_TOKEN", raising=False)


# ---------------------------------------------------------------------------
# Shopify fixture JSON
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_products_response():
    """Realistic REST products.json response with two products."""
    return {
        "products": [
            {
                "id": 632910392,
                "title": "Café de Olla 500g",
                "handle": "cafe-de-olla-500g",
                "vendor": "Tostadores del Sur",
                "product_type": "Café",
                "status": "active",
                "tags": "cafe, molido",
                "body_html": (
                    "<p>Café <strong>molido</strong> con canela y piloncillo.</p>\n"
                    "<ul><li>Tueste medio</li><li>Origen: Chiapas</li></ul>"
                    + "<p>" + "Aroma intenso y cuerpo completo. " * 10 + "</p>"
                ),
                "variants": [
                    {"id": 808950810, "title": "500g", "price": "189.00",
                     "sku": "CDO-500", "inventory_quantity": 12},
                    {"id": 808950811, "title": "1kg", "price": "349.00",
                     "sku": "CDO-1000", "inventory_quantity": 4},
                ],
                "image": {"src": "https://cdn.shopify.com/s/files/cafe.jpg"},
            },
            {
                "id": 921728736,
                "title": "Taza de Barro",
                "handle": "taza-de-barro",
                "vendor": "Artesanías Oaxaca",
                "product_type": "Accesorios",
                "status": "active",
                "tags": "",
                "body_html": None,
                "variants": [],
                "image": None,
            },
        ]
    }


@pytest.fixture
def sample_order():
    """Realistic REST order JSON."""
    return {
        "id": 450789469,
        "name": "#1001",
        "email": "ana@example.com",
        "phone": "+525512345678",
        "created_at": "2024-05-01T10:15:00-06:00",
        "financial_status": "pending",
        "fulfillment_status": None,
        "total_price": "378.00",
        "currency": "MXN",
        "note": "Entregar por la tarde",
        "tags": "whatsapp",
        "note_attributes": [
            {"name": "phone", "value": "+525512345678"},
            {"name": "canal", "value": "whatsapp"},
        ],
        "line_items": [
            {"title": "Café de Olla 500g", "quantity": 2, "price": "189.00",
             "variant_id": 808950810, "sku": "CDO-500"},
        ],
        "customer": {
            "id": 207119551,
            "first_name": "Ana",
            "last_name": "López",
            "email": "ana@example.com",
            "phone": "+525512345678",
        },
        "shipping_address": {
            "address1": "Av. Reforma 222",
            "city": "Ciudad de México",
            "province": "CDMX",
            "country": "Mexico",
            "zip": "06600",
        },
        "order_status_url": "https://test-shop.myshopify.com/orders/abc/authenticate",
    }


@pytest.fixture
def sample_order_node():
    """One order node from the GraphQL orders search."""
    return {
        "id": "gid://shopify/Order/450789469",
        "name": "#1001",
        "createdAt": "2024-05-01T16:15:00Z",
        "displayFinancialStatus": "PENDING",
        "displayFulfillmentStatus": "UNFULFILLED",
        "totalPriceSet": {"shopMoney": {"amount": "378.0", "currencyCode": "MXN"}},
        "customer": {"firstName": "Ana", "lastName": "López",
                     "email": "ana@example.com", "phone": "+525512345678"},
        "shippingAddress": {"address1": "Av. Reforma 222", "city": "Ciudad de México",
                            "province": "CDMX", "country": "Mexico", "zip": "06600"},
    }


@pytest.fixture
def sample_draft_order():
    """Realistic REST draft order JSON (open)."""
    return {
        "id": 994118539,
        "name": "#D2",
        "status": "open",
        "email": "ana@example.com",
        "note": "",
        "tags": "",
        "invoice_url": "https://test-shop.myshopify.com/invoices/994118539",
        "total_price": "189.00",
        "currency": "MXN",
        "order_id": None,
        "created_at": "2024-05-02T09:00:00-06:00",
        "completed_at": None,
        "note_attributes": [{"name": "phone", "value": "+525512345678"}],
        "line_items": [
            {"title": "Café de Olla 500g", "quantity": 1, "price": "189.00",
             "variant_id": 808950810, "sku": "CDO-500"},
        ],
    }
