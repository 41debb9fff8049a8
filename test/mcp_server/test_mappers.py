"""Tests for shopify_tools/mappers.py — Shopify JSON to output models."""

from shared.constants import NO_DESCRIPTION
from shopify_tools.mappers import (
    map_draft_order,
    map_order,
    map_order_node,
    map_product,
    map_product_detail,
)

BASE_URL = "https://test-shop.myshopify.com"


class TestProductMapping:

    def test_minimal_product(self):
        product = map_product({"id": 1, "title": "X", "handle": "x"}, BASE_URL)

        assert product.price == "0.00"
        assert product.description == NO_DESCRIPTION
        assert product.image_url is None
        assert product.product_url == f"{BASE_URL}/products/x"

    def test_detail_keeps_summary_fields(self, sample_products_response):
        raw = sample_products_response["products"][0]

        detail = map_product_detail(raw, BASE_URL)

        assert detail.id == raw["id"]
        assert detail.price == "189.00"
        assert detail.variants[1].inventory_quantity == 4
        assert detail.tags == "cafe, molido"

    def test_empty_tags_become_none(self, sample_products_response):
        detail = map_product_detail(sample_products_response["products"][1], BASE_URL)

        assert detail.tags is None
        assert detail.variants == []


class TestOrderMapping:

    def test_graphql_node(self, sample_order_node):
        order = map_order_node(sample_order_node)

        assert order.name == "#1001"
        assert order.created_at == "2024-05-01T16:15:00Z"
        assert order.customer.last_name == "López"
        assert order.shipping_address.zip == "06600"

    def test_graphql_node_empty_strings_become_none(self, sample_order_node):
        node = dict(sample_order_node, displayFinancialStatus="",
                    customer={"firstName": "", "lastName": None, "email": "a@b.c", "phone": None})

        order = map_order_node(node)

        assert order.financial_status is None
        assert order.customer.first_name is None
        assert order.customer.email == "a@b.c"

    def test_rest_order_fulfillment_default(self, sample_order):
        assert map_order(sample_order).fulfillment_status == "UNFULFILLED"

    def test_rest_order_fulfillment_uppercased(self, sample_order):
        order = map_order(dict(sample_order, fulfillment_status="partial"))

        assert order.fulfillment_status == "PARTIAL"

    def test_rest_order_fields(self, sample_order):
        order = map_order(sample_order)

        assert order.total == "378.00"
        assert order.customer.id == 207119551
        assert [a.name for a in order.note_attributes] == ["phone", "canal"]
        assert order.line_items[0].sku == "CDO-500"

    def test_rest_order_missing_collections(self):
        order = map_order({"id": 5, "name": "#5"})

        assert order.note_attributes == []
        assert order.line_items == []
        assert order.customer is None
        assert order.tags == ""


class TestDraftOrderMapping:

    def test_open_draft(self, sample_draft_order):
        draft = map_draft_order(sample_draft_order)

        assert draft.status == "open"
        assert draft.order_id is None
        assert draft.note is None
        assert draft.line_items[0].variant_id == 808950810

    def test_status_defaults_to_open(self):
        assert map_draft_order({"id": 1, "name": "#D1"}).status == "open"
