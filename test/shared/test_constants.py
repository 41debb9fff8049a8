"""Tests for shared/constants.py — user-facing message constants."""

import pytest

from shared import constants

MESSAGES = [
    "ERROR_NOT_CONFIGURED",
    "ERROR_UNKNOWN",
    "ERROR_UNPARSEABLE_RESPONSE",
    "ERROR_DRAFT_ALREADY_COMPLETED",
    "ERROR_UPSTREAM_UNREACHABLE",
    "NO_DESCRIPTION",
    "NO_ORDERS_FOUND",
    "NO_DRAFT_ORDERS_FOUND",
]


@pytest.mark.parametrize("name", MESSAGES)
def test_message_is_nonempty_string(name):
    value = getattr(constants, name)
    assert isinstance(value, str)
    assert value.strip()


def test_messages_are_distinct():
    values = [getattr(constants, name) for name in MESSAGES]
    assert len(values) == len(set(values))


def test_no_description_matches_product_listing_default():
    assert constants.NO_DESCRIPTION == "Sin descripción"
