"""Shared fixtures for the Shopify tool tests.

Provides a FastMCP stand-in that captures the tool functions, and
``AsyncMock`` replacements for the Shopify API helpers so no test touches
the network.
"""

from unittest.mock import AsyncMock, patch

import pytest

from shopify_tools import order as _mod_order
from shopify_tools import order_draft as _mod_order_draft
from shopify_tools import product as _mod_product
from shopify_tools import utilities as _mod_utilities
from shopify_tools.cache import TTLCache


# ── Helpers ───────────────────────────────────────────────────────────────


class _ToolCollector:
    """Minimal stand-in for FastMCP that captures tool functions."""

    def __init__(self):
        self.tools: dict[str, callable] = {}

    def tool(self, **kwargs):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn
        return decorator


class FakeClock:
    """Manually advanced clock for TTLCache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _patch_all(name: str, modules: list):
    m = AsyncMock()
    patches = [patch.object(mod, name, m) for mod in modules]
    for p in patches:
        p.start()
    return m, patches


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _shopify_env(mock_env_vars):
    """Every tool test runs with Shopify configured unless it removes the vars."""
    yield


@pytest.fixture
def tool_collector():
    """Return a fresh _ToolCollector instance."""
    return _ToolCollector()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def product_cache(clock):
    return TTLCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def mock_api_get():
    """Patch ``api_get`` in all tool modules that use it."""
    m, patches = _patch_all("api_get", [_mod_product, _mod_order, _mod_order_draft])
    yield m
    for p in patches:
        p.stop()


@pytest.fixture
def mock_api_post():
    """Patch ``api_post`` in tool modules that use it."""
    m, patches = _patch_all("api_post", [_mod_order, _mod_order_draft])
    yield m
    for p in patches:
        p.stop()


@pytest.fixture
def mock_api_put():
    """Patch ``api_put`` in tool modules that use it."""
    m, patches = _patch_all("api_put", [_mod_order, _mod_order_draft])
    yield m
    for p in patches:
        p.stop()


@pytest.fixture
def mock_api_delete():
    """Patch ``api_delete`` in tool modules that use it."""
    m, patches = _patch_all("api_delete", [_mod_order_draft])
    yield m
    for p in patches:
        p.stop()


@pytest.fixture
def mock_graphql():
    """Patch ``graphql`` in the order tool module."""
    m, patches = _patch_all("graphql", [_mod_order])
    yield m
    for p in patches:
        p.stop()


# ── Pre-registered tool sets ─────────────────────────────────────────────


@pytest.fixture
def product_tools(tool_collector, mock_api_get, product_cache):
    _mod_product.register(tool_collector, product_cache)
    return tool_collector.tools


@pytest.fixture
def order_tools(tool_collector, mock_api_get, mock_api_post, mock_api_put, mock_graphql):
    _mod_order.register(tool_collector)
    return tool_collector.tools


@pytest.fixture
def order_draft_tools(tool_collector, mock_api_get, mock_api_post, mock_api_put, mock_api_delete):
    _mod_order_draft.register(tool_collector)
    return tool_collector.tools


@pytest.fixture
def utility_tools(tool_collector):
    _mod_utilities.register(tool_collector)
    return tool_collector.tools
