"""Shared configuration and Shopify Admin API helpers for the MCP tools."""

import json
import logging
import os

import httpx
from dotenv import load_dotenv

from shared.constants import ERROR_UPSTREAM_UNREACHABLE
from .errors import (
    ShopifyAPIError,
    ShopifyConfigError,
    ShopifyConnectionError,
    ShopifyNotFoundError,
    ShopifyResponseError,
)

load_dotenv()

SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2024-04")
SHOPIFY_TIMEOUT = float(os.getenv("SHOPIFY_TIMEOUT", "15"))
DEFAULT_COUNTRY_CODE = os.getenv("DEFAULT_COUNTRY_CODE", "52")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "")

logger = logging.getLogger("shopify_mcp.api")


def _normalize_store(store_url: str) -> str:
    """``https://my-shop.myshopify.com/`` -> ``my-shop.myshopify.com``."""
    store = store_url.strip()
    for scheme in ("https://", "http://"):
        if store.startswith(scheme):
            store = store[len(scheme):]
    return store.rstrip("/")


def get_credentials() -> tuple[str, str]:
    """Return ``(store_host, access_token)`` or raise ShopifyConfigError.

    Read on every call so a missing variable is reported per request
    instead of crashing the server at import time.
    """
    store_url = os.getenv("SHOPIFY_STORE_URL", "")
    api_token = os.getenv("SHOPIFY_API_TOKEN", "").strip()
    if not store_url.strip() or not api_token:
        logger.error("Shopify variables are not configured (SHOPIFY_STORE_URL / SHOPIFY_API_TOKEN)")
        raise ShopifyConfigError()
    return _normalize_store(store_url), api_token


def store_base_url() -> str:
    """Public storefront base URL, e.g. ``https://my-shop.myshopify.com``."""
    store, _ = get_credentials()
    return f"https://{store}"


def rest_url(store: str, path: str) -> str:
    return f"https://{store}/admin/api/{SHOPIFY_API_VERSION}/{path.strip('/')}.json"


def graphql_url(store: str) -> str:
    return f"https://{store}/admin/api/{SHOPIFY_API_VERSION}/graphql.json"


def _status_error(resp: httpx.Response, label: str) -> ShopifyAPIError:
    """Build the error for a non-2xx response, keeping Shopify's ``errors`` body."""
    reason = resp.reason_phrase or str(resp.status_code)
    details = None
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        details = payload.get("errors", payload)

    message = f"{label}: {reason}"
    if details:
        message = f"{message} - {json.dumps(details, ensure_ascii=False)}"

    error_cls = ShopifyNotFoundError if resp.status_code == 404 else ShopifyAPIError
    return error_cls(message, status_code=resp.status_code, details=details)


async def _request(
    method: str,
    url: str,
    token: str,
    params: dict | None = None,
    body: dict | None = None,
    label: str = "Error de Shopify",
) -> dict:
    headers = {
        "X-Shopify-Access-Token": token,
        "Content-Type": "application/json",
    }
    logger.debug("%s %s params=%s", method, url, params)

    try:
        async with httpx.AsyncClient(timeout=SHOPIFY_TIMEOUT, follow_redirects=True) as client:
            resp = await client.request(method, url, headers=headers, params=params, json=body)
    except httpx.RequestError as exc:
        logger.warning("%s %s failed: %s", method, url, exc.__class__.__name__)
        raise ShopifyConnectionError(
            f"{ERROR_UPSTREAM_UNREACHABLE} ({str(exc) or exc.__class__.__name__})"
        ) from exc

    if resp.is_error:
        logger.warning("%s %s -> %d %s", method, url, resp.status_code, resp.reason_phrase)
        raise _status_error(resp, label)

    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError as exc:
        logger.error("%s %s returned a non-JSON body", method, url)
        raise ShopifyResponseError() from exc


async def api_get(path: str, params: dict | None = None) -> dict:
    """Helper for GET requests to the Shopify REST Admin API."""
    store, token = get_credentials()
    return await _request("GET", rest_url(store, path), token, params=params)


async def api_post(path: str, body: dict) -> dict:
    """Helper for POST requests to the Shopify REST Admin API."""
    store, token = get_credentials()
    return await _request("POST", rest_url(store, path), token, body=body)


async def api_put(path: str, body: dict | None = None, params: dict | None = None) -> dict:
    """Helper for PUT requests to the Shopify REST Admin API."""
    store, token = get_credentials()
    return await _request("PUT", rest_url(store, path), token, params=params, body=body)


async def api_delete(path: str) -> dict:
    """Helper for DELETE requests to the Shopify REST Admin API."""
    store, token = get_credentials()
    return await _request("DELETE", rest_url(store, path), token)


async def graphql(query: str, variables: dict | None = None) -> dict:
    """Run a GraphQL Admin API query and return its ``data`` object.

    Raises:
        ShopifyAPIError: on a non-2xx status or when the body carries ``errors``
    """
    store, token = get_credentials()
    payload = await _request(
        "POST",
        graphql_url(store),
        token,
        body={"query": query, "variables": variables or {}},
        label="Error de Shopify GraphQL",
    )
    if payload.get("errors"):
        raise ShopifyAPIError(
            f"Error en la consulta GraphQL: {json.dumps(payload['errors'], ensure_ascii=False)}",
            details=payload["errors"],
        )
    return payload.get("data") or {}
