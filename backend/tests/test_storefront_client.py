from unittest.mock import Mock

import pytest
import requests
from fastapi import HTTPException

from storefront_proxy import config, dependencies, storefront_client
from storefront_proxy.config import Settings
from storefront_proxy.storefront_client import CatalogError, StorefrontClient

SETTINGS = Settings(SHOP_DOMAIN="shop.example.com", STOREFRONT_ACCESS_TOKEN="secret", STOREFRONT_TIMEOUT="5")


def _session(payload=None, status_code=200, json_error=None, post_error=None):
    session = Mock()
    session.headers = {}
    if post_error is not None:
        session.post.side_effect = post_error
        return session
    response = Mock(status_code=status_code, ok=status_code < 400)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session.post.return_value = response
    return session


def test_execute_posts_query_and_returns_data():
    session = _session({"data": {"product": {"handle": "classic-jeans"}}})
    client = StorefrontClient(SETTINGS, session=session)

    data = client.execute("query Q { x }", {"handle": "classic-jeans"})

    assert data == {"product": {"handle": "classic-jeans"}}
    session.post.assert_called_once_with(
        "https://shop.example.com/api/2025-01/graphql.json",
        json={"query": "query Q { x }", "variables": {"handle": "classic-jeans"}},
        timeout=5.0,
    )
    assert session.headers["X-Shopify-Storefront-Access-Token"] == "secret"
    assert session.headers["Content-Type"] == "application/json"


def test_graphql_errors_raise():
    session = _session({"errors": [{"message": "Field 'nope' doesn't exist"}]})
    client = StorefrontClient(SETTINGS, session=session)

    with pytest.raises(CatalogError) as exc_info:
        client.execute("query Q { nope }")
    assert "doesn't exist" in str(exc_info.value)


def test_transport_errors_raise():
    session = _session(post_error=requests.ConnectionError("connection refused"))
    client = StorefrontClient(SETTINGS, session=session)

    with pytest.raises(CatalogError, match="connection refused"):
        client.execute("query Q { x }")


def test_non_json_body_raises():
    session = _session(status_code=503, json_error=ValueError("no json"))
    client = StorefrontClient(SETTINGS, session=session)

    with pytest.raises(CatalogError, match="HTTP 503"):
        client.execute("query Q { x }")


def test_http_error_status_raises():
    session = _session({"data": None}, status_code=401)
    client = StorefrontClient(SETTINGS, session=session)

    with pytest.raises(CatalogError, match="HTTP 401"):
        client.execute("query Q { x }")


@pytest.fixture()
def fresh_caches():
    config.get_settings.cache_clear()
    storefront_client.get_storefront.cache_clear()
    yield
    config.get_settings.cache_clear()
    storefront_client.get_storefront.cache_clear()


def test_placeholder_domain_rejected(monkeypatch, fresh_caches):
    monkeypatch.setenv("SHOP_DOMAIN", "your-shop.myshopify.com")
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", "secret")

    with pytest.raises(RuntimeError, match="placeholder"):
        storefront_client.get_storefront()

    with pytest.raises(HTTPException) as exc_info:
        dependencies.get_catalog()
    assert exc_info.value.status_code == 500


def test_get_storefront_is_cached(monkeypatch, fresh_caches):
    monkeypatch.setenv("SHOP_DOMAIN", "shop.example.com")
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", "secret")

    first = storefront_client.get_storefront()
    assert first is storefront_client.get_storefront()
    assert first.url == "https://shop.example.com/api/2025-01/graphql.json"
