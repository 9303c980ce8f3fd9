import os
from typing import Any, Dict, List, Optional

import pytest

# Settings are read at import time of the app module.
os.environ.setdefault("SHOP_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("STOREFRONT_ACCESS_TOKEN", "test-token")
os.environ.setdefault("APP_ENV", "test")

from fastapi.testclient import TestClient  # noqa: E402

from storefront_proxy.dependencies import get_catalog  # noqa: E402
from storefront_proxy.main import app  # noqa: E402
from storefront_proxy.models import Variant  # noqa: E402
from storefront_proxy.storefront_client import CatalogError  # noqa: E402


class FakeCatalog:
    """In-memory stand-in for StorefrontClient: returns canned data, records calls."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, error: Optional[str] = None):
        self.data = data or {}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append({"query": query, "variables": variables})
        if self.error:
            raise CatalogError(self.error)
        return self.data


def variant_node(options: Dict[str, str], available: bool = True, **extra) -> Dict[str, Any]:
    node = {
        "availableForSale": available,
        "selectedOptions": [{"name": k, "value": v} for k, v in options.items()],
    }
    node.update(extra)
    return node


def make_variant(options: Dict[str, str], available: bool = True, **extra) -> Variant:
    return Variant.model_validate(variant_node(options, available, **extra))


def product_node(handle: str, option_names: List[str], variants: List[Dict[str, Any]], title: str = None):
    return {
        "title": title or handle.replace("-", " ").title(),
        "handle": handle,
        "options": [{"name": name, "values": []} for name in option_names],
        "variants": {"nodes": variants},
    }


@pytest.fixture()
def classic_jeans() -> Dict[str, Any]:
    return product_node(
        "classic-jeans",
        ["Color", "Waist", "Length"],
        [
            variant_node(
                {"Color": "Black", "Waist": "32", "Length": "34"},
                available=True,
                id="gid://shopify/ProductVariant/1",
                title="Black / 32 / 34",
                price={"amount": "89.0", "currencyCode": "USD"},
            ),
            variant_node(
                {"Color": "Black", "Waist": "32", "Length": "32"},
                available=False,
                id="gid://shopify/ProductVariant/2",
                title="Black / 32 / 32",
                price={"amount": "89.0", "currencyCode": "USD"},
            ),
        ],
        title="Classic Jeans",
    )


@pytest.fixture()
def catalog():
    return FakeCatalog()


@pytest.fixture()
def client(catalog):
    app.dependency_overrides[get_catalog] = lambda: catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
