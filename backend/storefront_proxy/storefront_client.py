import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

import requests

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

PLACEHOLDER_DOMAIN = "your-shop.myshopify.com"


class CatalogError(RuntimeError):
    """The storefront API could not be reached or answered with errors."""


class StorefrontClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.url = settings.graphql_url
        self.timeout = settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "X-Shopify-Storefront-Access-Token": settings.storefront_access_token,
            }
        )

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL document and return its ``data`` object.

        Raises CatalogError on transport failures, non-2xx responses, unparseable
        bodies and GraphQL ``errors``.
        """
        logger.debug("Storefront query %s with %r", query.split("(")[0].strip(), variables)
        try:
            resp = self.session.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise CatalogError(f"Storefront request failed: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise CatalogError(f"Storefront returned non-JSON response (HTTP {resp.status_code})") from exc

        if not isinstance(payload, dict):
            raise CatalogError(f"Storefront returned unexpected payload (HTTP {resp.status_code})")
        errors = payload.get("errors")
        if errors:
            raise CatalogError(json.dumps(errors))
        if not resp.ok:
            raise CatalogError(f"Storefront returned HTTP {resp.status_code}")
        return payload.get("data") or {}


@lru_cache()
def get_storefront() -> StorefrontClient:
    settings = get_settings()
    if settings.shop_domain.strip().lower() == PLACEHOLDER_DOMAIN:
        raise RuntimeError(
            f"SHOP_DOMAIN in .env is still the placeholder ({PLACEHOLDER_DOMAIN}). "
            "Fill in your real shop domain and storefront access token."
        )
    return StorefrontClient(settings)
