import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from .. import queries
from ..config import Settings, get_settings
from ..dependencies import get_catalog
from ..models import (
    BestSellerResponse,
    OptionsResponse,
    Product,
    ProductRef,
    ProductSummary,
    RequestedOptions,
    SearchResponse,
    VariantResponse,
    unwrap_connection,
)
from ..storefront_client import CatalogError, StorefrontClient
from ..variants import (
    aggregate_availability,
    classify_options,
    resolve_variant,
    sort_colors,
    sort_sizes,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _execute(catalog: StorefrontClient, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return catalog.execute(query, variables)
    except CatalogError as exc:
        logger.error("Catalog query failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Catalog error: {exc}",
        ) from exc


def _require_handle(handle: Optional[str]) -> str:
    handle = (handle or "").strip()
    if not handle:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="handle required")
    return handle


def _fetch_product(catalog: StorefrontClient, query: str, handle: str) -> Product:
    data = _execute(catalog, query, {"handle": handle})
    node = data.get("product")
    if not node:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")
    try:
        return Product.model_validate(node)
    except ValidationError as exc:
        logger.error("Malformed product %s from catalog: %s", handle, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Catalog error: malformed product data",
        ) from exc


@router.get("/products/search", response_model=SearchResponse)
def search_products(
    q: Optional[str] = Query(default=None),
    catalog: StorefrontClient = Depends(get_catalog),
):
    term = (q or "").strip()
    if not term:
        return SearchResponse(products=[])

    data = _execute(catalog, queries.SEARCH_PRODUCTS, {"q": queries.title_search(term)})
    nodes = unwrap_connection(data.get("products"))
    products = [ProductSummary.from_node(node) for node in nodes]
    return SearchResponse(products=products)


@router.get("/products/options", response_model=OptionsResponse)
def product_options(
    handle: Optional[str] = Query(default=None),
    color: Optional[str] = Query(default=None),
    catalog: StorefrontClient = Depends(get_catalog),
):
    """
    Colors and sizes currently in stock; sizes narrow to one color when ``color`` is given.
    """
    handle = _require_handle(handle)
    color_filter = (color or "").strip()

    product = _fetch_product(catalog, queries.PRODUCT_OPTIONS, handle)
    keys = classify_options(product.option_names)
    available = aggregate_availability(product.variants, keys, color_filter or None)

    return OptionsResponse(
        product=ProductRef(title=product.title, handle=product.handle),
        has_color=keys.color_key is not None,
        has_size=keys.size_key is not None,
        color_option_name=keys.color_key,
        size_option_name=keys.size_key,
        available_colors=sort_colors(available.colors),
        available_sizes=sort_sizes(available.sizes),
        filtered_by_color=color_filter or None,
    )


@router.get("/products/variant", response_model=VariantResponse)
def product_variant(
    handle: Optional[str] = Query(default=None),
    size: Optional[str] = Query(default=None),
    color: Optional[str] = Query(default=None),
    catalog: StorefrontClient = Depends(get_catalog),
):
    """
    Price and availability of the variant matching ``size``/``color``.

    Out-of-stock variants are still returned; ``variant`` is null when nothing matches.
    """
    handle = _require_handle(handle)
    requested = RequestedOptions(size=(size or "").strip(), color=(color or "").strip())

    product = _fetch_product(catalog, queries.PRODUCT_VARIANTS, handle)
    keys = classify_options(product.option_names)
    match = resolve_variant(product.variants, keys, size=requested.size, color=requested.color)
    if match is None:
        logger.info("No variant of %s matches size=%r color=%r", handle, requested.size, requested.color)

    return VariantResponse(
        product=ProductRef(title=product.title, handle=product.handle),
        requested=requested,
        variant=match,
    )


@router.get("/products/best-seller", response_model=BestSellerResponse)
def best_seller(
    catalog: StorefrontClient = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
):
    collection_handle = settings.best_sellers_collection
    data = _execute(catalog, queries.COLLECTION_TOP_PRODUCT, {"handle": collection_handle})

    collection = data.get("collection") or {}
    nodes = unwrap_connection(collection.get("products"))
    if not nodes:
        return BestSellerResponse(product=None)
    return BestSellerResponse(product=ProductSummary.from_node(nodes[0]))
