import logging

from fastapi import HTTPException, status

from .storefront_client import StorefrontClient, get_storefront

logger = logging.getLogger(__name__)


def get_catalog() -> StorefrontClient:
    try:
        return get_storefront()
    except Exception as exc:
        logger.exception("Storefront client initialization failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Storefront client initialization failed",
        ) from exc
