import logging

import uvicorn

from .config import get_settings

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting storefront proxy on port %d", settings.port)
    uvicorn.run("storefront_proxy.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
