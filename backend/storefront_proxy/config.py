import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


class Settings(BaseModel):
    shop_domain: str = Field(alias="SHOP_DOMAIN")
    storefront_access_token: str = Field(alias="STOREFRONT_ACCESS_TOKEN")
    api_version: str = Field(default="2025-01", alias="STOREFRONT_API_VERSION")
    best_sellers_collection: str = Field(default="best-sellers", alias="BEST_SELLERS_COLLECTION")
    request_timeout: float = Field(default=10.0, alias="STOREFRONT_TIMEOUT")
    env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=8080, alias="PORT")

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}/api/{self.api_version}/graphql.json"


def _load_dotenv():
    # Load from repo root if present, otherwise rely on environment variables.
    root_env = Path(__file__).resolve().parents[2] / ".env"
    if root_env.exists():
        load_dotenv(root_env)
    else:
        load_dotenv()


@lru_cache()
def get_settings() -> Settings:
    _load_dotenv()
    try:
        return Settings(**os.environ)
    except ValidationError as exc:
        missing = [e["loc"][0] for e in exc.errors() if e["type"] == "missing"]
        if not missing:
            raise RuntimeError(f"Invalid configuration: {exc}") from exc
        detail = f"Missing required environment variables: {', '.join(missing)}"
        raise RuntimeError(detail) from exc
