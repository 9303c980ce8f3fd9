import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import products

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="Storefront Proxy", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def healthcheck():
    return {"ok": True, "env": settings.env}


app.include_router(products.router, tags=["products"])
