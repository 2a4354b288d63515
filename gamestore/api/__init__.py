# gamestore/api/__init__.py
from fastapi import APIRouter
from gamestore.api.routers import account, auth, catalog, checkout, fallback, health, support

API_PREFIX = "/api"


def create_api_router() -> APIRouter:
    api = APIRouter(prefix=API_PREFIX)
    api.include_router(health.router)
    api.include_router(catalog.router)
    api.include_router(auth.router)
    api.include_router(account.router)
    api.include_router(checkout.router)
    api.include_router(support.router)
    #catch-all na koncu
    api.include_router(fallback.router)
    return api
