# gamestore/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gamestore.api.deps import get_metadata_client
from gamestore.data.database import get_db
from gamestore.domain.schemas import (
    ExternalSearchOut,
    GameDetailsOut,
    PopularGameOut,
    ProductOut,
    ProductSuggestionOut,
)
from gamestore.services.catalog_service import CatalogService
from gamestore.services.metadata_client import MetadataClient

router = APIRouter(prefix="/catalog", tags=["catalog"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return get_service(db).list_products()


@router.get("/search", response_model=List[ProductSuggestionOut])
def search(
    q: str = Query(""),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return get_service(db).search(q, limit)


@router.get("/top", response_model=List[ProductOut])
def top_played(limit: int | None = Query(None), db: Session = Depends(get_db)):
    return get_service(db).top(limit)


@router.get("/subscriptions", response_model=List[ProductOut])
def subscriptions(db: Session = Depends(get_db)):
    return get_service(db).subscriptions()


@router.get("/recommended", response_model=ProductOut)
def recommended(db: Session = Depends(get_db)):
    return get_service(db).recommended()


@router.get("/popular", response_model=List[PopularGameOut])
def popular(client: MetadataClient = Depends(get_metadata_client)):
    return client.popular()


@router.get("/external", response_model=ExternalSearchOut)
def external_search(
    search: str = Query(""),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=40),
    client: MetadataClient = Depends(get_metadata_client),
):
    return client.search(search, page=page, page_size=page_size)


@router.get("/{game_id}/details", response_model=GameDetailsOut)
def game_details(game_id: int, client: MetadataClient = Depends(get_metadata_client)):
    return client.game_details(game_id)
