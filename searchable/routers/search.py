"""Relevance search router.

Exposes ``GET /search/{resource}?q=...`` for every model registered with
``register_searchable``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from searchable.core.exceptions import SearchConfigurationError, UnknownResourceError
from searchable.db.session import get_db
from searchable.models.searchable import SearchableMixin
from searchable.repositories.search_repository import SearchRepository
from searchable.schemas.search_api import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

_registry: dict[str, type[SearchableMixin]] = {}


def register_searchable(resource: str, model: type[SearchableMixin]) -> None:
    _registry[resource] = model


def unregister_searchable(resource: str) -> None:
    _registry.pop(resource, None)


def get_searchable(resource: str) -> type[SearchableMixin]:
    try:
        return _registry[resource]
    except KeyError:
        raise UnknownResourceError(resource) from None


@router.get("/{resource}", response_model=SearchResponse)
def search_resource(
    resource: str,
    q: str = Query(default=""),
    threshold: Optional[float] = Query(default=None, description="Minimum relevance; defaults to a quarter of the searched weight"),
    entire_text: bool = Query(default=False),
    entire_text_only: bool = Query(default=False),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> SearchResponse:
    try:
        model = get_searchable(resource)
    except UnknownResourceError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"unknown resource: {resource}")

    try:
        results = SearchRepository(db).search(
            model,
            q,
            threshold=threshold,
            entire_text=entire_text,
            entire_text_only=entire_text_only,
            limit=limit,
            offset=offset,
        )
    except SearchConfigurationError:
        logger.exception("search configuration error for resource %s", resource)
        raise HTTPException(status_code=500, detail="search is misconfigured")
    except SQLAlchemyError:
        logger.exception("Failed to search %s", resource)
        raise HTTPException(status_code=500, detail="failed to search")

    return SearchResponse(resource=resource, query=q, count=len(results), results=results)
