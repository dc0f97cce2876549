"""Cafe Routes - list and create handlers for /api/v1/cafes.

Invariants:
    - GET: non-empty title query filters by substring; empty or absent title lists all
    - GET: results always newest-first, filtered or not (ordering applied here, not in the store)
    - POST: body must carry the "cafe" envelope (missing envelope -> 400 via RequestValidationError)
    - POST: 201 with the created cafe; validation failures raise CafeValidationError -> 422
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cafe_api.core.ordering import newest_first
from cafe_api.core.repository_protocols import CafeRepository
from cafe_api.infrastructure.database import get_db
from cafe_api.schemas.cafe import CafeCreate, CafeResponse
from cafe_api.services.cafe_store import CafeStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cafes", tags=["cafes"])


def get_cafe_store(db: AsyncSession = Depends(get_db)) -> CafeRepository:
    return CafeStore(db)


@router.get("", response_model=list[CafeResponse])
async def list_cafes(
    title: str | None = Query(None),
    store: CafeRepository = Depends(get_cafe_store),
):
    """List cafes, optionally filtered by a case-insensitive title fragment."""
    if title:
        cafes = await store.list_by_title_substring(title)
    else:
        cafes = await store.list_all()
    ordered = newest_first(cafes)
    logger.info(
        "Listed cafes",
        extra={"title_filter": title or None, "result_count": len(ordered)},
    )
    return ordered


@router.post(
    "", response_model=CafeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_cafe(
    body: CafeCreate, store: CafeRepository = Depends(get_cafe_store),
):
    """Create a cafe from the permitted fields of the "cafe" envelope."""
    return await store.create(body.cafe.model_dump())
