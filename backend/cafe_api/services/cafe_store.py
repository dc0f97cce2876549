"""Cafe Store - schema checks and persistence for the cafe resource.

Invariants:
    - list_all / list_by_title_substring return storage-native order (callers sort)
    - Title search is a case-insensitive substring match on title only;
      "%" and "_" in the fragment match literally
    - create() either commits exactly one row or raises CafeValidationError
      with nothing written
    - (title, address) uniqueness: existence check before insert, unique
      constraint at commit; both surface as the same validation error
    - Transport failures are not caught here

Design Decisions:
    - Validation failure raised as an exception (mapped to 422 by the global
      handler) instead of returned, matching how every other error leaves the shell
    - Accepts a plain dict so the seed loader and routes share one write path
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cafe_api.core.errors import CafeValidationError, ErrorContext
from cafe_api.core.validate_cafe import (
    check_required_fields, merge_errors, uniqueness_violation,
)
from cafe_api.models.cafe import Cafe

logger = logging.getLogger(__name__)

PERMITTED_FIELDS: tuple[str, ...] = (
    "title", "address", "picture", "hours", "criteria",
)


class CafeStore:
    """SQLAlchemy-backed implementation of CafeRepository."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[Cafe]:
        result = await self._db.execute(select(Cafe))
        return list(result.scalars().all())

    async def list_by_title_substring(self, fragment: str) -> list[Cafe]:
        result = await self._db.execute(
            select(Cafe).where(
                Cafe.title.icontains(fragment, autoescape=True),
            ),
        )
        return list(result.scalars().all())

    async def create(self, fields: dict) -> Cafe:
        """Validate and insert a cafe. Raises CafeValidationError."""
        permitted = {name: fields.get(name) for name in PERMITTED_FIELDS}
        context = ErrorContext(
            title=permitted["title"], address=permitted["address"],
        )

        errors = check_required_fields(permitted)
        if not errors and await self._exists(
            permitted["title"], permitted["address"],
        ):
            errors = merge_errors(errors, uniqueness_violation())
        if errors:
            raise CafeValidationError(errors, context)

        cafe = Cafe(**permitted)
        self._db.add(cafe)
        try:
            await self._db.commit()
        except IntegrityError as e:
            # Concurrent insert won the race between check and commit
            await self._db.rollback()
            context.debug_info = {"constraint": "uq_cafes_title_address"}
            logger.warning(
                "Unique constraint rejected cafe insert",
                extra={"error_code": "UNIQUE_CONSTRAINT"},
            )
            raise CafeValidationError(uniqueness_violation(), context) from e

        await self._db.refresh(cafe)
        logger.info("Cafe created", extra={"cafe_id": cafe.id})
        return cafe

    async def _exists(self, title: str, address: str) -> bool:
        result = await self._db.execute(
            select(Cafe.id).where(
                Cafe.title == title, Cafe.address == address,
            ).limit(1),
        )
        return result.scalar_one_or_none() is not None
