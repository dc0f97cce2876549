"""Seed Loader - resets the cafes table from a JSON array (local file or URL).

Invariants:
    - Every record is parsed through CafeFields (unknown keys dropped) and
      checked for title/address presence and duplicate (title, address)
      pairs before anything is deleted
    - Delete + insert happen in one transaction; a failure commits nothing
    - Not reachable from the HTTP surface

Usage:
    python -m cafe_api.db.seed https://example.org/cafes.json
    cafe-api-seed ./seeds/cafes.json
"""

import asyncio
import json
import logging
from typing import Optional

import httpx
import typer
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from cafe_api.config import Settings, get_settings
from cafe_api.core.errors import CafeValidationError, ErrorContext
from cafe_api.core.validate_cafe import check_required_fields, uniqueness_violation
from cafe_api.infrastructure.database import database_from_settings
from cafe_api.infrastructure.observability import setup_logging
from cafe_api.models.cafe import Cafe
from cafe_api.schemas.cafe import CafeFields

logger = logging.getLogger(__name__)

cli = typer.Typer(
    name="cafe-api-seed",
    help="Replace all cafes with the records from a JSON seed file or URL.",
)


def load_cafe_records(source: str, timeout: float = 30.0) -> list[dict]:
    """Read a JSON array of cafe objects from an http(s) URL or a file path."""
    if source.startswith(("http://", "https://")):
        response = httpx.get(source, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        data = response.json()
    else:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(
            f"Seed source must contain a JSON array, got {type(data).__name__}",
        )
    return data


def _prepare(record: dict) -> dict:
    fields = CafeFields.model_validate(record).model_dump()
    errors = check_required_fields(fields)
    if errors:
        raise CafeValidationError(
            errors,
            ErrorContext(title=fields["title"], address=fields["address"]),
        )
    return fields


def _reject_duplicates(rows: list[dict]) -> None:
    seen: set[tuple[str, str]] = set()
    for row in rows:
        pair = (row["title"], row["address"])
        if pair in seen:
            raise CafeValidationError(
                uniqueness_violation(),
                ErrorContext(title=row["title"], address=row["address"]),
            )
        seen.add(pair)


async def reset_and_seed(session: AsyncSession, records: list[dict]) -> int:
    """Delete every cafe, insert records, commit. Returns rows inserted."""
    rows = [_prepare(record) for record in records]
    _reject_duplicates(rows)
    await session.execute(delete(Cafe))
    session.add_all([Cafe(**row) for row in rows])
    await session.commit()
    return len(rows)


async def _seed(settings: Settings, records: list[dict]) -> int:
    database = database_from_settings(settings)
    try:
        async with database.session() as session:
            return await reset_and_seed(session, records)
    finally:
        await database.dispose()


@cli.command()
def main(
    source: Optional[str] = typer.Argument(
        None, help="Path or http(s) URL of a JSON array of cafes [default: SEED_SOURCE]",
    ),
):
    settings = get_settings()
    source = source or settings.seed_source
    if not source:
        raise typer.BadParameter("pass SOURCE or set SEED_SOURCE")
    setup_logging(settings.log_level, settings.log_format)
    records = load_cafe_records(source)
    count = asyncio.run(_seed(settings, records))
    logger.info("Seeded cafes", extra={"result_count": count})


if __name__ == "__main__":
    cli()
