"""Cafe ORM - the single persisted resource.

Invariants:
    - id is an autoincrement integer primary key
    - title and address are non-nullable; (title, address) is unique
    - hours and criteria are stored verbatim as JSON (no day-name or time-format checks)
    - created_at set once on insert and never updated

Design Decisions:
    - JSON column for hours/criteria: schemaless documents, portable across
      PostgreSQL and SQLite test databases
    - Unique constraint is the second line of defense behind the store's
      pre-insert existence check
"""

from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cafe_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cafe(Base):
    """Cafe listing: name, address, picture, opening hours, amenity tags."""
    __tablename__ = "cafes"
    __table_args__ = (
        UniqueConstraint("title", "address", name="uq_cafes_title_address"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    hours: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    criteria: Mapped[list | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Cafe id={self.id} title={self.title!r}>"
