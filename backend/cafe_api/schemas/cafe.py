"""Cafe Schemas - request envelope, permitted fields, and response shape.

Invariants:
    - CafeCreate requires the "cafe" envelope; a missing envelope fails validation
    - CafeFields accepts only title, address, picture, hours, criteria;
      any other key is silently dropped (extra="ignore")
    - title/address are optional at this layer: presence is a store rule,
      reported as 422 rather than a request-shape error
    - hours and criteria pass through untouched (no key or format checks)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class CafeFields(BaseModel):
    """Permitted cafe attributes for creation."""
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    address: str | None = None
    picture: str | None = None
    hours: dict[str, Any] | None = None
    criteria: list[str] | None = None


class CafeCreate(BaseModel):
    """POST body: {"cafe": {...}}."""
    model_config = ConfigDict(extra="ignore")

    cafe: CafeFields


class CafeResponse(BaseModel):
    """Public cafe representation (both list and create responses)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    address: str
    picture: str | None = None
    hours: dict[str, Any] | None = None
    criteria: list[str] | None = None
    created_at: datetime
