"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Store operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the pure functions that consume their results are never async
"""

from datetime import datetime
from typing import Protocol, Sequence


class CafeLike(Protocol):
    """Structural contract for Cafe objects handed back by a store.

    Avoids coupling core ordering to the ORM model.
    """
    id: int
    title: str
    address: str
    picture: str | None
    hours: dict | None
    criteria: list | None
    created_at: datetime


class CafeRepository(Protocol):
    """Contract for cafe persistence - implemented by shell."""
    async def list_all(self) -> Sequence[CafeLike]: ...
    async def list_by_title_substring(
        self, fragment: str,
    ) -> Sequence[CafeLike]: ...
    async def create(self, fields: dict) -> CafeLike: ...
