"""Listing Order - newest-first ordering applied after the store returns rows.

Invariants:
    - Sorted by created_at descending, ties broken by id descending
    - Input sequence is never mutated
"""

from typing import Iterable, TypeVar

from cafe_api.core.repository_protocols import CafeLike

T = TypeVar("T", bound=CafeLike)


def newest_first(cafes: Iterable[T]) -> list[T]:
    return sorted(cafes, key=lambda c: (c.created_at, c.id), reverse=True)
