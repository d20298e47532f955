"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from catalog_api.repositories import BookRepository

    repo = BookRepository(db)
    books = repo.find_page(clauses, offset=0, limit=5)
    book = repo.find_by_id(123, with_illustrations=True)
"""

from .base import BaseRepository
from .book import BookRepository
from .club import ClubRepository

__all__ = [
    "BaseRepository",
    "BookRepository",
    "ClubRepository",
]
