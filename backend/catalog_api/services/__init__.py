"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services (read and write side per aggregate) - USE THESE
- search/: Search parameters → SQLAlchemy predicates
- events/: Notifications after writes
- pageable: Pagination normalizer

Usage:
    from catalog_api.services.domain import BookReadService
    from catalog_api.services.pageable import create_pageable

    service = BookReadService(db)
    page = service.find({"title": "python"}, create_pageable(number="1", size="5"))
"""

from .pageable import Pageable, Slice, create_pageable

__all__ = [
    "Pageable",
    "Slice",
    "create_pageable",
]
