"""
Domain Services - Clean Architecture Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access and send notifications.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from catalog_api.services.domain import BookReadService

    # In router
    service = BookReadService(db)
    book = service.find_by_id(book_id)
"""

from .book_service import BookReadService, BookWriteService
from .club_service import ClubReadService, ClubWriteService

__all__ = [
    "BookReadService",
    "BookWriteService",
    "ClubReadService",
    "ClubWriteService",
]
