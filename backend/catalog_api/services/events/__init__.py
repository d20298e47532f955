"""
Event Services - Side effects of catalog writes.

Provides:
- Mail notification when a book or a club is created
"""

from .notifications import notify_entity_created

__all__ = [
    "notify_entity_created",
]
