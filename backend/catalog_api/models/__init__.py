"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, VersionedMixin, FileMixin
- book: Book, Title, Illustration, BookFile
- club: Club, Stadium, Player, ClubLogo
"""

# Base classes
from .base import Base, VersionedMixin, FileMixin

# Books
from .book import Book, Title, Illustration, BookFile

# Clubs
from .club import Club, Stadium, Player, ClubLogo

__all__ = [
    # Base
    "Base",
    "VersionedMixin",
    "FileMixin",
    # Books
    "Book",
    "Title",
    "Illustration",
    "BookFile",
    # Clubs
    "Club",
    "Stadium",
    "Player",
    "ClubLogo",
]
