"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, Limits, BookType, Keyword

    if role in WRITE_ROLES:
        ...

    if book.book_type == BookType.EPUB:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# User Roles (realm roles of the identity provider)
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "admin"
    USER: Final[str] = "user"

    ALL: Final[list[str]] = [ADMIN, USER]


WRITE_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN, Roles.USER})
DELETE_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN})


# =============================================================================
# Enumerations stored in the database
# =============================================================================


class BookType(str, Enum):
    """Edition type of a book."""

    EPUB = "EPUB"
    HARDCOVER = "HARDCOVER"
    PAPERBACK = "PAPERBACK"


class Keyword(str, Enum):
    """
    Closed vocabulary of book keywords.

    Stored together in one JSON column and queried as one boolean search
    flag per value (see catalog_api.services.search.keywords).
    """

    JAVASCRIPT = "JAVASCRIPT"
    TYPESCRIPT = "TYPESCRIPT"
    JAVA = "JAVA"
    PYTHON = "PYTHON"


class StrongFoot:
    """Preferred foot of a player."""

    LEFT: Final[str] = "LEFT"
    RIGHT: Final[str] = "RIGHT"
    BOTH: Final[str] = "BOTH"

    ALL: Final[list[str]] = [LEFT, RIGHT, BOTH]


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # Pagination defaults (page numbers are 0-based internally)
    DEFAULT_PAGE_NUMBER: Final[int] = 0
    DEFAULT_PAGE_SIZE: Final[int] = 5
    MAX_PAGE_SIZE: Final[int] = 100
    # Largest OFFSET the database drivers accept (signed 64-bit)
    MAX_ROW_OFFSET: Final[int] = 2**63 - 1

    # Book
    MAX_RATING: Final[int] = 5
    MAX_TITLE_LENGTH: Final[int] = 40
    MAX_SUBTITLE_LENGTH: Final[int] = 40
    MAX_CAPTION_LENGTH: Final[int] = 32
    MAX_CONTENT_TYPE_LENGTH: Final[int] = 16

    # Club
    MAX_CLUB_NAME_LENGTH: Final[int] = 60
    MAX_CITY_LENGTH: Final[int] = 60
    MAX_STREET_LENGTH: Final[int] = 100
    MAX_HOUSE_NUMBER_LENGTH: Final[int] = 10
    MIN_CAPACITY: Final[int] = 1
    MAX_CAPACITY: Final[int] = 200_000
    MAX_PLAYER_NAME_LENGTH: Final[int] = 40
    MIN_PLAYER_AGE: Final[int] = 16
    MAX_PLAYER_AGE: Final[int] = 60

    # Strings
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_EMAIL_LENGTH: Final[int] = 255
    MAX_PHONE_LENGTH: Final[int] = 30
    MAX_FILENAME_LENGTH: Final[int] = 255


# =============================================================================
# Optimistic locking
# =============================================================================

# Version token as sent in If-Match / ETag: a quoted integer, e.g. "0"
VERSION_PATTERN: Final[str] = r'^"\d{1,3}"$'


# =============================================================================
# Uploads
# =============================================================================

UPLOAD_MIME_TYPES: Final[frozenset[str]] = frozenset({
    "image/png",
    "image/jpeg",
    "video/mp4",
    "video/webm",
    "video/quicktime",
})

DEFAULT_FILE_MIME_TYPE: Final[str] = "image/png"
