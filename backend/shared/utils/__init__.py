"""
Utilities module: Exceptions, attachment helpers.
"""

from shared.utils.exceptions import (
    NotFoundError,
    InvalidSearchParametersError,
    NoResultsError,
    ValidationError,
    ConflictError,
    AlreadyExistsError,
    VersionInvalidError,
    VersionOutdatedError,
)
from shared.utils.files import sniff_mimetype, content_disposition

__all__ = [
    # exceptions
    "NotFoundError",
    "InvalidSearchParametersError",
    "NoResultsError",
    "ValidationError",
    "ConflictError",
    "AlreadyExistsError",
    "VersionInvalidError",
    "VersionOutdatedError",
    # files
    "sniff_mimetype",
    "content_disposition",
]
