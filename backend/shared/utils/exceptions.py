"""
Centralized HTTP exceptions for consistent error handling.

Every service-level failure is raised as one of these classes so that the
routers never translate errors by hand: FastAPI renders the status code and
detail, and each class logs itself when constructed.

Usage:
    from shared.utils.exceptions import NotFoundError, VersionOutdatedError

    raise NotFoundError("Book", book_id)
    raise VersionOutdatedError(version)
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Book", 123)
        raise NotFoundError("Club")
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"There is no {entity.lower()} with ID {entity_id}."
        else:
            detail = f"{entity} not found."

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class InvalidSearchParametersError(NotFoundError):
    """
    The search contained an unknown parameter name or an unusable value.

    Surfaces as 404 like an empty result, but stays distinguishable for
    callers that catch it.
    """

    def __init__(self, reason: str | None = None, **log_context: Any):
        AppException.__init__(
            self,
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid search parameters",
            log_level="debug",
            reason=reason,
            **log_context,
        )


class NoResultsError(NotFoundError):
    """A valid search or page request matched no rows."""

    def __init__(self, detail: str, **log_context: Any):
        AppException.__init__(
            self,
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="debug",
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("File is empty")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("The resource was changed concurrently")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class AlreadyExistsError(ConflictError):
    """The designated unique attribute of an entity is already taken."""

    def __init__(self, entity: str, field: str, value: str, **log_context: Any):
        self.value = value
        super().__init__(
            f'The {field} "{value}" of the {entity.lower()} already exists.',
            entity=entity,
            field=field,
            **log_context,
        )


class IsbnExistsError(AlreadyExistsError):
    """ISBN of a new book is already in use."""

    def __init__(self, isbn: str, **log_context: Any):
        super().__init__("Book", "ISBN", isbn, **log_context)


class NameExistsError(AlreadyExistsError):
    """Name of a new club is already in use."""

    def __init__(self, name: str, **log_context: Any):
        super().__init__("Club", "name", name, **log_context)


# =============================================================================
# 412 / 428 Precondition Errors (optimistic locking)
# =============================================================================


class PreconditionFailedError(AppException):
    """A conditional request could not be honoured (412)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_412_PRECONDITION_FAILED,
            detail=detail,
            log_level="debug",
            **log_context,
        )


class VersionInvalidError(PreconditionFailedError):
    """The version token does not match the quoted-integer format."""

    def __init__(self, version: str | None, **log_context: Any):
        self.version = version
        super().__init__(f"The version number {version} is invalid.", version=version, **log_context)


class VersionOutdatedError(PreconditionFailedError):
    """The version token does not refer to the current stored version."""

    def __init__(self, version: int, **log_context: Any):
        self.version = version
        super().__init__(f"The version number {version} is not current.", version=version, **log_context)


class PreconditionRequiredError(AppException):
    """A write was sent without the required If-Match header (428)."""

    def __init__(self, header: str = "If-Match", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail=f'Header "{header}" is missing',
            log_level="debug",
            **log_context,
        )


# =============================================================================
# Upload Errors
# =============================================================================


class UnsupportedMediaTypeError(AppException):
    """Declared MIME type of an upload is not accepted (415)."""

    def __init__(self, mimetype: str | None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"The MIME type {mimetype} is not supported.",
            log_level="warning",
            mimetype=mimetype,
            **log_context,
        )


class PayloadTooLargeError(AppException):
    """Upload exceeds the configured size limit (413)."""

    def __init__(self, size: int, max_size: int, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"The file has {size} bytes, at most {max_size} bytes are allowed.",
            log_level="warning",
            size=size,
            max_size=max_size,
            **log_context,
        )


# =============================================================================
# 401 / 403 Authentication Errors
# =============================================================================


class UnauthorizedError(AppException):
    """Missing or invalid bearer token (401)."""

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("delete books")
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )
