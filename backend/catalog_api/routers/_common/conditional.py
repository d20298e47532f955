"""
Conditional requests: ETag on reads, If-Match on writes.

The entity tag is the quoted version number, e.g. "3".
"""

from fastapi import Response, status

from shared.utils.exceptions import PreconditionRequiredError


def etag_for(version: int) -> str:
    return f'"{version}"'


def not_modified(if_none_match: str | None, version: int) -> Response | None:
    """A 304 response if the client already holds the current version."""
    etag = etag_for(version)
    if if_none_match is not None and if_none_match.strip() == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})
    return None


def require_if_match(if_match: str | None) -> str:
    """
    Return the If-Match token.

    Raises:
        PreconditionRequiredError: If the header is missing.
    """
    if if_match is None:
        raise PreconditionRequiredError("If-Match")
    return if_match.strip()
