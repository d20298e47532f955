"""
Authentication and authorization utilities.

Access tokens are issued by the identity provider (a Keycloak realm); this
backend never signs tokens. It only verifies signature, issuer, audience and
expiry, and reads the realm and client roles from the claims.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import jwt
from fastapi import Depends, Header

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.exceptions import ForbiddenError, UnauthorizedError

logger = get_logger(__name__)


def extract_roles(payload: dict[str, Any]) -> set[str]:
    """
    Collect the roles of a token.

    Realm roles live in realm_access.roles, client roles in
    resource_access.<audience>.roles. A flat "roles" claim is accepted too.
    """
    roles: set[str] = set(payload.get("roles") or [])
    realm_access = payload.get("realm_access") or {}
    roles.update(realm_access.get("roles") or [])
    resource_access = payload.get("resource_access") or {}
    client_access = resource_access.get(settings.jwt_audience) or {}
    roles.update(client_access.get("roles") or [])
    return roles


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token of the identity provider.

    Returns:
        Decoded claims, with the collected roles under "roles".

    Raises:
        UnauthorizedError: If the token is invalid or expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_verification_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            leeway=settings.jwt_leeway_seconds,
            options={"require": ["exp", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError("Invalid token", reason=str(e))

    payload["roles"] = sorted(extract_roles(payload))
    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        UnauthorizedError: If header is missing or malformed.
    """
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()


def current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from the bearer token.

    Usage:
        @router.get("/me")
        def me(user: dict = Depends(current_user)):
            return {"username": user.get("preferred_username")}
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)


def require_roles(*allowed: str) -> Callable[..., dict[str, Any]]:
    """
    Build a dependency that requires at least one of the allowed roles.

    Usage:
        @router.delete("/{book_id}")
        def delete_book(user: dict = Depends(require_roles("admin"))):
            ...
    """
    allowed_roles = frozenset(allowed)

    def dependency(user: dict[str, Any] = Depends(current_user)) -> dict[str, Any]:
        check_roles(user, allowed_roles)
        return user

    return dependency


def check_roles(user: dict[str, Any], allowed: Iterable[str]) -> None:
    """
    Verify that the user has at least one of the allowed roles.

    Raises:
        ForbiddenError: If user lacks required role.
    """
    allowed = set(allowed)
    if not set(user.get("roles", [])) & allowed:
        raise ForbiddenError(
            f"perform this action (requires role: {', '.join(sorted(allowed))})",
            user=user.get("preferred_username") or user.get("sub"),
        )
