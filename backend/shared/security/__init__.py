"""
Security module: verification of identity provider tokens and role checks.
"""

from shared.security.auth import (
    verify_jwt,
    extract_roles,
    get_bearer_token,
    current_user,
    require_roles,
    check_roles,
)

__all__ = [
    "verify_jwt",
    "extract_roles",
    "get_bearer_token",
    "current_user",
    "require_roles",
    "check_roles",
]
