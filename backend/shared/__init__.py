"""
Shared module for common utilities of the catalog backend.

STRUCTURE:
- shared.security: Token verification and role checks
  - auth.py: JWT verification, current_user, require_roles

- shared.infrastructure: Database, mail and request correlation
  - db.py: SQLAlchemy sessions, transaction()
  - mail.py: SMTP delivery via aiosmtplib
  - correlation.py: X-Request-ID middleware

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, BookType, Keyword, limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - files.py: MIME sniffing and Content-Disposition

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, require_roles
    from shared.infrastructure.db import get_db, transaction
    from shared.config.settings import settings
    from shared.config.constants import Roles, BookType
    from shared.utils.exceptions import NotFoundError, VersionOutdatedError
"""
