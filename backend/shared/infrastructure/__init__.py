"""
Infrastructure module: Database, mail and request correlation.

Provides:
- Database sessions and transactions (db.py)
- SMTP mail delivery (mail.py)
- Correlation IDs for logging (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    transaction,
)
from shared.infrastructure.mail import send_mail

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "transaction",
    # mail
    "send_mail",
]
