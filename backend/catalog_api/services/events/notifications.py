"""
Notifications about catalog changes.

A mail goes out whenever a book or a club is created. Delivery is
fire-and-forget: it runs after the transaction has committed and its
failures are logged, never raised into the request.

Uses FastAPI BackgroundTasks in request contexts. The _run_async fallback
covers code running outside a request (scripts, tests calling services
directly).
"""

import asyncio
from html import escape
from typing import Optional, TYPE_CHECKING

from shared.config.logging import get_logger
from shared.infrastructure.mail import send_mail

# TYPE_CHECKING import to avoid runtime circular dependency
if TYPE_CHECKING:
    from fastapi import BackgroundTasks

logger = get_logger(__name__)


def _task_error_callback(task: asyncio.Task) -> None:
    """Log errors from fire-and-forget tasks instead of dropping them."""
    try:
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Notification task failed",
                task_name=task.get_name(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
    except asyncio.CancelledError:
        # Task was cancelled, not an error
        pass


def _run_async(coro, task_name: str = "notification") -> None:
    """
    Run an async coroutine from sync code.

    Inside a running loop the coroutine becomes a task with an error
    callback, otherwise it runs to completion on a fresh loop.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(coro)
        return
    task = loop.create_task(coro, name=task_name)
    task.add_done_callback(_task_error_callback)


async def _send_created_mail(entity_type: str, entity_id: int, label: str) -> None:
    subject = f"New {entity_type.lower()} {entity_id}"
    body = f"The {entity_type.lower()} <strong>{escape(label)}</strong> has been created."
    try:
        await send_mail(subject, body)
    except Exception as e:
        logger.error("Failed to send notification", entity_type=entity_type, entity_id=entity_id, error=str(e))


def notify_entity_created(
    entity_type: str,
    entity_id: int,
    label: str,
    background_tasks: Optional["BackgroundTasks"] = None,
) -> None:
    """
    Announce a newly created entity by mail.

    Args:
        entity_type: "Book" or "Club"
        entity_id: ID of the new entity
        label: Human-readable name (book title, club name)
        background_tasks: FastAPI BackgroundTasks dependency (recommended in routes)
    """
    logger.debug("notify_entity_created", entity_type=entity_type, entity_id=entity_id)
    if background_tasks is not None:
        background_tasks.add_task(_send_created_mail, entity_type, entity_id, label)
    else:
        _run_async(
            _send_created_mail(entity_type, entity_id, label),
            task_name=f"notification:CREATED:{entity_type}:{entity_id}",
        )
