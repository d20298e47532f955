"""
Book endpoints under /api/books.
"""

from fastapi import APIRouter

from .read import router as read_router
from .write import router as write_router

router = APIRouter(tags=["books"])
router.include_router(read_router, prefix="/api/books")
router.include_router(write_router, prefix="/api/books")

__all__ = ["router"]
