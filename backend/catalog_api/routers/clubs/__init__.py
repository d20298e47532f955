"""
Club endpoints under /api/clubs.
"""

from fastapi import APIRouter

from .read import router as read_router
from .write import router as write_router

router = APIRouter(tags=["clubs"])
router.include_router(read_router, prefix="/api/clubs")
router.include_router(write_router, prefix="/api/clubs")

__all__ = ["router"]
