"""
Teams API Module.
Aggregates the teams endpoint routers.
"""
from fastapi import APIRouter

from .crud import router as crud_router
from .members import router as members_router

router = APIRouter()

router.include_router(crud_router, tags=["Teams"])
router.include_router(members_router, tags=["Team Members"])

__all__ = ["router"]
