"""
API routers package.

Contains the /api routes: to-dos and resources.
"""

from fastapi import APIRouter

from restdemo.api.routers.resources import router as resources_router
from restdemo.api.routers.todos import router as todos_router

router = APIRouter()
router.include_router(todos_router)
router.include_router(resources_router)

__all__ = ["router"]
