"""
Top‑level API router.

Aggregates the domain routers under a single router that ``main``
mounts at ``/api``.
"""

from fastapi import APIRouter

from .endpoints import admin, users

router = APIRouter()

router.include_router(users.router, prefix="/user", tags=["users"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
