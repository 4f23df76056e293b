"""API v1 routes."""

from fastapi import APIRouter

from nas_api.api.v1 import auth, files, health, shares, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(files.router, prefix="/files", tags=["files"])
router.include_router(shares.router, prefix="/samba/shares", tags=["shares"])
