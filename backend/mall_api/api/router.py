from __future__ import annotations

from fastapi import APIRouter

from mall_api.api.admin import router as admin_router
from mall_api.api.auth import router as auth_router
from mall_api.api.health import router as health_router
from mall_api.api.members import router as members_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(members_router)
api_router.include_router(admin_router)
