from __future__ import annotations

from fastapi import APIRouter

from .endpoints.admin import router as admin_router
from .endpoints.health import router as health_router
from .endpoints.info import router as info_router
from .endpoints.root import router as root_router
from .endpoints.stress import router as stress_router

router = APIRouter()

router.include_router(root_router)
router.include_router(health_router)
router.include_router(info_router)
router.include_router(admin_router)
router.include_router(stress_router)
