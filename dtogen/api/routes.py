from fastapi import APIRouter
from dtogen.api.routes_health import router as health_router
from dtogen.api.routes_dtos import router as dtos_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(dtos_router, tags=["dtos"])
