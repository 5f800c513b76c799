from fastapi import APIRouter

from .health import router as health_router
from .styles import router as styles_router
from .creators import router as creators_router
from .payments import router as payments_router
from .editing import router as editing_router

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router)
api_router.include_router(styles_router)
api_router.include_router(creators_router)
api_router.include_router(payments_router)
api_router.include_router(editing_router)

__all__ = ["api_router"]
