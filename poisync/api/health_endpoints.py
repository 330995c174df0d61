from fastapi import APIRouter

from poisync.config.settings import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    settings = get_settings()
    return {"status": "ok", "data": {"app": settings.app_name, "version": settings.app_version}, "error": None}
