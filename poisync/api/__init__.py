from .poi_endpoints import router as poi_router
from .health_endpoints import router as health_router

__all__ = ["poi_router", "health_router"]
