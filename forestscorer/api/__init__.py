from forestscorer.api.health import router as health_router
from forestscorer.api.score import router as score_router

__all__ = [
    "health_router",
    "score_router",
]
