from cardranker.api.cards import router as cards_router
from cardranker.api.health import router as health_router
from cardranker.api.rankings import router as rankings_router
from cardranker.api.view import router as view_router

__all__ = [
    "cards_router",
    "health_router",
    "rankings_router",
    "view_router",
]
