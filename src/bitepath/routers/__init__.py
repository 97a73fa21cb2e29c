"""API routers for the bitepath application."""

from bitepath.routers.grocery import router as grocery_router

__all__ = [
    "grocery_router",
]
