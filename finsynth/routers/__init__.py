"""FastAPI routers for the generator API."""

from .generation import router as generation_router

__all__ = ["generation_router"]
