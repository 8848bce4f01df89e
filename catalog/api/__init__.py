"""HTTP boundary: FastAPI routers, handlers and the application factory."""

from .app import configure_logging, create_app

__all__ = ["configure_logging", "create_app"]
