"""Route mount point: registers resource endpoints once the database is connected."""
from fastapi import FastAPI

from backend.app.routers.health import health_router
from backend.app.routers.tutorials import tutorial_router


def mount_routes(app: FastAPI) -> None:
    app.include_router(health_router)
    app.include_router(tutorial_router)
