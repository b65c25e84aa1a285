"""
Composition root: single place where concrete implementations are wired.

Builds settings, database connection and tutorial repository from config, and the
FastAPI application the bootstrap sequence owns. No DI container library;
wiring is explicit.
"""

from fastapi import FastAPI

from backend.app.config.settings import Settings
from backend.app.ports.database_connection import DatabaseConnection
from backend.app.ports.tutorial_repository import TutorialRepository
from backend.app.infrastructure.persistence.factory import (
    create_database_connection,
    create_tutorial_repository,
)
from backend.app.routers.welcome import welcome_router


class AppDependencies:
    """Holds wired dependencies and their lifecycle. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        database: DatabaseConnection,
        tutorial_repository: TutorialRepository,
    ) -> None:
        self._settings = settings
        self._database = database
        self._tutorial_repository = tutorial_repository
        self._database_connected = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def database(self) -> DatabaseConnection:
        return self._database

    @property
    def tutorial_repository(self) -> TutorialRepository:
        return self._tutorial_repository

    @property
    def connected(self) -> bool:
        return self._database_connected

    async def connect(self) -> None:
        await self._database.connect()
        self._database_connected = True

    async def close(self) -> None:
        if self._database_connected and self._database is not None:
            await self._database.close()
            self._database_connected = False


def create_app_dependencies(settings: Settings | None = None) -> AppDependencies:
    """
    Composition root: build all app dependencies in one place.
    Caller owns lifecycle (connect/close). Database backend is selected from settings.
    """
    _settings = settings or Settings()
    database = create_database_connection(_settings)
    repository = create_tutorial_repository(_settings, database)

    return AppDependencies(
        settings=_settings,
        database=database,
        tutorial_repository=repository,
    )


def create_app() -> FastAPI:
    """Application with only the dependency-free welcome route; everything else is added during bootstrap."""
    app = FastAPI(
        title="Tutorials API",
        version="0.1.0",
    )
    app.include_router(welcome_router)
    return app
