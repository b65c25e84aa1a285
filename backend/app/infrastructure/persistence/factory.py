"""Database connection factory: selects implementation from config. Only place that imports concrete connections."""
from __future__ import annotations

from backend.app.config.settings import Settings
from backend.app.ports.database_connection import DatabaseConnection
from backend.app.ports.tutorial_repository import TutorialRepository
from backend.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from backend.app.infrastructure.persistence.mongo.mongo_tutorial_repository import MongoTutorialRepository


def create_database_connection(settings: Settings) -> DatabaseConnection:
    backend = settings.database_backend.strip().lower()

    if backend in ("mongo",):
        return MongoConnection(settings)

    raise ValueError(f"Unsupported database backend: {backend}")


def create_tutorial_repository(settings: Settings, database: DatabaseConnection) -> TutorialRepository:
    """Build TutorialRepository for the current database backend. Repository shares the readiness connection."""
    backend = settings.database_backend.strip().lower()

    if backend == "mongo":
        if not isinstance(database, MongoConnection):
            raise ValueError(
                f"Tutorial repository for backend 'mongo' requires MongoConnection, got {type(database).__name__}"
            )
        return MongoTutorialRepository(database)

    raise ValueError(f"Unsupported database backend for tutorial repository: {backend}")
