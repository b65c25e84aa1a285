import pytest

from backend.app.composition import AppDependencies, create_app_dependencies
from backend.app.config.settings import Settings
from backend.app.infrastructure.persistence.factory import create_database_connection, create_tutorial_repository
from backend.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from backend.app.infrastructure.persistence.mongo.mongo_tutorial_repository import MongoTutorialRepository
from tests.conftest import FakeDatabase, FakeTutorialRepository


def test_create_app_dependencies_wires_mongo_backend():
    dependencies = create_app_dependencies(Settings())
    assert isinstance(dependencies.database, MongoConnection)
    assert isinstance(dependencies.tutorial_repository, MongoTutorialRepository)
    assert dependencies.connected is False


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "ENABLE_CORS", "DATABASE_CONNECTION_TIMEOUT_MS", "DATABASE_BACKEND"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.database_url == "mongodb://mongo:27017/tutorialsdb"
    assert settings.database_collection == "tutorials"
    assert settings.database_connection_timeout_ms == 30000
    assert settings.enable_cors is True


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mongodb://localhost:27017/other")
    monkeypatch.setenv("ENABLE_CORS", "false")
    settings = Settings()
    assert settings.database_url == "mongodb://localhost:27017/other"
    assert settings.enable_cors is False


def test_factory_builds_mongo_components():
    settings = Settings()
    database = create_database_connection(settings)
    assert isinstance(database, MongoConnection)
    assert isinstance(create_tutorial_repository(settings, database), MongoTutorialRepository)


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_database_connection(Settings(database_backend="sqlite"))


def test_mongo_repository_requires_mongo_connection():
    with pytest.raises(ValueError):
        create_tutorial_repository(Settings(), FakeDatabase())


@pytest.mark.asyncio
async def test_dependencies_close_only_after_connect():
    database = FakeDatabase()
    dependencies = AppDependencies(
        settings=Settings(),
        database=database,
        tutorial_repository=FakeTutorialRepository(),
    )

    await dependencies.close()
    assert database.closed is False

    await dependencies.connect()
    assert dependencies.connected is True
    await dependencies.close()
    assert database.closed is True
    assert dependencies.connected is False
