import inspect
from dataclasses import dataclass
from typing import Any

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError
from pymongo.uri_parser import parse_uri

from backend.app.config.settings import Settings
from backend.app.core import SERVICE_NAME
from backend.app.core.errors import DatabaseConnectionError, DatabaseConnectionTimeout
from backend.app.infrastructure.persistence.mongo.constants import DRIVER_OPTIONS, ConnectionState

DEFAULT_MONGO_PORT = 27017

# pymongo rejects a malformed address or option value with these while building the client.
_ADDRESS_ERRORS = (PyMongoError, ValueError, TypeError)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


@dataclass(frozen=True)
class ConnectionTarget:
    """Where the connection points: host/port pairs and database name (credentials dropped)."""

    hosts: tuple[tuple[str, int], ...]
    database: str

    @property
    def host(self) -> str:
        return self.hosts[0][0] if self.hosts else ""

    @property
    def port(self) -> int:
        return self.hosts[0][1] if self.hosts else DEFAULT_MONGO_PORT


def parse_target(url: str, default_database: str) -> ConnectionTarget:
    parsed = parse_uri(url, default_port=DEFAULT_MONGO_PORT)
    return ConnectionTarget(
        hosts=tuple(parsed["nodelist"]),
        database=parsed["database"] or default_database,
    )


class MongoConnection:
    """DatabaseConnection implementation using MongoDB. One connection attempt, no retry."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._state = ConnectionState.PENDING
        self._client: AsyncIOMotorClient | None = None
        self._target: ConnectionTarget | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def target(self) -> ConnectionTarget | None:
        """Parsed address; set once ``connect`` has accepted the URL."""
        return self._target

    @property
    def ready(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def client(self) -> AsyncIOMotorClient:
        if not self._client:
            raise RuntimeError("db_not_connected")
        return self._client

    @property
    def tutorials_collection(self) -> AsyncIOMotorCollection:
        """Mongo collection used for tutorial documents."""
        client = self.client
        return client[self._target.database][self._settings.database_collection]

    async def connect(self) -> None:
        if self._state != ConnectionState.PENDING:
            raise RuntimeError(f"connect not allowed in state {self._state.value}")
        try:
            self._target = parse_target(self._settings.database_url, self._settings.database_name)
            _log("db_connect_attempt", host=self._target.host, port=self._target.port, database=self._target.database)
            self._client = AsyncIOMotorClient(
                self._settings.database_url,
                serverSelectionTimeoutMS=self._settings.database_connection_timeout_ms,
                **DRIVER_OPTIONS,
            )
            await self._client.admin.command("ping")
        except ServerSelectionTimeoutError as e:
            await self._discard()
            _log("db_connect_failed", reason="timeout")
            raise DatabaseConnectionTimeout(
                f"no server at {self._target.host}:{self._target.port} within "
                f"{self._settings.database_connection_timeout_ms}ms"
            ) from e
        except _ADDRESS_ERRORS as e:
            await self._discard()
            _log("db_connect_failed", reason=type(e).__name__)
            raise DatabaseConnectionError(str(e)) from e
        self._state = ConnectionState.CONNECTED
        _log("db_connected")

    async def ping(self) -> bool:
        """Return True if the database responds to ping; False if not connected or any error."""
        if not self._client or not self.ready:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError:
            return False

    async def close(self) -> None:
        await self._release_client()
        if self._state == ConnectionState.CONNECTED:
            self._state = ConnectionState.CLOSED

    async def _discard(self) -> None:
        await self._release_client()
        self._state = ConnectionState.FAILED

    async def _release_client(self) -> None:
        if self._client:
            res = self._client.close()
            if inspect.isawaitable(res):
                await res
            self._client = None
