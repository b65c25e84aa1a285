"""
Ordered, fail-fast startup for the backend.

The sequence runs once per process:

    START -> CONFIGURING_MIDDLEWARE -> CONNECTING_DB -> MOUNTING_ROUTES -> LISTENING
                                            \\-> TERMINATED

Routes are mounted and the port is bound only after the database answered. A failed
connect is logged and re-raised as ``DatabaseConnectionError``; there is no retry.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Callable, Protocol

from fastapi import FastAPI
from loguru import logger
import uvicorn
from uvicorn.config import LOG_LEVELS

from backend.app.composition import AppDependencies, create_app
from backend.app.constants import (
    BIND_ADDRESS,
    DB_CONNECT_FAILED_MESSAGE,
    DB_CONNECTED_MESSAGE,
    SERVER_LISTENING_MESSAGE,
    SERVER_PORT,
)
from backend.app.core import SERVICE_NAME
from backend.app.core.errors import DatabaseConnectionError
from backend.app.middleware import install_body_parsers, install_cors
from backend.app.routers.mount import mount_routes

_STARTUP_POLL_SECONDS = 0.05


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class BootstrapState(str, Enum):
    START = "START"
    CONFIGURING_MIDDLEWARE = "CONFIGURING_MIDDLEWARE"
    CONNECTING_DB = "CONNECTING_DB"
    MOUNTING_ROUTES = "MOUNTING_ROUTES"
    LISTENING = "LISTENING"
    TERMINATED = "TERMINATED"


class Server(Protocol):
    """What ``listen`` needs from an ASGI server (uvicorn.Server satisfies it)."""

    started: bool

    async def serve(self) -> None: ...


RouteMount = Callable[[FastAPI], None]
ServerFactory = Callable[[FastAPI], Server]


def uvicorn_log_level(level: str) -> str:
    """Translate a loguru level name into one uvicorn accepts; loguru-only names fall back to ``info``."""
    name = level.strip().lower()
    return name if name in LOG_LEVELS else "info"


def build_server(app: FastAPI, log_level: str = "info") -> uvicorn.Server:
    """uvicorn server bound to the fixed address and port. Lifespan is off: the sequencer owns startup."""
    config = uvicorn.Config(
        app,
        host=BIND_ADDRESS,
        port=SERVER_PORT,
        lifespan="off",
        log_level=uvicorn_log_level(log_level),
    )
    return uvicorn.Server(config)


class BootstrapSequencer:
    def __init__(
        self,
        dependencies: AppDependencies,
        app: FastAPI | None = None,
        *,
        route_mount: RouteMount = mount_routes,
        server_factory: ServerFactory | None = None,
    ) -> None:
        self._dependencies = dependencies
        self._app = app or create_app()
        self._route_mount = route_mount
        self._server_factory = server_factory or (
            lambda app: build_server(app, dependencies.settings.log_level)
        )
        self._state = BootstrapState.START

    @property
    def state(self) -> BootstrapState:
        return self._state

    @property
    def app(self) -> FastAPI:
        return self._app

    def configure_middleware(self) -> None:
        self._state = BootstrapState.CONFIGURING_MIDDLEWARE
        install_body_parsers(self._app)
        cors = self._dependencies.settings.enable_cors
        if cors:
            install_cors(self._app)
        _log("middleware_configured", cors=cors)

    async def connect_database(self) -> None:
        self._state = BootstrapState.CONNECTING_DB
        try:
            await self._dependencies.connect()
        except DatabaseConnectionError as e:
            self._state = BootstrapState.TERMINATED
            logger.error("{} {}", DB_CONNECT_FAILED_MESSAGE, e)
            raise
        logger.info(DB_CONNECTED_MESSAGE)
        # Hand the live handle to the persistence layer used by the routes.
        self._app.state.settings = self._dependencies.settings
        self._app.state.database = self._dependencies.database
        self._app.state.tutorial_repository = self._dependencies.tutorial_repository

    def mount_routes(self) -> None:
        if not self._dependencies.connected:
            raise RuntimeError("routes cannot be mounted before the database is connected")
        self._state = BootstrapState.MOUNTING_ROUTES
        self._route_mount(self._app)
        _log("routes_mounted")

    async def listen(self) -> None:
        server = self._server_factory(self._app)
        serve_task = asyncio.create_task(server.serve())
        while not server.started and not serve_task.done():
            await asyncio.sleep(_STARTUP_POLL_SECONDS)
        if server.started:
            self._state = BootstrapState.LISTENING
            logger.info(SERVER_LISTENING_MESSAGE, SERVER_PORT)
        await serve_task

    async def run(self) -> None:
        if self._state != BootstrapState.START:
            raise RuntimeError(f"bootstrap already ran (state {self._state.value})")
        _log("backend_starting")
        self.configure_middleware()
        await self.connect_database()
        try:
            self.mount_routes()
            await self.listen()
        finally:
            _log("backend_stopping")
            await self._dependencies.close()
