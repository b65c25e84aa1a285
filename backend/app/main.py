import asyncio
import sys

from loguru import logger

from backend.app.bootstrap import BootstrapSequencer
from backend.app.composition import create_app_dependencies
from backend.app.config.settings import Settings
from backend.app.core import SERVICE_NAME
from backend.app.core.errors import DatabaseConnectionError
from backend.app.core.logging import configure_logging


def _log(event: str, **kwargs) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    sequencer = BootstrapSequencer(create_app_dependencies(settings))
    try:
        asyncio.run(sequencer.run())
    except DatabaseConnectionError:
        sys.exit(1)
    except KeyboardInterrupt:
        _log("backend_interrupted")


if __name__ == "__main__":
    main()
