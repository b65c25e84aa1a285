"""Settings for the backend."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    database_url: str = Field("mongodb://mongo:27017/tutorialsdb", validation_alias="DATABASE_URL")
    database_name: str = Field("tutorialsdb", validation_alias="DATABASE_NAME")
    database_collection: str = Field("tutorials", validation_alias="DATABASE_COLLECTION")
    database_connection_timeout_ms: int = Field(30000, validation_alias="DATABASE_CONNECTION_TIMEOUT_MS")
    database_backend: str = Field("mongo", validation_alias="DATABASE_BACKEND")

    enable_cors: bool = Field(True, validation_alias="ENABLE_CORS")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
