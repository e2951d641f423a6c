"""
Application configuration.

Loads settings from environment variables and the ``.env`` file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        host: Interface the listener binds to.
        port: Listening port (``PORT``).
        api_key: Shared secret expected in ``x-api-key`` (``API_KEY``).
            When unset every supplied key is rejected.
        require_api_key: Guard mutating routes with the ``x-api-key`` check.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        cors_origins: Origins allowed by the CORS middleware.
        seed: Start with the sample products loaded.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "product-api"
    version: str = "0.1.0"
    host: str = "127.0.0.1"
    port: int = 3000
    api_key: Optional[str] = None
    require_api_key: bool = True
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    seed: bool = True


def get_settings() -> Settings:
    return Settings()
