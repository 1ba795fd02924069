"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

DEFAULT_FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    POKEAPI_URL: str = "https://pokeapi.co/api/v2/pokemon"
    UPSTREAM_TIMEOUT: float = 5.0
    MAX_UPSTREAM_CONNECTIONS: int = 20

    MAX_POKEMON_ID: int = 150
    DEFAULT_BATCH_COUNT: int = 5
    MAX_BATCH_COUNT: int = 50
    BATCH_FAILURE_POLICY: Literal["fail", "partial"] = "fail"

    ALLOWED_ORIGINS: str = "*"
    FRONTEND_DIR: str = str(DEFAULT_FRONTEND_DIR)
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
