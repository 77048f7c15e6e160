"""Configuration management for the Avalon tracker."""

from dataclasses import dataclass
from enum import Enum

from decouple import Choices
from decouple import config


class Environment(Enum):
    """Supported deployment environments."""

    DEVELOPMENT = "development"
    CI = "CI"
    PRODUCTION = "production"


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Config:
    """Configuration for the Avalon tracker."""

    database_url: str = "sqlite:///avalon.db"

    # Environment configuration
    environment: Environment = Environment.DEVELOPMENT

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(
            config("ENVIRONMENT", default="development", cast=Choices(["development", "CI", "production"]))
        )

        return cls(
            database_url=config("DATABASE_URL", default="sqlite:///avalon.db"),
            environment=env,
            log_level=config("LOG_LEVEL", default="INFO", cast=Choices(LOG_LEVELS)),
            log_format=config("LOG_FORMAT", default="text", cast=Choices(["json", "text"])),
        )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == Environment.CI

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def get_database_url(self) -> str:
        """Return the database URL with an async driver selected."""
        scheme, separator, rest = self.database_url.partition("://")
        if not separator:
            raise ValueError(f"Invalid DATABASE_URL: {self.database_url!r}")

        if scheme == "sqlite":
            scheme = "sqlite+aiosqlite"
        elif scheme in ("postgres", "postgresql"):
            # Convert legacy postgres:// as well
            scheme = "postgresql+asyncpg"

        return f"{scheme}://{rest}"
