"""Configuration management for the lifecycle bot."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Environment(str, Enum):
    """Environment enumeration."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Service settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub Configuration
    github_token: str = Field(..., description="GitHub personal access token")
    github_webhook_secret: str = Field(..., description="GitHub webhook secret")
    github_base_url: str = Field("https://api.github.com", description="GitHub API base URL")

    # Bot Configuration
    repo_config_file: str = Field("config.yaml", description="Per-repository bot configuration file")

    # Server Configuration
    host: str = Field("0.0.0.0", description="Server host")
    port: int = Field(8000, description="Server port")
    environment: Environment = Field(Environment.DEVELOPMENT, description="Environment")

    # Logging Configuration
    log_level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    log_format: str = Field("json", description="Log format (json or text)")
    log_file: Optional[str] = Field(None, description="Log file path")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only json and text output are supported."""
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()


class BotConfig(BaseModel):
    """Configuration for one group of repositories.

    ``repos`` holds ``org`` or ``org/repo`` entries; ``excluded_repos`` holds
    ``org/repo`` entries that are skipped even when their org is listed.
    """
    repos: List[str] = Field(default_factory=list)
    excluded_repos: List[str] = Field(default_factory=list)

    def can_apply(self, org: str, full_name: str) -> bool:
        """Check whether this item covers the repository."""
        if full_name in self.excluded_repos:
            return False
        return org in self.repos or full_name in self.repos

    def validate_item(self) -> None:
        """Raise ValueError when the repo filter is malformed."""
        if not self.repos:
            raise ValueError("repos is required")
        for name in self.excluded_repos:
            if len(name.split("/")) != 2:
                raise ValueError(f"invalid excluded repo {name!r}, expected org/repo")


class Configuration(BaseModel):
    """Bot configuration, one item per group of repositories."""
    config_items: List[BotConfig] = Field(default_factory=list)

    def config_for(self, org: str, repo: str) -> Optional[BotConfig]:
        """Return the item covering org/repo, or None.

        An item naming the repository explicitly wins over one that only
        names its org.
        """
        full_name = f"{org}/{repo}"
        org_match = None
        for item in self.config_items:
            if not item.can_apply(org, full_name):
                continue
            if full_name in item.repos:
                return item
            if org_match is None:
                org_match = item
        return org_match

    def validate_items(self) -> None:
        """Validate every configuration item."""
        for index, item in enumerate(self.config_items):
            try:
                item.validate_item()
            except ValueError as e:
                raise ValueError(f"config_items[{index}]: {e}") from e


def load_repo_config(path: str, config: Configuration) -> Configuration:
    """Populate ``config`` from a YAML file.

    A missing file leaves ``config`` empty, so every repository resolves to
    "no config".
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.warning("Repository config file not found", path=path)
        return config

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    loaded = type(config).model_validate(raw)
    loaded.validate_items()
    config.config_items = loaded.config_items

    logger.info(
        "Loaded repository config",
        path=path,
        items=len(config.config_items)
    )
    return config
