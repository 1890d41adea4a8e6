"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ldstore.dao.config import DaoConfig

logger = logging.getLogger(__name__)


class MongoConfig(BaseModel):
    """MongoDB connection parameters, passed through to the Motor client."""

    url: str = "mongodb://localhost:27017"
    database: str = "ldstore"
    app_name: str = "ldstore"

    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000
    socket_timeout_ms: int | None = None  # None: no socket timeout
    max_pool_size: int = 100

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that the MongoDB URL uses a MongoDB scheme."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MongoDB URL must start with mongodb:// or mongodb+srv://")
        return v

    def client_options(self) -> dict:
        """Keyword arguments for AsyncIOMotorClient."""
        options = {
            "appname": self.app_name,
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "connectTimeoutMS": self.connect_timeout_ms,
            "maxPoolSize": self.max_pool_size,
        }
        if self.socket_timeout_ms is not None:
            options["socketTimeoutMS"] = self.socket_timeout_ms
        return options


class Settings(BaseSettings):
    """Main configuration class."""

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    logfire_token: str = ""

    # Directory holding the optional config.yaml overlay
    config_dir: Path = Path(".")

    # Nested configuration sections
    mongodb: MongoConfig = Field(default_factory=MongoConfig)
    dao: DaoConfig = Field(default_factory=DaoConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level and reject unknown names."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("config_dir", mode="after")
    @classmethod
    def resolve_config_dir(cls, v: Path) -> Path:
        """Resolve config directory to absolute path."""
        return v.resolve()

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration over the environment values."""
        config_path = self.config_dir / "config.yaml"

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["mongodb", "dao"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name]

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    new_section = section.__class__(**section_dict)
                    setattr(self, section_name, new_section)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
