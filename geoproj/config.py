from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal
from functools import lru_cache
import logging
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Explicitly load .env file to ensure environment variables are available
load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Geometry construction
    DEFAULT_SRID: int = Field(
        default=4326,
        description="SRID given to geometries built without an explicit SRID (WGS84 geodetic)"
    )

    # Transformer handling
    CACHE_TRANSFORMERS: bool = Field(
        default=False,
        description="Reuse transformers per (source, target) CRS pair instead of building one per request"
    )
    TRANSFORMER_CACHE_SIZE: int = Field(default=32, description="Maximum number of cached transformers")

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level used by setup_logging"
    )
    LOG_FORMAT: Literal["json", "development"] = Field(
        default="development",
        description="Structured JSON logs or human-readable development logs"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        extra="ignore"
    )

    @field_validator('CACHE_TRANSFORMERS', mode='before')
    @classmethod
    def parse_boolean(cls, v):
        """Handle string boolean values from environment variables."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on', 't', 'y')
        return bool(v)

    @field_validator('LOG_LEVEL', 'LOG_FORMAT', mode='before')
    @classmethod
    def normalize_case(cls, v, info):
        if isinstance(v, str):
            return v.upper() if info.field_name == 'LOG_LEVEL' else v.lower()
        return v


def validate_configuration(settings: Settings) -> None:
    """Check settings that pydantic types alone cannot express."""
    if settings.DEFAULT_SRID < 0:
        raise ConfigurationError("DEFAULT_SRID", f"must be >= 0, got {settings.DEFAULT_SRID}")
    if settings.TRANSFORMER_CACHE_SIZE < 1:
        raise ConfigurationError(
            "TRANSFORMER_CACHE_SIZE", f"must be >= 1, got {settings.TRANSFORMER_CACHE_SIZE}"
        )
    if settings.CACHE_TRANSFORMERS:
        logger.debug(f"Transformer cache enabled (size {settings.TRANSFORMER_CACHE_SIZE})")


@lru_cache()
def get_settings() -> Settings:
    """Load and validate settings once per process."""
    settings = Settings()
    validate_configuration(settings)
    return settings
