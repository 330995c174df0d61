"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PoiSettings(BaseSettings):
    """Point of interest editing configuration"""

    default_language: str = Field(default="he", description="Language written to base tag keys")
    create_comment: str = Field(default="Add POI interface from IHM site.")
    update_comment: str = Field(default="Update POI interface from IHM site.")

    model_config = {"env_prefix": "POI_"}


class OsmSettings(BaseSettings):
    """OSM API gateway configuration"""

    base_url: str = Field(default="https://api.openstreetmap.org")
    timeout_seconds: int = Field(default=30, ge=1, le=300)
    user_agent: str = Field(default="poisync/1.0")

    @property
    def api_url(self) -> str:
        """Versioned API root"""
        return f"{self.base_url.rstrip('/')}/api/0.6"

    model_config = {"env_prefix": "OSM_"}


class SearchIndexSettings(BaseSettings):
    """Search index storage configuration"""

    database_url: str = Field(default="sqlite+aiosqlite:///./poi_index.db")
    echo: bool = Field(default=False)
    max_results: int = Field(default=1000, ge=1, le=10000)

    model_config = {"env_prefix": "SEARCH_INDEX_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="POI Sync Service")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_json: bool = Field(default=True)

    # Nested Settings
    poi: PoiSettings = Field(default_factory=PoiSettings)
    osm: OsmSettings = Field(default_factory=OsmSettings)
    search_index: SearchIndexSettings = Field(default_factory=SearchIndexSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
