"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file = Path(f".env.{env.value}")

        if env_file.exists():
            return Settings(_env_file=str(env_file), environment=env)

        logger.warning(f"Environment file {env_file} not found, using default settings")
        return Settings(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        return sorted(
            env_file.name.replace(".env.", "")
            for env_file in Path(".").glob(".env.*")
        )


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
