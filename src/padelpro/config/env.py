"""Environment variable handling for configuration."""

import os
from typing import Any

from padelpro.config.types import GlobalConfig


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to global config keys
    ENV_MAPPING = {
        'PADELPRO_DB_PATH': 'db_path',
        'PADELPRO_LOG_LEVEL': 'log_level',
        'PADELPRO_LOG_FILE': 'log_file',
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.

        Args:
            config: Configuration dictionary to update
        """
        for env_var, key in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None:
                config[key] = value

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get global configuration from environment."""
        return {
            'db_path': cls.get_env_value('PADELPRO_DB_PATH', 'data/padelpro.db'),
            'log_level': cls.get_env_value('PADELPRO_LOG_LEVEL', 'WARNING'),
            'log_file': cls.get_env_value('PADELPRO_LOG_FILE'),
        }
