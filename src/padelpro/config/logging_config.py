"""Logging configuration types and loading utilities."""

import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class FileConfig:
    """File logging configuration."""
    enabled: bool = False
    path: str = "logs/padelpro.log"
    max_size_mb: int = 10
    backup_count: int = 5
    json: bool = False

@dataclass
class ConsoleConfig:
    """Console logging configuration."""
    enabled: bool = True
    color: bool = True

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    error_threshold: int = 5
    time_threshold: int = 300
    categorize_by: list[str] = field(default_factory=lambda: ['service'])

@dataclass
class LoggingConfig:
    """Complete logging configuration."""
    default_level: str = "WARNING"
    verbose_level: str = "DEBUG"
    file: FileConfig = field(default_factory=FileConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    error_aggregation: ErrorAggregationConfig = field(default_factory=ErrorAggregationConfig)
    libraries: dict[str, str] = field(default_factory=dict)

def _section(config_dict: dict[str, Any], key: str) -> dict[str, Any]:
    value = config_dict.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Logging section '{key}' must be a mapping")
    return value

def load_logging_config(config_path: str | Path | None = None) -> LoggingConfig:
    """Load logging configuration from a YAML file.

    Missing files and missing keys fall back to the dataclass defaults.
    """
    if config_path is None:
        config_path = os.path.join(os.path.dirname(__file__), 'logging_config.yaml')

    if not os.path.exists(config_path):
        return LoggingConfig()

    with open(config_path, encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    return LoggingConfig(
        default_level=config_dict.get('default_level', 'WARNING'),
        verbose_level=config_dict.get('verbose_level', 'DEBUG'),
        file=FileConfig(**_section(config_dict, 'file')),
        console=ConsoleConfig(**_section(config_dict, 'console')),
        error_aggregation=ErrorAggregationConfig(**_section(config_dict, 'error_aggregation')),
        libraries=dict(config_dict.get('libraries') or {}),
    )
