"""Configuration management for the arXiv query client."""

import os
from typing import Optional, List, Literal
from pathlib import Path
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "http://export.arxiv.org/api/query"


def parse_base_url(url: str) -> str:
    """
    Check that an endpoint URL is absolute http(s).

    Args:
        url: Endpoint URL

    Returns:
        The URL unchanged

    Raises:
        ConfigurationError: If the URL cannot serve as a query endpoint
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigurationError(f"Malformed base URL {url!r}: {e}", config_key="base_url")

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"Base URL must be an absolute http(s) URL: {url!r}",
            config_key="base_url"
        )
    if parts.query or parts.fragment:
        raise ConfigurationError(
            f"Base URL must not carry a query or fragment: {url!r}",
            config_key="base_url"
        )
    return url


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="INFO", description="Log level")
    format: Literal["json", "text", "colored"] = Field(
        default="colored",
        description="Log format style"
    )
    file_path: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    max_file_size: int = Field(
        default=10_000_000,  # 10MB
        description="Maximum log file size in bytes"
    )
    backup_count: int = Field(
        default=5,
        description="Number of backup log files to keep"
    )

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="ARXIV_QUERY_LOG_")


class ArxivAPIConfig(BaseSettings):
    """arXiv API configuration settings."""

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Query endpoint of the arXiv API"
    )
    user_agent: str = Field(
        default="arxiv-query/0.1.0",
        description="User agent string for API requests"
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Default per-search deadline in seconds; unset means no deadline"
    )
    max_connections: int = Field(
        default=20,
        ge=1,
        description="Connection pool size of the shared HTTP client"
    )
    max_keepalive_connections: int = Field(
        default=10,
        ge=0,
        description="Idle connections kept alive by the shared HTTP client"
    )

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        try:
            return parse_base_url(v)
        except ConfigurationError as e:
            raise ValueError(e.message)

    model_config = SettingsConfigDict(env_prefix="ARXIV_QUERY_API_")


class ServerConfig(BaseSettings):
    """Settings for the MCP tool server."""

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    default_max_results: int = Field(
        default=10,
        description="max_results used when a tool call does not give one"
    )

    model_config = SettingsConfigDict(env_prefix="ARXIV_QUERY_SERVER_")


class Settings(BaseSettings):
    """Main application settings."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    arxiv_api: ArxivAPIConfig = Field(default_factory=ArxivAPIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Application environment"
    )
    config_file: Optional[str] = Field(
        default=None,
        description="Path to a YAML or JSON configuration file"
    )

    def __init__(self, **kwargs):
        config_file = kwargs.get('config_file') or os.getenv('ARXIV_QUERY_CONFIG_FILE')
        if config_file:
            for key, value in load_config_file(config_file).items():
                if key not in kwargs:
                    kwargs[key] = value

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(env_prefix="ARXIV_QUERY_", case_sensitive=False)


def load_config_file(config_file: str) -> dict:
    """
    Read a YAML or JSON settings file.

    Raises:
        ConfigurationError: If the file is missing, unsupported or unreadable
    """
    import json
    import yaml

    config_path = Path(config_file)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_file}", config_key="config_file")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                file_config = yaml.safe_load(f)
            elif config_path.suffix.lower() == '.json':
                file_config = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported config file format: {config_file}",
                    config_key="config_file"
                )
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error loading config file {config_file}: {e}", config_key="config_file")

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigurationError(
            f"Config file {config_file} must contain a mapping",
            config_key="config_file"
        )
    return file_config


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """
    Get the global settings instance.

    Args:
        reload: Force reload of settings

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None or reload:
        try:
            _settings = Settings()
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")
    return _settings


def reset_settings() -> None:
    """
    Reset the global settings instance.

    This is primarily useful for testing to ensure a clean state.
    """
    global _settings
    _settings = None


def validate_configuration() -> List[str]:
    """
    Validate the current configuration and return any issues.

    Returns:
        List of validation error messages
    """
    errors = []

    try:
        settings = get_settings()

        if settings.arxiv_api.max_keepalive_connections > settings.arxiv_api.max_connections:
            errors.append("max_keepalive_connections cannot exceed max_connections")

        if settings.server.default_max_results <= 0:
            errors.append("default_max_results should be positive")

    except ConfigurationError as e:
        errors.append(f"Configuration validation error: {e}")

    return errors


# Alias for simpler naming
get_config = get_settings
