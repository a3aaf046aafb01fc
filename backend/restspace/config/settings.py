"""
Configuration Module

Provides centralized configuration management for the application.
Supports YAML config files.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, List
from functools import lru_cache
from pydantic_settings import BaseSettings


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries. Override values take precedence.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config() -> Dict[str, Any]:
    """
    Load configuration from YAML files with local override support.

    Loading order:
    1. Load config.yaml (or config.example.yaml as fallback) as base configuration
    2. If config.local.yaml exists, merge it with base (local values override base)
    3. Return merged configuration

    Returns:
        Dictionary containing all configuration values
    """
    config_dir = Path(__file__).parent
    config_path = config_dir / "config.yaml"

    if not config_path.exists():
        config_path = config_dir / "config.example.yaml"
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found. Please create {config_dir / 'config.yaml'} "
                f"based on {config_dir / 'config.example.yaml'}"
            )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            base_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration: {e}")

    local_config_path = config_dir / "config.local.yaml"
    if local_config_path.exists():
        try:
            with open(local_config_path, 'r', encoding='utf-8') as f:
                local_config = yaml.safe_load(f) or {}
            return deep_merge(base_config, local_config)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing local YAML configuration: {e}")

    return base_config


# Load configuration
_config = load_yaml_config()


# ============================================================================
# Server Configuration
# ============================================================================

class ServerConfig:
    """Server configuration management"""

    _server_config = _config.get("server", {})

    HOST = _server_config.get("host", "127.0.0.1")
    PORT = _server_config.get("port", 8000)
    RELOAD = _server_config.get("reload", False)
    DEBUG = _server_config.get("debug", False)
    CORS_ORIGINS = _server_config.get("cors_origins", ["http://localhost:5173", "http://localhost:3000"])


# ============================================================================
# Workspace Configuration
# ============================================================================

class WorkspaceConfig:
    """Workspace layout configuration"""

    _workspace_config = _config.get("workspace", {})

    BASE_PATH = Path(_workspace_config.get("base_path", "./workspaces"))
    # Directory (inside a workspace) holding the request tree
    REST_DIR = _workspace_config.get("rest_dir", "http")
    METADATA_FILE = _workspace_config.get("metadata_file", "yasumu.json")
    STORE_FILE = Path(_workspace_config.get("store_file", "./data/store.json"))
    HISTORY_LIMIT = _workspace_config.get("history_limit", 10)

    @classmethod
    def ensure_exists(cls):
        """Ensure workspace base directory exists"""
        cls.BASE_PATH.mkdir(parents=True, exist_ok=True)


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Log output configuration"""

    _log_config = _config.get("logging", {})

    LEVEL = _log_config.get("level", "INFO")
    DIR = _log_config.get("dir")
    FILE_NAME = _log_config.get("file_name", "restspace")
    BACKUP_COUNT = _log_config.get("backup_count", 30)

    @classmethod
    def get_level(cls) -> int:
        return logging.getLevelName(str(cls.LEVEL).upper()) if isinstance(cls.LEVEL, str) else cls.LEVEL


# ============================================================================
# Pydantic Settings
# ============================================================================

class Settings(BaseSettings):
    """Application settings with validation"""

    # Application
    app_name: str = "Restspace"
    debug: bool = ServerConfig.DEBUG

    # Workspace
    workspace_base_path: Path = WorkspaceConfig.BASE_PATH
    rest_dir: str = WorkspaceConfig.REST_DIR
    metadata_file: str = WorkspaceConfig.METADATA_FILE
    store_file: Path = WorkspaceConfig.STORE_FILE
    history_limit: int = WorkspaceConfig.HISTORY_LIMIT

    # Server
    host: str = ServerConfig.HOST
    port: int = ServerConfig.PORT
    cors_origins: List[str] = ServerConfig.CORS_ORIGINS

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = [
    "load_yaml_config",
    "deep_merge",
    "ServerConfig",
    "WorkspaceConfig",
    "LogConfig",
    "Settings",
    "get_settings",
]
