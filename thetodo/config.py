"""
Configuration management for The Todo client.

Loads settings from config.ini with environment variable overrides.
Provides centralized configuration for the HTTP gateway and the
identity storage backend.
"""

import configparser
import os
from pathlib import Path
from typing import Optional, Dict, Any

from thetodo.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".thetodo"
DEFAULT_SERVER_URL = "http://127.0.0.1:3000"
DEFAULT_TIMEOUT = 10.0

STORAGE_BACKENDS = ("file", "database", "memory")


class Config:
    """Application configuration manager."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config file, defaults to ~/.thetodo/config.ini
        """
        self.config_path = config_path or self._default_config_path()
        self._config = configparser.ConfigParser()
        self._load()

    def _default_config_path(self) -> Path:
        """Get default config path."""
        return DEFAULT_DATA_DIR / "config.ini"

    def _load(self):
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                self._config.read(self.config_path)
                logger.info(f"Loaded configuration from {self.config_path}")
            except configparser.Error as e:
                logger.warning(f"Failed to read config file: {e}. Using defaults.")
        else:
            logger.debug(f"Config file not found at {self.config_path}. Using defaults.")

    def get_server_config(self) -> Dict[str, Any]:
        """
        Get remote server configuration with environment overrides.

        Environment variables take precedence over config file:
        - THETODO_SERVER_URL
        - THETODO_REQUEST_TIMEOUT

        Returns:
            Dictionary with base_url and timeout (seconds)
        """
        base_url = (
            os.getenv('THETODO_SERVER_URL') or
            self._config.get('server', 'base_url', fallback=DEFAULT_SERVER_URL)
        )
        timeout_raw = (
            os.getenv('THETODO_REQUEST_TIMEOUT') or
            self._config.get('server', 'timeout', fallback=str(DEFAULT_TIMEOUT))
        )
        try:
            timeout = float(timeout_raw)
        except ValueError:
            logger.warning(f"Invalid request timeout {timeout_raw!r}, using {DEFAULT_TIMEOUT}")
            timeout = DEFAULT_TIMEOUT

        config = {
            'base_url': base_url.rstrip('/'),
            'timeout': timeout,
        }

        logger.debug(f"Server config: base_url={config['base_url']}, timeout={config['timeout']}")

        return config

    def get_storage_config(self) -> Dict[str, Any]:
        """
        Get identity storage configuration with environment overrides.

        Environment variables take precedence over config file:
        - THETODO_STORAGE_BACKEND (file/database/memory)
        - THETODO_DATA_DIR

        Returns:
            Dictionary with backend name and data directory
        """
        backend = (
            os.getenv('THETODO_STORAGE_BACKEND') or
            self._config.get('storage', 'backend', fallback='file')
        ).lower()
        if backend not in STORAGE_BACKENDS:
            logger.warning(f"Unknown storage backend {backend!r}, using 'file'")
            backend = 'file'

        data_dir = (
            os.getenv('THETODO_DATA_DIR') or
            self._config.get('storage', 'data_dir', fallback=str(DEFAULT_DATA_DIR))
        )

        config = {
            'backend': backend,
            'data_dir': Path(data_dir).expanduser(),
        }

        logger.debug(f"Storage config: backend={config['backend']}, data_dir={config['data_dir']}")

        return config
