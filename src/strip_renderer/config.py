"""
Renderer Configuration Management

Handles loading and saving the service settings.
Configurations are stored in JSON format for easy editing.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_FILE = Path("renderer.json")
CONFIG_ENV_VAR = "STRIP_RENDERER_CONFIG"


@dataclass
class RendererConfig:
    """Complete renderer configuration."""
    # Server settings
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    api_token: Optional[str] = None  # None disables authentication

    # Rendering settings
    strict_join: bool = True
    preview_scale: int = 8
    max_image_bytes: int = 1024 * 1024
    max_columns: int = 4096
    max_text_length: int = 512

    log_level: str = "INFO"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_token)


def default_config_file() -> Path:
    """Config path from the environment, or the default file name."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_FILE


def load_config(config_file: Optional[Path] = None) -> RendererConfig:
    """
    Load renderer configuration from JSON file.

    Args:
        config_file: Path to the configuration file. Defaults to
            $STRIP_RENDERER_CONFIG or renderer.json.

    Returns:
        RendererConfig object with loaded or default settings.
    """
    config_file = Path(config_file) if config_file else default_config_file()
    config = RendererConfig()

    if not config_file.exists():
        logger.info(f"No config file found at {config_file}, using defaults")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        server = data.get("server", {})
        config.server_host = server.get("host", config.server_host)
        config.server_port = int(server.get("port", config.server_port))
        config.api_token = server.get("api_token", config.api_token)

        render = data.get("render", {})
        config.strict_join = bool(render.get("strict_join", config.strict_join))
        config.preview_scale = int(render.get("preview_scale", config.preview_scale))
        config.max_image_bytes = int(render.get("max_image_bytes", config.max_image_bytes))
        config.max_columns = int(render.get("max_columns", config.max_columns))
        config.max_text_length = int(render.get("max_text_length", config.max_text_length))

        config.log_level = data.get("log_level", config.log_level)

        logger.info(f"Loaded settings from {config_file}")

    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Failed to load config: {e}")
        return RendererConfig()

    return config


def save_config(config: RendererConfig, config_file: Optional[Path] = None) -> bool:
    """
    Save renderer configuration to JSON file.

    Args:
        config: RendererConfig object to save.
        config_file: Path to the configuration file.

    Returns:
        True if saved successfully, False otherwise.
    """
    config_file = Path(config_file) if config_file else default_config_file()
    data = {
        "server": {
            "host": config.server_host,
            "port": config.server_port,
            "api_token": config.api_token,
        },
        "render": {
            "strict_join": config.strict_join,
            "preview_scale": config.preview_scale,
            "max_image_bytes": config.max_image_bytes,
            "max_columns": config.max_columns,
            "max_text_length": config.max_text_length,
        },
        "log_level": config.log_level,
    }

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved settings to {config_file}")
        return True
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False
