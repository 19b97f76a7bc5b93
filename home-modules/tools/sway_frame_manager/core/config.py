"""Configuration for the sway frame manager.

Settings live in ~/.config/sway-frame-manager/config.json. A missing file
means "use the defaults"; a broken file is an error.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import ConfigurationError


logger = logging.getLogger('swayframe.config')

CONFIG_ENV_VAR = "SWAYFRAME_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config/sway-frame-manager/config.json"
DEFAULT_CLOSING_ACTIONS = ["quit-window", "bury-buffer"]


class SwayFrameConfig(BaseModel):
    """Validated configuration.

    Examples:
        >>> SwayFrameConfig().command_timeout
        5.0
        >>> SwayFrameConfig(command_timeout=None).command_timeout is None
        True
    """

    swaymsg_path: Optional[str] = Field(None, description="swaymsg binary (default: search PATH)")
    socket_path: Optional[str] = Field(None, description="Sway IPC socket, overrides SWAYSOCK")
    command_timeout: Optional[float] = Field(
        5.0, gt=0, description="Seconds to wait for swaymsg; null waits forever"
    )
    closing_actions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CLOSING_ACTIONS),
        description="Client actions that destroy a dedicated window"
    )
    log_level: str = Field("WARNING", description="Log level for the swayframe logger")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


def default_config_path() -> Path:
    """Config file location, honouring $SWAYFRAME_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config(config_file: Optional[Path] = None) -> SwayFrameConfig:
    """Load configuration from disk.

    Args:
        config_file: Path to config.json (default: default_config_path())

    Returns:
        SwayFrameConfig, with defaults when the file does not exist

    Raises:
        ConfigurationError: If the file is not valid JSON or fails validation
    """
    if config_file is None:
        config_file = default_config_path()

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return SwayFrameConfig()

    try:
        with config_file.open("r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        raise ConfigurationError(f"Failed to load config: {e}", file_path=str(config_file))

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config root must be a JSON object", file_path=str(config_file), invalid=True
        )

    try:
        config = SwayFrameConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid config: {e}", file_path=str(config_file), invalid=True
        )

    logger.debug(f"Loaded config from {config_file}")
    return config
