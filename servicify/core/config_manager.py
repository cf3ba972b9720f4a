"""Configuration manager for loading servicify settings."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from ..models.service import ServiceKind
from ..utils.constants import (
    CONFIG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SERVICE_TYPE,
    DEFAULT_SYSTEMCTL,
    SYSTEM_UNIT_DIR,
    USER_UNIT_DIR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Runtime settings, fixed once at startup.

    Attributes:
        unit_dir: Directory for system units
        user_unit_dir: Directory for per-user units
        systemctl: systemctl executable name or path
        default_type: Service type used when -t is not given
        log_level: Logging level name
        log_file: Optional file to log to in addition to stderr
    """

    unit_dir: Path = SYSTEM_UNIT_DIR
    user_unit_dir: Path = USER_UNIT_DIR
    systemctl: str = DEFAULT_SYSTEMCTL
    default_type: str = DEFAULT_SERVICE_TYPE
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None


class ConfigManager:
    """Loads the YAML configuration file into Settings."""

    STRING_SETTINGS = ("unit_dir", "user_unit_dir", "systemctl", "default_type", "log_level", "log_file")

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_file: Path to the YAML config, defaults to CONFIG_FILE
        """
        self.config_file = Path(config_file) if config_file else CONFIG_FILE
        self.settings: Dict[str, Any] = {}

    def load_config(self) -> bool:
        """Load configuration from file.

        Returns:
            True if config loaded successfully, False if defaults are used
        """
        if not self.config_file.exists():
            logger.debug(f"Config file {self.config_file} not found, using defaults")
            self._load_defaults()
            return False

        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)

            if not data:
                logger.warning("Empty config file, using defaults")
                self._load_defaults()
                return False

            if not self._validate_config(data):
                logger.error("Invalid config file, using defaults")
                self._load_defaults()
                return False

            self.settings = {}
            for key, value in data.get("settings", {}).items():
                if key not in Settings.__dataclass_fields__:
                    logger.warning(f"Ignoring unknown setting: {key}")
                    continue
                if value is None:
                    continue
                self.settings[key] = value
            self._ensure_default_settings()

            logger.debug(f"Loaded settings from {self.config_file}")
            return True

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            self._load_defaults()
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            self._load_defaults()
            return False

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self.settings.get(key, default)

    def get_settings(self) -> Settings:
        """Freeze the loaded settings.

        Returns:
            Settings instance
        """
        log_file = self.settings.get("log_file")
        return Settings(
            unit_dir=Path(self.settings["unit_dir"]).expanduser(),
            user_unit_dir=Path(self.settings["user_unit_dir"]).expanduser(),
            systemctl=str(self.settings["systemctl"]),
            default_type=str(self.settings["default_type"]),
            log_level=str(self.settings["log_level"]).upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )

    def _validate_config(self, data: dict) -> bool:
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict):
            logger.error("Config must be a dictionary")
            return False

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        if "settings" in data and not isinstance(data["settings"], dict):
            logger.error("Settings must be a dictionary")
            return False

        settings = data.get("settings") or {}
        for key in self.STRING_SETTINGS:
            value = settings.get(key)
            if value is not None and not isinstance(value, str):
                logger.error(f"Setting {key} must be a string, got {type(value).__name__}")
                return False

        default_type = settings.get("default_type")
        if default_type is not None and str(default_type).lower() not in ServiceKind.choices():
            logger.error(f"Invalid default_type: {default_type}")
            return False

        return True

    def _load_defaults(self):
        """Load default configuration."""
        self.settings = {}
        self._ensure_default_settings()
        logger.debug("Loaded default configuration")

    def _ensure_default_settings(self):
        """Ensure all default settings exist."""
        defaults = {
            "unit_dir": SYSTEM_UNIT_DIR,
            "user_unit_dir": USER_UNIT_DIR,
            "systemctl": DEFAULT_SYSTEMCTL,
            "default_type": DEFAULT_SERVICE_TYPE,
            "log_level": DEFAULT_LOG_LEVEL,
            "log_file": None,
        }

        for key, value in defaults.items():
            if key not in self.settings:
                self.settings[key] = value
