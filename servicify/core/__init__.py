"""Core functionality for generating and installing systemd services."""

from .builder import ServiceBuilder, normalize_name
from .config_manager import ConfigManager, Settings
from .installer import UnitInstaller
from .lifecycle import LifecycleDriver
from .renderer import UnitRenderer
from .service_manager import ServiceManager

__all__ = [
    "ServiceBuilder",
    "normalize_name",
    "ConfigManager",
    "Settings",
    "UnitInstaller",
    "LifecycleDriver",
    "UnitRenderer",
    "ServiceManager",
]
