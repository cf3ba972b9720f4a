"""Application constants and configuration."""

from pathlib import Path
from types import MappingProxyType

# Application metadata
APP_NAME = "servicify"
APP_VERSION = "1.0.0"

# Paths
CONFIG_DIR = Path.home() / ".config" / "servicify"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# systemd locations
SYSTEM_UNIT_DIR = Path("/etc/systemd/system")
USER_UNIT_DIR = Path.home() / ".config" / "systemd" / "user"
UNIT_SUFFIX = ".service"

# Default settings
DEFAULT_SYSTEMCTL = "systemctl"
DEFAULT_SERVICE_TYPE = "simple"
DEFAULT_LOG_LEVEL = "INFO"

# Characters that cannot appear in a unit name; each maps to "-"
NAME_SUBSTITUTIONS = str.maketrans({
    " ": "-",
    "/": "-",
    "\\": "-",
    ".": "-",
})

# Restart policy written into every unit
RESTART_POLICY = MappingProxyType({
    "restart": "always",
    "restart_sec": 5,
})

# [Unit] / [Install] targets
AFTER_TARGET = "network.target"
SYSTEM_WANTED_BY = "multi-user.target"
USER_WANTED_BY = "default.target"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
