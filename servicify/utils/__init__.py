"""Utility functions and constants."""

from .constants import *
from .path_helper import PathHelper

__all__ = ["APP_NAME", "APP_VERSION", "CONFIG_FILE", "SYSTEM_UNIT_DIR", "USER_UNIT_DIR", "PathHelper"]
