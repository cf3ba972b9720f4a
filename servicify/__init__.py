"""servicify - turn any command into a supervised systemd service."""

from .utils.constants import APP_VERSION as __version__

__all__ = ["__version__"]
