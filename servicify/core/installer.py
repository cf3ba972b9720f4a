"""Installer for writing unit files into the systemd unit directory."""

import logging
from pathlib import Path

from ..exceptions import InstallError
from ..utils.constants import SYSTEM_UNIT_DIR, UNIT_SUFFIX

logger = logging.getLogger(__name__)


class UnitInstaller:
    """Writes rendered unit files to a unit directory."""

    UNIT_FILE_MODE = 0o644

    def __init__(self, unit_dir: Path = SYSTEM_UNIT_DIR, create_dir: bool = False):
        """Initialize the installer.

        Args:
            unit_dir: Directory that systemd loads units from
            create_dir: Create unit_dir if it is missing (user units only)
        """
        self.unit_dir = Path(unit_dir)
        self.create_dir = create_dir

    def unit_path(self, name: str) -> Path:
        """Get the path a unit with this name is installed at."""
        return self.unit_dir / f"{name}{UNIT_SUFFIX}"

    def install(self, name: str, content: str) -> Path:
        """Write a unit file, replacing any existing one with the same name.

        Args:
            name: Unit name without suffix
            content: Rendered unit file text

        Returns:
            Path of the installed unit file

        Raises:
            InstallError: If the file cannot be written
        """
        unit_file = self.unit_path(name)
        temp_file = unit_file.with_name(f".{unit_file.name}.tmp")

        try:
            if self.create_dir:
                self.unit_dir.mkdir(parents=True, exist_ok=True)

            if unit_file.exists():
                logger.info(f"Replacing existing unit file {unit_file}")

            # Write to temp file first (atomic write)
            with open(temp_file, 'w') as f:
                f.write(content)
            temp_file.chmod(self.UNIT_FILE_MODE)

            # Move temp to final location
            temp_file.replace(unit_file)

        except OSError as e:
            try:
                temp_file.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug(f"Could not remove {temp_file}: {cleanup_error}")
            reason = e.strerror or str(e)
            logger.debug(f"Install of {unit_file} failed: {e}")
            raise InstallError(unit_file, reason) from e

        logger.info(f"Wrote unit file {unit_file}")
        return unit_file
