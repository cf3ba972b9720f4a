"""Service manager for interacting with systemd via systemctl."""

import subprocess
import logging
from typing import List, Optional, Tuple

from ..utils.constants import DEFAULT_SYSTEMCTL

logger = logging.getLogger(__name__)


class ServiceManager:
    """Runs systemctl commands for a single scope (system or user).

    Output of every command is passed straight through to the caller's
    terminal; only the exit status is inspected.
    """

    def __init__(self, systemctl: str = DEFAULT_SYSTEMCTL, is_user_service: bool = False):
        """Initialize the service manager.

        Args:
            systemctl: systemctl executable name or path
            is_user_service: True to pass --user to every command
        """
        self.systemctl = systemctl
        self.is_user_service = is_user_service

    def reload_daemon(self) -> Tuple[bool, Optional[str]]:
        """Make systemd re-read unit files.

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("daemon-reload")

    def enable_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Enable a systemd service to start on boot.

        Args:
            service_name: Full unit name (e.g. 'myapp.service')

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("enable", service_name)

    def start_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Start a systemd service.

        Args:
            service_name: Full unit name (e.g. 'myapp.service')

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("start", service_name)

    def _build_command(self, action: str, service_name: Optional[str]) -> List[str]:
        cmd = [self.systemctl]

        if self.is_user_service:
            cmd.append("--user")

        cmd.append(action)
        if service_name:
            cmd.append(service_name)

        return cmd

    def _execute_systemctl_action(
        self,
        action: str,
        service_name: Optional[str] = None
    ) -> Tuple[bool, Optional[str]]:
        """Execute a systemctl action (daemon-reload, enable, start).

        Blocks until systemctl exits; no timeout is applied.

        Args:
            action: Systemctl action
            service_name: Unit to act on, None for daemon-wide actions

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        cmd = self._build_command(action, service_name)
        target = service_name or "systemd"
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, check=True)
            logger.info(f"Successfully ran {action} for {target}")
            return True, None

        except subprocess.CalledProcessError as e:
            error_msg = f"systemctl {action} exited with status {e.returncode}"
            logger.debug(f"Failed to {action} {target}: {error_msg}")
            return False, error_msg

        except OSError as e:
            error_msg = f"could not run {self.systemctl}: {e}"
            logger.debug(f"Failed to {action} {target}: {error_msg}")
            return False, error_msg
