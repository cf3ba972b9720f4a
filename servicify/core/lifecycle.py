"""Lifecycle driver that takes an installed unit to enabled and running."""

import logging
from typing import Callable, List, Tuple

from ..exceptions import LifecycleError
from ..models.service import UnitState
from .service_manager import ServiceManager

logger = logging.getLogger(__name__)


class LifecycleDriver:
    """Runs daemon-reload, enable and start in order.

    Each step moves the unit one state forward. The first failing step
    raises LifecycleError; earlier steps are not undone, so a failed start
    leaves the unit installed and enabled.
    """

    def __init__(self, service_manager: ServiceManager, state: UnitState = UnitState.WRITTEN):
        """Initialize the driver.

        Args:
            service_manager: ServiceManager used to run systemctl
            state: State the unit is in before the first step
        """
        self.service_manager = service_manager
        self.state = state

    def _steps(self, unit_name: str) -> List[Tuple[str, Callable, UnitState]]:
        return [
            ("reload", self.service_manager.reload_daemon, UnitState.RELOADED),
            ("enable", lambda: self.service_manager.enable_service(unit_name), UnitState.ENABLED),
            ("start", lambda: self.service_manager.start_service(unit_name), UnitState.RUNNING),
        ]

    def bring_up(self, unit_name: str) -> UnitState:
        """Reload systemd, then enable and start the unit.

        Args:
            unit_name: Full unit name (e.g. 'myapp.service')

        Returns:
            The final state, UnitState.RUNNING

        Raises:
            LifecycleError: If any step fails
        """
        if self.state is not UnitState.WRITTEN:
            raise LifecycleError(
                "reload",
                f"cannot bring up {unit_name} from state {self.state.value}",
                state=self.state,
            )

        for step, action, next_state in self._steps(unit_name):
            success, error_msg = action()
            if not success:
                logger.debug(f"{unit_name} stopped at state {self.state.value}")
                raise LifecycleError(step, f"{step} failed for {unit_name}: {error_msg}", state=self.state)

            self.state = next_state
            logger.debug(f"{unit_name} is now {self.state.value}")

        return self.state
