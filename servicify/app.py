"""Main application coordinator for servicify."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .core.builder import ServiceBuilder
from .core.config_manager import Settings
from .core.installer import UnitInstaller
from .core.lifecycle import LifecycleDriver
from .core.renderer import UnitRenderer
from .core.service_manager import ServiceManager
from .models.service import ServiceDefinition, UnitState
from .utils.constants import SYSTEM_WANTED_BY, USER_WANTED_BY

logger = logging.getLogger(__name__)


class ServicifyApp:
    """Coordinates building, rendering, installing and starting one service.

    The app holds no state between invocations; everything durable lives
    in the unit directory and in systemd itself.
    """

    def __init__(self, settings: Optional[Settings] = None, user_scope: bool = False):
        """Initialize the application.

        Args:
            settings: Runtime settings, defaults if None
            user_scope: True to create a per-user unit instead of a system unit
        """
        self.settings = settings or Settings()
        self.user_scope = user_scope

        self.builder = ServiceBuilder(default_type=self.settings.default_type)
        self.renderer = UnitRenderer(wanted_by=USER_WANTED_BY if user_scope else SYSTEM_WANTED_BY)
        self.installer = UnitInstaller(
            unit_dir=self.settings.user_unit_dir if user_scope else self.settings.unit_dir,
            create_dir=user_scope,
        )
        self.service_manager = ServiceManager(self.settings.systemctl, is_user_service=user_scope)

    def build_definition(
        self,
        command: Sequence[str],
        name: Optional[str] = None,
        description: Optional[str] = None,
        working_directory: Optional[str] = None,
        service_type: Optional[str] = None,
        user: Optional[str] = None,
        group: Optional[str] = None,
        environment: Iterable[str] = (),
        environment_files: Iterable[str] = (),
    ) -> ServiceDefinition:
        """Resolve the command and assemble a ServiceDefinition."""
        return self.builder.build(
            command,
            name=name,
            description=description,
            working_directory=working_directory,
            service_type=service_type,
            user=user,
            group=group,
            environment=environment,
            environment_files=environment_files,
        )

    def render(self, definition: ServiceDefinition) -> str:
        return self.renderer.render(definition)

    def install(self, definition: ServiceDefinition, content: str) -> Path:
        """Write the rendered unit for a definition.

        Args:
            definition: Service being installed
            content: Output of render()

        Returns:
            Path of the unit file
        """
        return self.installer.install(definition.name, content)

    def bring_up(self, definition: ServiceDefinition) -> UnitState:
        """Reload systemd, enable and start an installed unit.

        Args:
            definition: Service whose unit file has been written

        Returns:
            Final UnitState
        """
        driver = LifecycleDriver(self.service_manager)
        state = driver.bring_up(definition.unit_name)
        logger.info(f"{definition.unit_name} is {state.value}")
        return state
