"""Data models for generated systemd services."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..utils.constants import NAME_SUBSTITUTIONS, RESTART_POLICY


class ServiceKind(Enum):
    """Startup behaviour written to the unit's Type= key."""

    SIMPLE = "simple"
    EXEC = "exec"
    FORKING = "forking"
    ONESHOT = "oneshot"
    NOTIFY = "notify"
    DBUS = "dbus"
    IDLE = "idle"

    @classmethod
    def from_string(cls, kind_str: str) -> 'ServiceKind':
        """Convert a string to a ServiceKind enum.

        Args:
            kind_str: Type name as given on the command line or in config

        Returns:
            ServiceKind enum value

        Raises:
            ValueError: If the string names no known service type
        """
        try:
            return cls(kind_str.lower())
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Invalid service type: {kind_str}. Must be one of: {valid}") from None

    @classmethod
    def choices(cls) -> list:
        return [kind.value for kind in cls]


class UnitState(Enum):
    """States a unit passes through while servicify brings it up.

    The order is fixed; a unit only ever moves forward.
    """

    ABSENT = "absent"
    WRITTEN = "written"
    RELOADED = "reloaded"
    ENABLED = "enabled"
    RUNNING = "running"


@dataclass(frozen=True)
class ServiceDefinition:
    """Everything needed to render one systemd unit.

    Attributes:
        name: Unit name without the '.service' suffix
        exec_command: Absolute executable path followed by its arguments
        working_directory: Absolute working directory of the service process
        description: Human-readable label, defaults to the name
        service_kind: Value for Type=
        run_as_user: Optional User=
        run_as_group: Optional Group=
        environment_assignments: KEY=VALUE strings, in command line order
        environment_files: Paths for EnvironmentFile=, in command line order
    """

    name: str
    exec_command: str
    working_directory: str
    description: str = ""
    service_kind: ServiceKind = ServiceKind.SIMPLE
    run_as_user: Optional[str] = None
    run_as_group: Optional[str] = None
    environment_assignments: Tuple[str, ...] = ()
    environment_files: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate the definition after initialization."""
        if not self.name:
            raise ValueError("Service name cannot be empty")

        if self.name.translate(NAME_SUBSTITUTIONS) != self.name or any(c.isspace() for c in self.name):
            raise ValueError(f"Invalid service name: {self.name!r}")

        if not self.exec_command:
            raise ValueError("Service command cannot be empty")

        executable = self.exec_command.split(" ", 1)[0]
        if not os.path.isabs(executable):
            raise ValueError(f"Executable must be an absolute path: {executable}")

        if not os.path.isabs(self.working_directory):
            raise ValueError(f"Working directory must be an absolute path: {self.working_directory}")

        # Each of these becomes one line of the unit file
        single_line_fields = {
            "exec_command": self.exec_command,
            "working_directory": self.working_directory,
            "description": self.description,
            "run_as_user": self.run_as_user,
            "run_as_group": self.run_as_group,
        }
        for index, path in enumerate(self.environment_files):
            single_line_fields[f"environment_files[{index}]"] = path

        for field_name, value in single_line_fields.items():
            if value and ("\n" in value or "\r" in value):
                raise ValueError(f"{field_name} must not contain line breaks: {value!r}")

        # Frozen dataclass: defaults and coercions go through object.__setattr__
        if not self.description:
            object.__setattr__(self, "description", self.name)

        if isinstance(self.service_kind, str):
            object.__setattr__(self, "service_kind", ServiceKind.from_string(self.service_kind))

        object.__setattr__(self, "environment_assignments", tuple(self.environment_assignments))
        object.__setattr__(self, "environment_files", tuple(self.environment_files))

    @property
    def unit_name(self) -> str:
        """Full unit name as systemctl expects it (e.g. 'myapp.service')."""
        return f"{self.name}.service"

    @property
    def restart_policy(self):
        return RESTART_POLICY

    def to_dict(self) -> dict:
        """Convert to dictionary for template rendering.

        Returns:
            Dictionary representation of the definition
        """
        result = {
            "name": self.name,
            "description": self.description,
            "exec_command": self.exec_command,
            "working_directory": self.working_directory,
            "service_kind": self.service_kind.value,
            "restart": self.restart_policy["restart"],
            "restart_sec": self.restart_policy["restart_sec"],
            "environment_assignments": list(self.environment_assignments),
            "environment_files": list(self.environment_files),
        }

        # Identity keys are left out entirely when unset
        if self.run_as_user:
            result["run_as_user"] = self.run_as_user
        if self.run_as_group:
            result["run_as_group"] = self.run_as_group

        return result
