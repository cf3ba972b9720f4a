"""Builds ServiceDefinition objects from command line inputs."""

import logging
import os
from typing import Iterable, Optional, Sequence

from ..models.service import ServiceDefinition, ServiceKind
from ..utils.constants import DEFAULT_SERVICE_TYPE, NAME_SUBSTITUTIONS
from ..utils.path_helper import PathHelper

logger = logging.getLogger(__name__)


def normalize_name(command: Sequence[str], name: Optional[str] = None) -> str:
    """Derive a unit name from an explicit name or the command.

    Without an explicit name the first command token is used, reduced to
    its base name ('/usr/local/bin/myapp' -> 'myapp'). Spaces, slashes,
    backslashes and dots are replaced with '-'.

    Args:
        command: Command tokens, executable first
        name: Optional name override

    Returns:
        Normalized unit name
    """
    if name:
        base = name
    elif command:
        base = command[0]
        if "/" in base:
            base = os.path.basename(base.rstrip("/"))
    else:
        base = ""

    return base.translate(NAME_SUBSTITUTIONS)


class ServiceBuilder:
    """Assembles a ServiceDefinition from all invocation inputs."""

    def __init__(self, default_type: str = DEFAULT_SERVICE_TYPE, search_path: Optional[str] = None):
        """Initialize the builder.

        Args:
            default_type: Service type used when none is requested
            search_path: PATH-style string for executable lookup, None for $PATH
        """
        self.default_type = default_type
        self.search_path = search_path

    def build(
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
        """Build a service definition.

        Args:
            command: Command tokens, executable first
            name: Optional unit name override
            description: Optional description, defaults to the name
            working_directory: Optional working directory, defaults to cwd
            service_type: Optional Type= value
            user: Optional User=
            group: Optional Group=
            environment: KEY=VALUE assignments
            environment_files: EnvironmentFile= paths

        Returns:
            ServiceDefinition

        Raises:
            ResolutionError: If the executable or working directory cannot be resolved
            ValueError: If the inputs violate a definition invariant
        """
        if not command:
            raise ValueError("No command given")

        unit_name = normalize_name(command, name)
        executable = PathHelper.resolve_executable(command[0], self.search_path)
        exec_command = PathHelper.build_exec_command(executable, command[1:])
        workdir = PathHelper.resolve_working_directory(working_directory)

        definition = ServiceDefinition(
            name=unit_name,
            exec_command=exec_command,
            working_directory=workdir,
            description=description or "",
            service_kind=ServiceKind.from_string(service_type or self.default_type),
            run_as_user=user or None,
            run_as_group=group or None,
            environment_assignments=tuple(environment),
            environment_files=tuple(environment_files),
        )

        logger.debug(f"Built definition for {definition.unit_name}: ExecStart={exec_command}")
        return definition
