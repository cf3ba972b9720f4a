"""Path helper for turning command tokens into invocable absolute paths."""

import logging
import os
import shutil
from typing import Optional, Sequence

from ..exceptions import ResolutionError

logger = logging.getLogger(__name__)


class PathHelper:
    """Helper for resolving executables and working directories."""

    @staticmethod
    def resolve_executable(token: str, search_path: Optional[str] = None) -> str:
        """Resolve a command token to an absolute executable path.

        Absolute tokens are returned unchanged once confirmed executable.
        Bare names are looked up on PATH the way a shell would; tokens with
        a relative directory part are taken relative to the current directory.

        Args:
            token: First token of the command line
            search_path: PATH-style string to search instead of $PATH

        Returns:
            Absolute path to the executable

        Raises:
            ResolutionError: If no executable matches the token
        """
        if not token:
            raise ResolutionError(token, "empty command")

        found = shutil.which(token, path=search_path)
        if found is None:
            logger.debug(f"No executable found for {token!r} (PATH={search_path or os.environ.get('PATH', '')})")
            raise ResolutionError(token)

        if os.path.isabs(token):
            return token

        resolved = os.path.abspath(found)
        logger.debug(f"Resolved {token} -> {resolved}")
        return resolved

    @staticmethod
    def build_exec_command(executable: str, arguments: Sequence[str]) -> str:
        """Join the executable and its arguments into an ExecStart= value.

        Arguments are joined with single spaces and not quoted.

        Args:
            executable: Absolute path to the executable
            arguments: Remaining command tokens

        Returns:
            The invocation string
        """
        return " ".join([executable, *arguments])

    @staticmethod
    def resolve_working_directory(directory: Optional[str] = None) -> str:
        """Get the absolute working directory for a service.

        Args:
            directory: Explicit directory, or None for the current directory

        Returns:
            Absolute path

        Raises:
            ResolutionError: If the current directory cannot be determined
        """
        try:
            if directory:
                return os.path.abspath(directory)
            return os.getcwd()
        except OSError as e:
            raise ResolutionError(directory or ".", f"failed to get working directory ({e})") from e
