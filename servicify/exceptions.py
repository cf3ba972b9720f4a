"""
Custom exceptions for servicify.
"""


class ServicifyError(Exception):
    """Base exception for all servicify errors."""

    pass


class ResolutionError(ServicifyError):
    """Raised when a command or directory cannot be resolved to an absolute path."""

    def __init__(self, target: str, message: str = None):
        self.target = target

        if message:
            message = f"{message}: {target}"
        else:
            message = f"command not found: {target}"

        super().__init__(message)


class TemplateError(ServicifyError):
    """Raised when the unit template cannot be compiled or rendered."""

    pass


class InstallError(ServicifyError):
    """Raised when the unit file cannot be written."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"failed to write {path}: {reason}")


class LifecycleError(ServicifyError):
    """Raised when a systemctl step exits unsuccessfully.

    Attributes:
        step: The lifecycle step that failed (e.g. 'enable')
        state: The last UnitState the unit reached before the failure
    """

    def __init__(self, step: str, message: str, state=None):
        self.step = step
        self.state = state
        super().__init__(message)
