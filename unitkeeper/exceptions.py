"""Exceptions raised by unit lifecycle operations."""

from typing import List, Optional, Sequence


class UnitKeeperError(Exception):
    """Base exception for unitkeeper errors"""
    pass


class ValidationError(UnitKeeperError, ValueError):
    """Raised when a service definition is incomplete"""
    pass


class UnitWriteError(UnitKeeperError, OSError):
    """Raised when the temporary unit file cannot be created or written"""
    pass


class UnitRenameError(UnitWriteError):
    """Raised when the temporary file cannot replace the unit file"""
    pass


class ControlCommandError(UnitKeeperError):
    """Raised when the control command exits non-zero or cannot be launched."""

    def __init__(self, command: Sequence[str], returncode: Optional[int] = None, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr

        line = " ".join(self.command)
        if returncode is None:
            message = f"Failed to run '{line}'"
        else:
            message = f"'{line}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class AggregateDeleteError(UnitKeeperError):
    """Collects every failure of a delete run.

    The message joins all underlying errors so none is lost behind the first.
    """

    def __init__(self, errors: Sequence[Exception]):
        self.errors: List[Exception] = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class AppIdentityError(UnitKeeperError):
    """Raised when the running executable or its name cannot be determined"""
    pass


class ConfigNotFoundError(UnitKeeperError):
    """Raised when no configuration file exists in any search path"""
    pass
