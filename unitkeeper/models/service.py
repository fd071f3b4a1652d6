"""Data models for systemd service definitions."""

from dataclasses import dataclass, field
from typing import List

from ..exceptions import ValidationError
from ..utils.constants import DEFAULT_RESTART_SEC, UNIT_SUFFIX


@dataclass
class ServiceDefinition:
    """Desired configuration of a systemd service.

    Attributes:
        name: Unit name without suffix (e.g., 'foo' for foo.service)
        description: Human readable description
        after: Units this service is ordered after
        before: Units this service is ordered before
        service_type: Systemd service type ('simple', 'forking', ...)
        private_tmp: Whether the service gets its own /tmp
        exec_start: Command line started by the service
        exec_reload: Command line run on reload
        exec_stop: Command line run on stop
        working_directory: Working directory, derived from exec_start if empty
        user: User the service runs as ('root' if empty)
        group: Group the service runs as ('root' if empty)
        restart: Restart policy; no restart settings are rendered if empty
        restart_sec: Delay before a restart
        restart_prevent_exit_status: Exit statuses or signals that prevent a restart
        text: Literal unit file content; replaces the rendered unit if set
    """

    name: str
    description: str = ""
    after: List[str] = field(default_factory=list)
    before: List[str] = field(default_factory=list)

    service_type: str = ""
    private_tmp: bool = False

    exec_start: str = ""
    exec_reload: str = ""
    exec_stop: str = ""
    working_directory: str = ""

    user: str = ""
    group: str = ""

    restart: str = ""
    restart_sec: str = DEFAULT_RESTART_SEC
    restart_prevent_exit_status: List[str] = field(default_factory=list)

    text: str = ""

    @classmethod
    def simple(cls, name: str) -> 'ServiceDefinition':
        """Create a definition with the defaults of a simple-type service.

        Args:
            name: Unit name without suffix

        Returns:
            ServiceDefinition ready to be given an exec_start
        """
        return cls(
            name=name,
            after=["network.target"],
            service_type="simple",
            private_tmp=True,
            exec_reload="/bin/kill -s HUP $MAINPID",
            restart_sec=DEFAULT_RESTART_SEC,
            restart_prevent_exit_status=["SIGTERM", "SIGINT"],
        )

    @property
    def unit_name(self) -> str:
        """File name of the unit, e.g. 'foo.service'."""
        return self.name + UNIT_SUFFIX

    def validate(self):
        """Check that the definition can be written.

        Raises:
            ValidationError: If name or service_type is empty, or the name
                would escape the unit directory
        """
        if not self.name:
            raise ValidationError("invalid service: name is empty")
        if "/" in self.name or "\0" in self.name or self.name in (".", ".."):
            raise ValidationError(f"invalid service: name {self.name!r} is not a file name")
        if not self.service_type:
            raise ValidationError("invalid service: type is empty")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Empty fields are left out so saved configs stay short.

        Returns:
            Dictionary representation of the service definition
        """
        result = {"name": self.name, "type": self.service_type}

        optional = {
            "description": self.description,
            "after": list(self.after),
            "before": list(self.before),
            "exec_start": self.exec_start,
            "exec_reload": self.exec_reload,
            "exec_stop": self.exec_stop,
            "working_directory": self.working_directory,
            "user": self.user,
            "group": self.group,
            "restart": self.restart,
            "restart_prevent_exit_status": list(self.restart_prevent_exit_status),
            "text": self.text,
        }
        for key, value in optional.items():
            if value:
                result[key] = value

        if self.private_tmp:
            result["private_tmp"] = True
        if self.restart_sec != DEFAULT_RESTART_SEC:
            result["restart_sec"] = self.restart_sec

        return result

    @classmethod
    def from_dict(cls, data: dict) -> 'ServiceDefinition':
        """Create ServiceDefinition from dictionary.

        Args:
            data: Dictionary with service definition

        Returns:
            ServiceDefinition instance
        """
        return cls(
            name=str(data.get("name", "")),
            description=data.get("description", ""),
            after=_as_list(data.get("after")),
            before=_as_list(data.get("before")),
            service_type=data.get("type", ""),
            private_tmp=_as_bool(data.get("private_tmp", False)),
            exec_start=data.get("exec_start", ""),
            exec_reload=data.get("exec_reload", ""),
            exec_stop=data.get("exec_stop", ""),
            working_directory=data.get("working_directory", ""),
            user=data.get("user", ""),
            group=data.get("group", ""),
            restart=data.get("restart", ""),
            restart_sec=str(data.get("restart_sec", DEFAULT_RESTART_SEC)),
            restart_prevent_exit_status=_as_list(data.get("restart_prevent_exit_status")),
            text=data.get("text", ""),
        )


def _as_list(value) -> List[str]:
    """Accept a YAML list or a space separated string."""
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(item) for item in value]


def _as_bool(value) -> bool:
    """Accept a YAML bool or a 'true'/'false' style string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
