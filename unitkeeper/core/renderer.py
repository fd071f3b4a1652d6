"""Rendering service definitions into unit file text."""

import os
from typing import List

from ..models.service import ServiceDefinition
from ..utils.constants import DEFAULT_GROUP, DEFAULT_USER, WANTED_BY


class UnitFileRenderer:
    """Turns a ServiceDefinition into systemd unit file text.

    Output depends only on the definition, so rendering the same definition
    twice yields identical text.
    """

    def render(self, definition: ServiceDefinition) -> str:
        """Render the unit file for a service.

        Args:
            definition: Service to render

        Returns:
            Unit file text without a trailing newline, or definition.text
            unchanged if it is set

        Raises:
            ValidationError: If the definition is invalid
        """
        definition.validate()

        if definition.text:
            return definition.text

        lines = ["[Unit]"]
        lines.extend(self._unit_section(definition))
        lines.append("")
        lines.append("[Service]")
        lines.extend(self._service_section(definition))
        lines.append("")
        lines.append("[Install]")
        lines.append(f"WantedBy={WANTED_BY}")

        return "\n".join(lines)

    def _unit_section(self, definition: ServiceDefinition) -> List[str]:
        lines = []
        if definition.description:
            lines.append(f"Description={definition.description}")
        if definition.before:
            lines.append("Before=" + " ".join(definition.before))
        if definition.after:
            lines.append("After=" + " ".join(definition.after))
        return lines

    def _service_section(self, definition: ServiceDefinition) -> List[str]:
        lines = [f"Type={definition.service_type}"]
        if definition.private_tmp:
            lines.append("PrivateTmp=true")

        lines.append(f"User={definition.user or DEFAULT_USER}")
        lines.append(f"Group={definition.group or DEFAULT_GROUP}")

        if definition.exec_start:
            lines.append(f"ExecStart={definition.exec_start}")
        if definition.exec_reload:
            lines.append(f"ExecReload={definition.exec_reload}")
        if definition.exec_stop:
            lines.append(f"ExecStop={definition.exec_stop}")

        working_directory = definition.working_directory or working_directory_of(definition.exec_start)
        if working_directory:
            lines.append(f"WorkingDirectory={working_directory}")

        if definition.restart:
            lines.append(f"Restart={definition.restart}")
            if definition.restart_sec:
                lines.append(f"RestartSec={definition.restart_sec}")
            if definition.restart_prevent_exit_status:
                lines.append("RestartPreventExitStatus=" + " ".join(definition.restart_prevent_exit_status))

        return lines


def working_directory_of(exec_start: str) -> str:
    """Derive a working directory from an ExecStart command line.

    The directory part of the whole command line is used, a bare command
    name gives ".".

    Args:
        exec_start: ExecStart command line

    Returns:
        Directory of the command line, or an empty string if it is empty
    """
    if not exec_start:
        return ""

    return os.path.normpath(os.path.dirname(exec_start))
