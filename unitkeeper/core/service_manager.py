"""Service controller driving systemd through a command runner."""

import logging
from pathlib import Path
from typing import List

from ..exceptions import AggregateDeleteError, ControlCommandError, ValidationError
from ..models.service import ServiceDefinition
from .command_runner import CommandRunner
from .locator import UnitFileLocator

logger = logging.getLogger(__name__)


class ServiceController:
    """Manages systemd services via control commands and unit file removal."""

    def __init__(self, locator: UnitFileLocator, runner: CommandRunner):
        """Initialize the service controller.

        Args:
            locator: Locator for the unit file search roots
            runner: Runner that issues the control commands
        """
        self.locator = locator
        self.runner = runner

    def daemon_reload(self):
        """Make the service manager re-read unit files from disk.

        Raises:
            ControlCommandError: If the reload fails
        """
        self.runner.run("daemon-reload")
        logger.info("Reloaded service manager configuration")

    def enable(self, name: str):
        """Enable a service to start on boot.

        Args:
            name: Service name
        """
        self._execute_action("enable", name)

    def start(self, name: str):
        """Start a service.

        Args:
            name: Service name
        """
        self._execute_action("start", name)

    def stop(self, name: str):
        """Stop a service.

        Args:
            name: Service name
        """
        self._execute_action("stop", name)

    def reload(self, name: str):
        """Reload a service's own configuration.

        Args:
            name: Service name
        """
        self._execute_action("reload", name)

    def exists(self, name: str) -> bool:
        """Check if any unit file exists for a service.

        Args:
            name: Service name

        Returns:
            True if at least one search root holds a unit file, False otherwise
        """
        return bool(self.locator.existing_files(name))

    def delete(self, definition: ServiceDefinition) -> List[Path]:
        """Remove every unit file of a service and reload the service manager.

        Each copy is removed even if an earlier removal failed, and the reload
        is attempted regardless. Files that vanish before removal count as
        removed.

        Args:
            definition: Service to delete

        Returns:
            Unit files that no longer exist

        Raises:
            ValidationError: If the definition is invalid
            AggregateDeleteError: Carrying every removal and reload failure
        """
        definition.validate()

        errors: List[Exception] = []
        removed: List[Path] = []

        for path in self.locator.existing_files(definition.name):
            try:
                path.unlink()
            except FileNotFoundError:
                logger.debug(f"{path} already gone")
            except OSError as e:
                logger.error(f"Failed to remove {path}: {e}")
                errors.append(e)
                continue
            else:
                logger.info(f"Removed unit file {path}")
            removed.append(path)

        try:
            self.daemon_reload()
        except ControlCommandError as e:
            errors.append(e)

        if errors:
            raise AggregateDeleteError(errors)

        return removed

    def _execute_action(self, action: str, name: str):
        """Execute a control action (start, stop, reload, enable).

        Args:
            action: systemctl action
            name: Service name

        Raises:
            ValidationError: If the name is empty
            ControlCommandError: If the command fails
        """
        if not name:
            raise ValidationError(f"Cannot {action} a service without a name")

        self.runner.run(action, name)
        logger.info(f"Successfully ran {action} on {name}")
