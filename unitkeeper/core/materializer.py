"""Atomic creation of unit files."""

import logging
import os
import tempfile
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

from ..exceptions import UnitRenameError, UnitWriteError
from ..models.service import ServiceDefinition
from ..utils.constants import UNIT_FILE_MODE
from .renderer import UnitFileRenderer
from .service_manager import ServiceController

logger = logging.getLogger(__name__)


class Materializer:
    """Writes rendered units to their canonical path and enables them.

    The unit is written to a temporary file next to the target and renamed
    over it, so readers see either the old or the new file, never a partial
    one. A crash can at worst leave a stray temporary file behind.
    """

    def __init__(self, controller: ServiceController, renderer: Optional[UnitFileRenderer] = None):
        """Initialize the materializer.

        Args:
            controller: Controller used for locating files and the reload/enable follow-up
            renderer: Renderer for unit text, a default one if None
        """
        self.controller = controller
        self.locator = controller.locator
        self.renderer = renderer or UnitFileRenderer()

    def create(self, definition: ServiceDefinition) -> Path:
        """Write the unit file of a service, reload systemd and enable it.

        A failing reload or enable does not undo the write.

        Args:
            definition: Service to create

        Returns:
            Path of the written unit file

        Raises:
            ValidationError: If the definition is invalid
            UnitWriteError: If the temporary file cannot be created or written
            UnitRenameError: If the temporary file cannot replace the unit file
            ControlCommandError: If the reload or enable fails
        """
        definition.validate()
        text = self.renderer.render(definition)
        target = self.locator.canonical_file(definition.name)

        self._write_atomic(target, text + "\n")
        logger.info(f"Created unit file {target}")

        self.controller.daemon_reload()
        self.controller.enable(definition.name)
        return target

    def _write_atomic(self, target: Path, content: str):
        with ExitStack() as stack:
            try:
                fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=target.name + ".")
            except OSError as e:
                logger.error(f"Failed to create temporary file in {target.parent}: {e}")
                raise UnitWriteError(f"Cannot create temporary file for {target}: {e}") from e

            tmp_path = Path(tmp_name)
            stack.callback(_discard, tmp_path)

            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    os.fchmod(f.fileno(), UNIT_FILE_MODE)
                    f.write(content)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                logger.error(f"Failed to write {tmp_path}: {e}")
                raise UnitWriteError(f"Cannot write unit file {target}: {e}") from e

            try:
                os.replace(tmp_path, target)
            except OSError as e:
                logger.error(f"Failed to move {tmp_path} to {target}: {e}")
                raise UnitRenameError(f"Cannot replace unit file {target}: {e}") from e


def _discard(path: Path):
    """Remove a temporary file if it is still there."""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")
