"""Locating unit files across the systemd search roots."""

import logging
import stat
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..utils.constants import DEFAULT_SEARCH_PATHS, UNIT_SUBDIR, UNIT_SUFFIX

logger = logging.getLogger(__name__)


class UnitFileLocator:
    """Knows where systemd looks for unit files.

    The roots are ordered from most to least specific. The first one is the
    primary root: every unit file this package writes goes there, while the
    remaining roots are only searched for shadow copies.
    """

    def __init__(self, search_paths: Optional[Iterable[Union[str, Path]]] = None):
        """Initialize the locator.

        Args:
            search_paths: Ordered search roots, primary first. Defaults to
                /etc/systemd, /usr/lib/systemd and /lib/systemd.
        """
        if search_paths is None:
            search_paths = DEFAULT_SEARCH_PATHS

        self._search_paths = [Path(p) for p in search_paths]
        if not self._search_paths:
            raise ValueError("At least one search path is required")

    @property
    def primary_root(self) -> Path:
        return self._search_paths[0]

    def search_paths(self) -> List[Path]:
        """Get the search roots in priority order.

        Returns:
            List of root directories, primary first
        """
        return list(self._search_paths)

    def candidate_files(self, name: str) -> List[Path]:
        """Get every path a unit file for the service could live at.

        Args:
            name: Service name without suffix

        Returns:
            One path per search root, in priority order
        """
        return [self._unit_path(root, name) for root in self._search_paths]

    def existing_files(self, name: str) -> List[Path]:
        """Get the unit files of the service that currently exist.

        Symlinks count as files, directories do not. Shadowed copies are all
        returned; which one systemd uses is not decided here.

        Args:
            name: Service name without suffix

        Returns:
            Existing unit files in priority order
        """
        files = []
        for path in self.candidate_files(name):
            try:
                mode = path.lstat().st_mode
            except OSError:
                continue
            if not stat.S_ISDIR(mode):
                files.append(path)

        logger.debug(f"Found {len(files)} unit file(s) for {name}")
        return files

    def canonical_file(self, name: str) -> Path:
        """Get the unit file path under the primary root.

        Args:
            name: Service name without suffix

        Returns:
            Path every write for this service targets
        """
        return self._unit_path(self.primary_root, name)

    @staticmethod
    def _unit_path(root: Path, name: str) -> Path:
        return root / UNIT_SUBDIR / (name + UNIT_SUFFIX)
