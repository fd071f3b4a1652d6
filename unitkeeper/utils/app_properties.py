"""Identity of the running application and discovery of its config file."""

import logging
import os
import re
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..exceptions import AppIdentityError, ConfigNotFoundError

logger = logging.getLogger(__name__)

_BAD_ENV_CHAR = re.compile(r"[^A-Z0-9_]")


@dataclass
class AppProperties:
    """Information about the running application.

    Attributes:
        executable: Absolute path of the running program
        dir: Directory containing the executable
        name: Short application name, used for config file names
        description: Free text description
        version: Application version
    """

    executable: str = ""
    dir: str = ""
    name: str = ""

    description: str = "no description"
    version: str = "0.0.0"

    @property
    def env_name(self) -> str:
        """Name usable as an environment variable prefix, e.g. 'UNITKEEPER'."""
        name = _BAD_ENV_CHAR.sub("_", self.name.upper())
        return name.strip("_")

    def search_paths(self) -> List[Path]:
        """Get application specific search paths, most specific first.

        Returns:
            ~/.<name>, the executable's directory and /etc/<name>, each
            only when known
        """
        paths = []
        if self.name:
            home = os.environ.get("HOME")
            if home:
                paths.append(Path(home) / f".{self.name}")

        if self.dir:
            paths.append(Path(self.dir))

        if self.name:
            paths.append(Path("/etc") / self.name)
        return paths

    def config_files(self) -> List[Path]:
        """Get every possible config file location.

        Returns:
            <path>/<name>.conf for each search path
        """
        if not self.name:
            return []
        return [path / f"{self.name}.conf" for path in self.search_paths()]

    def find_config(self) -> Path:
        """Find the first existing config file.

        Returns:
            Path of the config file

        Raises:
            ConfigNotFoundError: If the name is unset or no config file exists
        """
        if not self.name:
            raise ConfigNotFoundError("Application name not set")

        for path in self.config_files():
            if path.is_file():
                logger.debug(f"Using config file {path}")
                return path

        raise ConfigNotFoundError("no config found")


def _is_file(path: str) -> bool:
    return os.path.isfile(path)


def get_executable(argv0: Optional[str] = None) -> str:
    """Find the full path of the command the program was started with.

    Args:
        argv0: Command name as invoked, sys.argv[0] if None

    Returns:
        Absolute path, or an empty string if it cannot be determined
    """
    if argv0 is None:
        argv0 = sys.argv[0] if sys.argv else ""

    if argv0:
        if "/" in argv0 or "\\" in argv0:
            path = os.path.normpath(os.path.join(os.getcwd(), argv0))
            if _is_file(path):
                return path
        else:
            found = shutil.which(argv0)
            if found:
                path = os.path.normpath(os.path.abspath(found))
                if _is_file(path):
                    return path

    if sys.argv and sys.argv[0]:
        path = os.path.abspath(sys.argv[0])
        if _is_file(path):
            return path

    if argv0:
        return os.path.normpath(os.path.join(os.getcwd(), argv0))

    return ""


def _base_name(path: str) -> str:
    """Base name of a path up to its first dot."""
    return os.path.basename(path).split(".")[0]


def get_properties(argv0: Optional[str] = None) -> AppProperties:
    """Determine executable, directory and name of the running application.

    Args:
        argv0: Command name as invoked, sys.argv[0] if None

    Returns:
        AppProperties of the running application

    Raises:
        AppIdentityError: If the executable or the name cannot be determined
    """
    if argv0 is None:
        argv0 = sys.argv[0] if sys.argv else ""

    properties = AppProperties(executable=get_executable(argv0))
    if not properties.executable:
        raise AppIdentityError("Could not find my executable")
    properties.dir = os.path.dirname(properties.executable)

    if argv0:
        properties.name = _base_name(argv0)

    if not properties.name:
        properties.name = _base_name(properties.executable)
        if not properties.name:
            raise AppIdentityError("Could not determine application name")

    return properties
