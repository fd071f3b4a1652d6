"""Application constants and configuration."""

from pathlib import Path

# Application metadata
APP_NAME = "unitkeeper"
APP_VERSION = "1.0.0"

# Paths
CONFIG_DIR = Path.home() / ".config" / "unitkeeper"
LOG_FILE = CONFIG_DIR / "unitkeeper.log"

# Root where new unit files are written, followed by the read-only roots
# systemd also scans. Most specific first.
DEFAULT_SERVICE_ROOT = Path("/etc/systemd")
DEFAULT_SEARCH_PATHS = [
    DEFAULT_SERVICE_ROOT,
    Path("/usr/lib/systemd"),
    Path("/lib/systemd"),
]

# Every search root keeps system units in this subdirectory
UNIT_SUBDIR = "system"
UNIT_SUFFIX = ".service"

# Control command
DEFAULT_SYSTEMCTL = "systemctl"

# Unit rendering
DEFAULT_USER = "root"
DEFAULT_GROUP = "root"
DEFAULT_RESTART_SEC = "1s"
WANTED_BY = "multi-user.target"

# Unit files must stay readable by systemd
UNIT_FILE_MODE = 0o644

# Default settings
DEFAULT_LOG_LEVEL = "INFO"
