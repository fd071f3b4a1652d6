"""unitkeeper - create, enable and remove systemd service units."""

from .utils.constants import APP_VERSION

__version__ = APP_VERSION
