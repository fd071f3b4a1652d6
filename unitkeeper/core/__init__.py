"""Core functionality for systemd unit lifecycle management."""

from .command_runner import CommandRunner, RecordingRunner, SystemctlRunner
from .config_manager import ConfigManager
from .locator import UnitFileLocator
from .materializer import Materializer
from .renderer import UnitFileRenderer
from .service_manager import ServiceController

__all__ = [
    "CommandRunner",
    "ConfigManager",
    "Materializer",
    "RecordingRunner",
    "ServiceController",
    "SystemctlRunner",
    "UnitFileLocator",
    "UnitFileRenderer",
]
