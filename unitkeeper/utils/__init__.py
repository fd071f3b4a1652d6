"""Utility functions and constants."""

from .app_properties import AppProperties, get_executable, get_properties
from .constants import *

__all__ = [
    "APP_NAME",
    "CONFIG_DIR",
    "DEFAULT_SEARCH_PATHS",
    "LOG_FILE",
    "AppProperties",
    "get_executable",
    "get_properties",
]
