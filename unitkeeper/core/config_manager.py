"""Configuration manager for loading and saving unitkeeper settings."""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..models.service import ServiceDefinition
from ..utils.constants import DEFAULT_LOG_LEVEL, DEFAULT_SEARCH_PATHS, DEFAULT_SYSTEMCTL
from .command_runner import SystemctlRunner
from .locator import UnitFileLocator

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages settings and the service definitions kept in a YAML file."""

    CONFIG_VERSION = "1.0"

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize the config manager.

        Args:
            config_file: YAML file to load from and save to. Without one only
                defaults are available and save_config() fails.
        """
        self.config_file = Path(config_file) if config_file else None
        self.services: List[ServiceDefinition] = []
        self.settings: Dict[str, Any] = {}
        self._ensure_default_settings()

    def load_config(self) -> bool:
        """Load configuration from file.

        Returns:
            True if config loaded successfully, False otherwise
        """
        if self.config_file is None or not self.config_file.exists():
            logger.info("Config file not found, using defaults")
            self._load_defaults()
            return False

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if not data:
                logger.warning("Empty config file, using defaults")
                self._load_defaults()
                return False

            if not self._validate_config(data):
                logger.error("Invalid config file, using defaults")
                self._load_defaults()
                return False

            self.services = []
            for service_data in data.get("services") or []:
                try:
                    service = ServiceDefinition.from_dict(service_data)
                    service.validate()
                    self.services.append(service)
                except Exception as e:
                    logger.error(f"Failed to load service definition: {e}")

            self.settings = data.get("settings") or {}
            self._ensure_default_settings()

            logger.info(f"Loaded {len(self.services)} services from {self.config_file}")
            return True

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            self._load_defaults()
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            self._load_defaults()
            return False

    def save_config(self) -> bool:
        """Save configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        if self.config_file is None:
            logger.error("No config file set, cannot save")
            return False

        try:
            if self.config_file.exists():
                backup_file = self.config_file.with_name(self.config_file.name + '.bak')
                shutil.copy2(self.config_file, backup_file)
                logger.debug(f"Created backup at {backup_file}")

            data = {
                "version": self.CONFIG_VERSION,
                "services": [service.to_dict() for service in self.services],
                "settings": self.settings
            }

            # Write to temp file first, then move it over the config
            temp_file = self.config_file.with_name(self.config_file.name + '.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)

            temp_file.replace(self.config_file)

            logger.info(f"Saved {len(self.services)} services to config")
            return True

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get_service(self, service_name: str) -> Optional[ServiceDefinition]:
        """Get a service definition by name.

        Args:
            service_name: Name of the service

        Returns:
            ServiceDefinition if found, None otherwise
        """
        for service in self.services:
            if service.name == service_name:
                return service
        return None

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any):
        """Set a setting value.

        Args:
            key: Setting key
            value: Setting value
        """
        self.settings[key] = value

    def build_locator(self) -> UnitFileLocator:
        """Create a locator for the configured search roots."""
        return UnitFileLocator(self.get_setting("search_paths"))

    def build_runner(self) -> SystemctlRunner:
        """Create a systemctl runner from the configured settings."""
        timeout = self.get_setting("timeout")
        return SystemctlRunner(
            executable=self.get_setting("systemctl", DEFAULT_SYSTEMCTL),
            user_mode=bool(self.get_setting("user_mode", False)),
            use_pkexec=bool(self.get_setting("use_pkexec", False)),
            timeout=float(timeout) if timeout is not None else None,
        )

    def _validate_config(self, data: dict) -> bool:
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict):
            logger.error("Config must be a dictionary")
            return False

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        if data.get("services") is not None and not isinstance(data["services"], list):
            logger.error("Services must be a list")
            return False

        settings = data.get("settings")
        if settings is not None:
            if not isinstance(settings, dict):
                logger.error("Settings must be a dictionary")
                return False

            search_paths = settings.get("search_paths")
            if search_paths is not None and (not isinstance(search_paths, list) or not search_paths):
                logger.error("search_paths must be a non-empty list")
                return False

            timeout = settings.get("timeout")
            if timeout is not None and (
                isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
            ):
                logger.error("timeout must be a positive number")
                return False

        return True

    def _load_defaults(self):
        """Load default configuration."""
        self.services = []
        self.settings = {}
        self._ensure_default_settings()
        logger.info("Loaded default configuration")

    def _ensure_default_settings(self):
        """Ensure all default settings exist."""
        defaults = {
            "search_paths": [str(p) for p in DEFAULT_SEARCH_PATHS],
            "systemctl": DEFAULT_SYSTEMCTL,
            "user_mode": False,
            "use_pkexec": False,
            "timeout": None,
            "log_level": DEFAULT_LOG_LEVEL,
        }

        for key, value in defaults.items():
            if key not in self.settings:
                self.settings[key] = value
