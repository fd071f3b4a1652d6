#!/usr/bin/env python3
"""Entry point for the unitkeeper command line."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .core.config_manager import ConfigManager
from .core.materializer import Materializer
from .core.renderer import UnitFileRenderer
from .core.service_manager import ServiceController
from .exceptions import AppIdentityError, ConfigNotFoundError, UnitKeeperError
from .models.service import ServiceDefinition
from .utils.app_properties import AppProperties, get_properties
from .utils.constants import APP_NAME, APP_VERSION, LOG_FILE

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None):
    """Set up application logging.

    Args:
        level: Name of the log level
        log_file: File to log to in addition to stderr, LOG_FILE if None
    """
    log_file = log_file or LOG_FILE
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    except OSError as e:
        print(f"Logging to {log_file} disabled: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def _app_properties() -> AppProperties:
    try:
        return get_properties()
    except AppIdentityError as e:
        logger.debug(f"Falling back to default application name: {e}")
        return AppProperties(name=APP_NAME)


def find_config_file(explicit: Optional[str] = None) -> Optional[Path]:
    """Resolve the config file to use.

    An explicit path wins, then the <ENVNAME>_CONFIG environment variable,
    then the first <name>.conf in the application search paths.

    Args:
        explicit: Path given on the command line

    Returns:
        Path of the config file, or None to run on defaults
    """
    if explicit:
        return Path(explicit).expanduser()

    properties = _app_properties()
    from_env = os.environ.get(f"{properties.env_name}_CONFIG")
    if from_env:
        return Path(from_env).expanduser()

    try:
        return properties.find_config()
    except ConfigNotFoundError as e:
        logger.debug(f"No config file: {e}")
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_NAME} - Create, enable and remove systemd service units"
    )
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument('--config', help='YAML config file to use')
    parser.add_argument('--root', action='append', dest='roots', metavar='DIR',
                        help='Unit search root, most specific first (repeatable, overrides config)')
    parser.add_argument('--user', action='store_true', dest='user_mode',
                        help='Talk to the user service manager (systemctl --user)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    for command, help_text in [
        ('render', 'Print the unit file of a service'),
        ('create', 'Write, reload and enable the unit file of a service'),
        ('delete', 'Remove every unit file of a service'),
        ('start', 'Start a service'),
        ('stop', 'Stop a service'),
        ('reload', 'Reload a service'),
        ('exists', 'Exit 0 if a unit file exists, 1 otherwise'),
        ('paths', 'List the unit file locations of a service'),
    ]:
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument('name', help='Service name without .service')

        if command in ('render', 'create', 'delete'):
            sub.add_argument('--description', default='')
            sub.add_argument('--exec-start', default='')
            sub.add_argument('--working-directory', default='')
            sub.add_argument('--user-name', default='', help='User= of the unit')
            sub.add_argument('--group', default='', help='Group= of the unit')
            sub.add_argument('--restart', default='', help='Restart= policy of the unit')
            sub.add_argument('--text-file', help='Write this file verbatim instead of rendering')

    return parser


def resolve_definition(config_manager: ConfigManager, args: argparse.Namespace) -> ServiceDefinition:
    """Get the configured definition of a service, or a simple preset.

    Args:
        config_manager: Loaded configuration
        args: Parsed command line

    Returns:
        ServiceDefinition to operate on
    """
    definition = config_manager.get_service(args.name)
    if definition is not None:
        return definition

    definition = ServiceDefinition.simple(args.name)
    definition.description = args.description
    definition.exec_start = args.exec_start
    definition.working_directory = args.working_directory
    definition.user = args.user_name
    definition.group = args.group
    definition.restart = args.restart
    if args.text_file:
        definition.text = Path(args.text_file).read_text(encoding='utf-8')
    return definition


def run_command(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """Run one subcommand.

    Returns:
        Process exit code
    """
    if args.roots:
        config_manager.set_setting("search_paths", args.roots)
    if args.user_mode:
        config_manager.set_setting("user_mode", True)

    locator = config_manager.build_locator()
    controller = ServiceController(locator, config_manager.build_runner())

    if args.command == 'render':
        print(UnitFileRenderer().render(resolve_definition(config_manager, args)))
    elif args.command == 'create':
        path = Materializer(controller).create(resolve_definition(config_manager, args))
        print(path)
    elif args.command == 'delete':
        for path in controller.delete(resolve_definition(config_manager, args)):
            print(f"removed {path}")
    elif args.command == 'start':
        controller.start(args.name)
    elif args.command == 'stop':
        controller.stop(args.name)
    elif args.command == 'reload':
        controller.reload(args.name)
    elif args.command == 'exists':
        return 0 if controller.exists(args.name) else 1
    elif args.command == 'paths':
        canonical = locator.canonical_file(args.name)
        existing = set(locator.existing_files(args.name))
        for path in locator.candidate_files(args.name):
            flags = ("*" if path == canonical else " ") + ("e" if path in existing else " ")
            print(f"{flags} {path}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    config_file = find_config_file(args.config)
    if config_file is not None and not config_file.is_file():
        logger.error(f"Config file {config_file} not found")
        return 1

    config_manager = ConfigManager(config_file)
    config_manager.load_config()

    if not args.verbose:
        level = str(config_manager.get_setting("log_level", "INFO")).upper()
        logging.getLogger().setLevel(getattr(logging, level, logging.INFO))

    try:
        return run_command(args, config_manager)
    except (UnitKeeperError, OSError) as e:
        logger.error(f"{args.command} {args.name} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
