#!/usr/bin/env python3
"""Entry point for servicify."""

import argparse
import logging
import sys
from typing import List, Optional

from .app import ServicifyApp
from .core.config_manager import ConfigManager, Settings
from .exceptions import InstallError, LifecycleError, ResolutionError, TemplateError
from .models.service import ServiceKind
from .utils.constants import APP_NAME, APP_VERSION, LOG_FORMAT

logger = logging.getLogger(__name__)

# Message prefix for each failing lifecycle step
LIFECYCLE_STAGES = {
    "reload": "reloading systemd daemon",
    "enable": "enabling service",
    "start": "starting service",
}


def setup_logging(debug: bool = False):
    """Set up application logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler()
        ]
    )


def apply_logging_settings(settings: Settings, debug: bool = False, dry_run: bool = False):
    """Apply the configured log level and optional log file.

    Args:
        settings: Loaded settings
        debug: --debug was given, which wins over the configured level
        dry_run: -dry was given; the log file is left untouched
    """
    root = logging.getLogger()

    if not debug:
        level = logging.getLevelName(settings.log_level)
        if isinstance(level, int):
            root.setLevel(level)
        else:
            logger.warning(f"Unknown log level {settings.log_level}, keeping INFO")

    if settings.log_file and not dry_run:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(settings.log_file)
        except OSError as e:
            logger.warning(f"Cannot log to {settings.log_file}: {e}")
            return
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def environment_assignment(value: str) -> str:
    """argparse type for -e: require KEY=VALUE with a non-empty key."""
    key, sep, _ = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Create a systemd service for a command",
        usage="%(prog)s [options] <command> [args...]",
    )
    parser.add_argument("-n", dest="name", metavar="NAME",
                        help="Manually specify the service name")
    parser.add_argument("--description", metavar="TEXT",
                        help="Service description (defaults to the service name)")
    parser.add_argument("-t", dest="service_type", metavar="TYPE", choices=ServiceKind.choices(),
                        help="Service type (default: simple)")
    parser.add_argument("-u", dest="user", metavar="USER",
                        help="User to run the service as")
    parser.add_argument("-g", dest="group", metavar="GROUP",
                        help="Group to run the service as")
    parser.add_argument("-e", dest="environment", metavar="KEY=VAL", action="append", default=[],
                        type=environment_assignment,
                        help="Environment variable for the service (repeatable)")
    parser.add_argument("-E", dest="environment_files", metavar="PATH", action="append", default=[],
                        help="Environment file for the service (repeatable)")
    parser.add_argument("-w", dest="working_directory", metavar="DIR",
                        help="Working directory (default: current directory)")
    parser.add_argument("-dry", "--dry-run", dest="dry_run", action="store_true",
                        help="Print the unit file instead of installing it")
    parser.add_argument("--user", dest="user_scope", action="store_true",
                        help="Create a per-user unit managed with systemctl --user")
    parser.add_argument("-c", "--config", metavar="PATH",
                        help="Path to the YAML config file")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("-v", "--version", action="version", version=f"Version: {APP_VERSION}",
                        help="Print version")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="Command to run as a service, with its arguments")
    return parser


def run(args: argparse.Namespace, command: List[str], settings: Settings) -> int:
    """Create the service described by the parsed arguments.

    Args:
        args: Parsed command line arguments
        command: Command tokens, executable first
        settings: Loaded settings

    Returns:
        Process exit code
    """
    try:
        app = ServicifyApp(settings, user_scope=args.user_scope)
        definition = app.build_definition(
            command,
            name=args.name,
            description=args.description,
            working_directory=args.working_directory,
            service_type=args.service_type,
            user=args.user,
            group=args.group,
            environment=args.environment,
            environment_files=args.environment_files,
        )
        content = app.render(definition)
    except (ResolutionError, ValueError) as e:
        logger.error(f"Error creating service: {e}")
        return 1
    except TemplateError as e:
        logger.error(f"Error rendering service: {e}")
        return 1

    if args.dry_run:
        print(content, end="")
        return 0

    try:
        app.install(definition, content)
    except InstallError as e:
        logger.error(f"Error creating service: {e}")
        return 1

    try:
        app.bring_up(definition)
    except LifecycleError as e:
        stage = LIFECYCLE_STAGES.get(e.step, e.step)
        logger.error(f"Error {stage}: {e}")
        return 1

    print(f"Service {definition.name} created and started successfully!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]

    if not command:
        parser.print_help()
        return 0

    setup_logging(args.debug)

    config_manager = ConfigManager(args.config)
    if args.config and not config_manager.config_file.exists():
        logger.warning(f"Config file {args.config} not found, using defaults")
    config_manager.load_config()
    settings = config_manager.get_settings()
    apply_logging_settings(settings, args.debug, args.dry_run)

    return run(args, command, settings)


if __name__ == "__main__":
    sys.exit(main())
