"""Command-line entry point for depversion."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from depversion.config.environment import EnvironmentConfig
from depversion.config.exceptions import ConfigurationError
from depversion.config.loader import load_config
from depversion.config.models import ResolverConfig
from depversion.logging import get_logger
from depversion.logging.config import configure_logging
from depversion.logging.context import log_context
from depversion.manifest import (
    LocalFileSystem,
    ManifestError,
    find_description_file,
    get_required_version_from_description_file,
)
from depversion.versioning import normalize_version

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[ResolverConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Priority for log level and description files: CLI > environment > config
    file > defaults.

    Args:
        config_path: Path to configuration file, None to search defaults
        log_level_override: Log level from CLI

    Returns:
        Tuple of (ResolverConfig, EnvironmentConfig) with overrides applied
        to the ResolverConfig

    Raises:
        ConfigurationError: If configuration is invalid
    """
    resolver_config, env_config = load_config(config_path)

    if log_level_override:
        resolver_config.logging.level = log_level_override
    elif env_config.log_level:
        resolver_config.logging.level = env_config.log_level

    if env_config.description_files:
        resolver_config.description_files = env_config.description_files

    return resolver_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depversion",
        description="Normalize dependency version specifiers and resolve required versions from manifests",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: depversion.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser(
        "normalize", help="Print the normalized form of each version specifier"
    )
    normalize_parser.add_argument("specifiers", nargs="+", metavar="SPEC")

    required_parser = subparsers.add_parser(
        "required",
        help="Print the version of a package required by the nearest description file",
    )
    required_parser.add_argument("package", metavar="PACKAGE")
    required_parser.add_argument(
        "--directory",
        type=Path,
        default=Path("."),
        help="Directory to start looking in (default: current directory)",
    )

    locate_parser = subparsers.add_parser(
        "locate", help="Print the path of the nearest description file"
    )
    locate_parser.add_argument(
        "--directory",
        type=Path,
        default=Path("."),
        help="Directory to start looking in (default: current directory)",
    )

    return parser


def run_normalize(specifiers: List[str]) -> int:
    for specifier in specifiers:
        print(normalize_version(specifier))
    return EXIT_OK


def run_locate(directory: Path, description_files: List[str]) -> int:
    description_file = find_description_file(
        LocalFileSystem(), str(directory), description_files
    )
    if description_file is None:
        logger.warning(
            "No description file found",
            extra={
                "event": "cli.locate.not_found",
                "directory": str(directory),
                "description_files": description_files,
            },
        )
        return EXIT_NOT_FOUND

    print(description_file.path)
    return EXIT_OK


def run_required(package: str, directory: Path, description_files: List[str]) -> int:
    with log_context(package=package, directory=str(directory)):
        description_file = find_description_file(
            LocalFileSystem(), str(directory), description_files
        )
        if description_file is None:
            logger.warning(
                "No description file found",
                extra={"event": "cli.required.no_description_file"},
            )
            return EXIT_NOT_FOUND

        version = get_required_version_from_description_file(description_file.data, package)
        if version is None:
            logger.warning(
                f"{package} is not listed in {description_file.path}",
                extra={
                    "event": "cli.required.not_listed",
                    "path": description_file.path,
                },
            )
            return EXIT_NOT_FOUND

        logger.info(
            "Resolved required version",
            extra={
                "event": "cli.required.resolved",
                "path": description_file.path,
                "version": version,
            },
        )
        print(version)
        return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 when nothing was found, 2 on errors
    """
    args = build_parser().parse_args(argv)

    try:
        resolver_config, env_config = load_runtime_config(args.config, args.log_level)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(
        level=resolver_config.logging.level,
        format_type=resolver_config.logging.format,
        environment=env_config.environment,
    )

    try:
        if args.command == "normalize":
            return run_normalize(args.specifiers)
        if args.command == "locate":
            return run_locate(args.directory, resolver_config.description_files)
        return run_required(args.package, args.directory, resolver_config.description_files)
    except (ManifestError, OSError, ValueError) as e:
        # ValueError covers invalid JSON and undecodable bytes
        logger.error(
            f"Failed to read description file: {e}",
            extra={"event": "cli.manifest_error", "error_type": type(e).__name__},
        )
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
