"""Command-line interface for validating TOML configuration files."""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .errors import ConfigError
from .loader import load_config
from .validator import ValidatedConfig

APP_NAME = "tomlguard"


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config",
        type=Path,
        help="Path to the TOML configuration file to validate.",
    )
    parser.add_argument(
        "--schema",
        required=True,
        metavar="module:attribute",
        help=(
            "Import path of the schema mapping (e.g. myapp.settings:SCHEMA); "
            "modules are also searched in the current directory."
        ),
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="path=value",
        help="Override configuration values (e.g. --set server.port=8080).",
    )
    parser.add_argument(
        "--env-prefix",
        type=str,
        help="Prefix of environment variable overrides (default: TOMLGUARD__).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Validate TOML configuration files against a declarative schema."
    )
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        default="warning",
        help="Logging verbosity (default: warning).",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    check_parser = subparsers.add_parser("check", help="Validate a configuration file.")
    _add_config_arguments(check_parser)

    print_config_parser = subparsers.add_parser(
        "print-config",
        help="Display the validated configuration with secrets redacted.",
    )
    _add_config_arguments(print_config_parser)

    return parser


def _configure_logging(log_level: str) -> None:
    """Initialise root logging configuration."""
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def resolve_schema(reference: str) -> Mapping[str, Any]:
    """Import the schema mapping named by ``module:attribute``."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Schema reference must look like module:attribute, got {reference!r}")
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    target: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        target = getattr(target, part)
    if not isinstance(target, Mapping):
        raise ValueError(f"Schema {reference} is not a mapping")
    return target


def _load(args: argparse.Namespace, console: Console) -> Optional[ValidatedConfig]:
    """Load and validate the configuration, reporting failures on ``console``."""
    try:
        schema = resolve_schema(args.schema)
        return load_config(
            schema,
            args.config,
            args.overrides,
            app_name=APP_NAME,
            env_prefix=args.env_prefix,
        )
    except (ConfigError, ValueError, ImportError, AttributeError) as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(exc))}", highlight=False)
        return None


def _run_check_command(args: argparse.Namespace) -> int:
    console = Console()
    config = _load(args, console)
    if config is None:
        return 1
    console.print(
        f"[bold green]OK[/bold green] {args.config} ({len(config)} top-level fields)",
        highlight=False,
    )
    return 0


def _run_print_config_command(args: argparse.Namespace) -> int:
    console = Console()
    config = _load(args, console)
    if config is None:
        return 1
    console.print_json(data=config.to_dict())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Execute the CLI entry point."""
    parser = build_parser()
    raw_args = list(argv if argv is not None else sys.argv[1:])
    if not raw_args:
        parser.print_help()
        return 0

    args = parser.parse_args(raw_args)
    _configure_logging(args.log_level)

    if args.command == "check":
        return _run_check_command(args)
    if args.command == "print-config":
        return _run_print_config_command(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
