"""Registry CLI entry points.

This module exposes the run-spec command and maps parsed arguments onto
registry configuration.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import RegistryConfig, parse_search_limit
from core.errors import RegistryError
from core.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="filereg", description="File metadata registry CLI")
    parser.add_argument(
        "--search-limit",
        help="Override FILEREG_SEARCH_LIMIT for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the registry CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.search_limit)
        configure_logging(config.log_level)
        if args.command == "run-spec":
            return run_run_spec_command(config, args)
    except RegistryError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(search_limit: str | None) -> RegistryConfig:
    """Build config with optional search-limit override.

    Args:
        search_limit: Optional raw override value.

    Returns:
        Validated registry config.
    """
    config = RegistryConfig.from_env()
    if search_limit:
        config = replace(config, search_limit=parse_search_limit(search_limit))
    return config
