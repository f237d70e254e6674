"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and executes the script
against a fresh temporal registry.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any

from core.config import RegistryConfig
from core.run_spec import load_run_spec
from core.run_spec_execution import execute_run_spec
from store.temporal_store import TemporalFileRegistry


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML script of registry operations",
    )
    parser.add_argument("spec_file", help="Path to YAML run-spec file")


def run_run_spec_command(config: RegistryConfig, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    spec = load_run_spec(args.spec_file)
    if spec.defaults.search_limit is not None:
        config = replace(config, search_limit=spec.defaults.search_limit)
    registry = TemporalFileRegistry(config)
    for line in execute_run_spec(registry, spec):
        print(line)
    return 0
