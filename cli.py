#!/usr/bin/env python3
"""Entry point wiring argument parsing to the orchestrator."""

from __future__ import annotations

import sys
from typing import List, NoReturn, Optional

from argument_parser import parse_arguments
from errors import ConfigError
from logging_utils import Logger
from sync_orchestrator import EXIT_EXECUTION_ERROR, SyncOrchestrator


def run(argv: Optional[List[str]] = None) -> int:
    """Run one mirror pass and return the process exit code."""
    try:
        cfg = parse_arguments(argv)
    except ConfigError as e:
        Logger.error(f"error: {e}")
        return EXIT_EXECUTION_ERROR

    return SyncOrchestrator(cfg).run()


def main() -> NoReturn:
    sys.exit(run())
