#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional

from config import (DEFAULT_API_URL, DEFAULT_GIT_TIMEOUT_S, Config,
                    GitHubConfig, SyncBehaviorConfig)
from errors import ConfigError
from logging_utils import Logger
from security import SecurityValidator

TOKEN_ENV_VAR = "GITHUB_TOKEN"


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Clone or update every repository of a GitHub organization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --org acme --dest ~/src/acme
  %(prog)s --org acme --dest ~/src/acme --host github-work
  %(prog)s --org acme --dest ~/src/acme --fail-on-error --exclude archive
  %(prog)s --api-url https://github.acme.com/api/v3 --org team --dest /srv/mirror
        """,
    )
    return parser


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    parser.add_argument(
        "--token",
        dest="token",
        help=f"GitHub token (or set {TOKEN_ENV_VAR} env var)",
    )
    parser.add_argument(
        "--org",
        "--orga",
        dest="org",
        help="Name of the GitHub organization (required)",
    )
    parser.add_argument(
        "--api-url",
        dest="api_url",
        default=DEFAULT_API_URL,
        help="Base URL of the GitHub API",
    )
    parser.add_argument(
        "--host",
        dest="host",
        default="",
        help="Replacement for github.com in SSH clone URLs, e.g. if you use "
        "multiple SSH keys for GitHub",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior and configuration arguments to parser."""
    parser.add_argument(
        "--destination",
        "--dest",
        dest="destination",
        help="Destination folder (required)",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        dest="fail_on_error",
        help="Stop at the first failing git clone/git pull. Continues by default",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="List clone/update actions without doing them",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        dest="exclude",
        help="Skip repositories whose name contains this pattern",
    )
    parser.add_argument(
        "--git-timeout",
        dest="git_timeout_s",
        type=float,
        default=DEFAULT_GIT_TIMEOUT_S,
        help=f"Seconds before a git command is aborted (default: {DEFAULT_GIT_TIMEOUT_S:.0f})",
    )


def _require(value: Optional[str], message: str) -> str:
    if not value:
        raise ConfigError(message)
    return value


def _build_config(args: argparse.Namespace) -> Config:
    """Validate parsed arguments and assemble the configuration."""
    token = _require(
        args.token or os.getenv(TOKEN_ENV_VAR),
        f"token must be provided (use --token or {TOKEN_ENV_VAR})",
    )
    org = _require(args.org, "org must be provided")
    destination = _require(args.destination, "dest must be provided")

    try:
        validated_org = SecurityValidator.validate_org_name(org)
        validated_api_url = SecurityValidator.validate_url(
            args.api_url, ["https", "http"]
        ).rstrip("/")
        validated_destination = SecurityValidator.validate_destination(destination)
        validated_host = (
            SecurityValidator.validate_host(args.host) if args.host else None
        )

        if args.git_timeout_s <= 0:
            raise ValueError("git timeout must be a positive number of seconds")

        validated_exclude = None
        if args.exclude:
            if len(args.exclude) > 100:
                raise ValueError("exclude pattern too long (max 100 characters)")
            validated_exclude = args.exclude
    except ValueError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        raise ConfigError(str(e)) from e

    Logger.security_event(
        "CONFIG_VALIDATION", "successfully validated all configuration inputs"
    )

    return Config(
        github=GitHubConfig(
            token=token,
            org=validated_org,
            api_url=validated_api_url,
            host_override=validated_host,
        ),
        behavior=SyncBehaviorConfig(
            destination=validated_destination,
            fail_fast=args.fail_on_error,
            dry_run=args.dry_run,
            exclude=validated_exclude,
            git_timeout_s=float(args.git_timeout_s),
        ),
    )


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments into a Config, raising ConfigError if invalid."""
    parser = _create_argument_parser()
    _add_github_arguments(parser)
    _add_behavior_arguments(parser)

    args = parser.parse_args(argv)
    return _build_config(args)
