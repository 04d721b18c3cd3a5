#!/usr/bin/env python3
"""Configuration dataclasses for gh-org-mirror."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_GIT_TIMEOUT_S = 600.0


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub-specific configuration."""
    token: str
    org: str
    api_url: str = DEFAULT_API_URL
    host_override: Optional[str] = None


@dataclass(frozen=True)
class SyncBehaviorConfig:
    """Sync behavior configuration."""
    destination: str
    fail_fast: bool = False
    dry_run: bool = False
    exclude: Optional[str] = None
    git_timeout_s: float = DEFAULT_GIT_TIMEOUT_S


@dataclass(frozen=True)
class Config:
    """Main configuration for mirroring a GitHub organization."""
    github: GitHubConfig
    behavior: SyncBehaviorConfig
