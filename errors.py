#!/usr/bin/env python3
"""Error types for gh-org-mirror."""

from __future__ import annotations


class MirrorError(Exception):
    """Base class for errors that are not bugs in gh-org-mirror."""


class ConfigError(MirrorError):
    """A required flag is missing or a value failed validation."""


class ListError(MirrorError):
    """The organization's repositories could not be listed."""


class SyncError(MirrorError):
    """A single repository could not be synchronized."""

    def __init__(self, repo_name: str, message: str) -> None:
        super().__init__(f"{repo_name}: {message}")
        self.repo_name = repo_name
        self.message = message


class CloneError(SyncError):
    """git clone failed for a repository."""


class PullError(SyncError):
    """Updating an existing working copy failed."""
