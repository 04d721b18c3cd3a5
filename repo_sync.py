#!/usr/bin/env python3
"""Clone-or-update decision for a single repository."""

from __future__ import annotations

import os
from typing import Optional

from errors import CloneError, SyncError
from git_ops import GitClient
from logging_utils import Logger
from models import RepositoryDescriptor, SyncAction, SyncOutcome


class RepoSyncer:
    """Brings destination/<name> in line with the remote repository.

    A missing directory is cloned; an existing one is pulled with rebase.
    Failures are returned inside the SyncOutcome, never raised, so the
    caller decides whether to keep going.
    """

    def __init__(
        self,
        destination: str,
        git: Optional[GitClient] = None,
        *,
        dry_run: bool = False,
    ) -> None:
        self.destination = destination
        self.git = git or GitClient()
        self.dry_run = dry_run

    def repo_path(self, repo: RepositoryDescriptor) -> str:
        return os.path.join(self.destination, repo.name)

    def plan(self, repo: RepositoryDescriptor) -> SyncAction:
        if os.path.exists(self.repo_path(repo)):
            return SyncAction.UPDATE
        return SyncAction.CLONE

    def sync(self, repo: RepositoryDescriptor) -> SyncOutcome:
        action = self.plan(repo)
        path = self.repo_path(repo)

        if self.dry_run:
            verb = "clone" if action == SyncAction.CLONE else "update"
            Logger.info(f"would {verb}: {repo.name} -> {path}")
            return SyncOutcome(repo=repo, action=action, dry_run=True)

        try:
            if action == SyncAction.CLONE:
                Logger.info(f"{repo.name} not present, cloning...")
                self._clone(repo, path)
                return SyncOutcome(repo=repo, action=action)

            Logger.info(f"{repo.name} already there, updating...")
            self.git.pull_rebase(repo.name, path)
            commit = self.git.latest_commit(repo.name, path)
            Logger.success(
                f"latest commit for {repo.name} -> {commit.message} "
                f"(by {commit.author})"
            )
            return SyncOutcome(repo=repo, action=action, commit=commit)
        except SyncError as e:
            return SyncOutcome(repo=repo, action=action, error=e)

    def _clone(self, repo: RepositoryDescriptor, path: str) -> None:
        try:
            os.makedirs(self.destination, exist_ok=True)
        except OSError as e:
            raise CloneError(
                repo.name, f"cannot create destination '{self.destination}': {e}"
            ) from e
        self.git.clone(repo.name, repo.clone_url, path)
        Logger.success(f"cloned: {repo.name}")
