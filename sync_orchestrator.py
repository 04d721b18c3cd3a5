#!/usr/bin/env python3
"""Main orchestrator for mirroring a GitHub organization to a local directory."""

from __future__ import annotations

from typing import Iterable, Optional

from config import Config
from errors import MirrorError
from git_ops import GitClient
from github_source import GitHubSource
from logging_utils import Logger
from models import RepositoryDescriptor, SyncSummary
from repo_sync import RepoSyncer

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


class SyncOrchestrator:
    def __init__(
        self,
        cfg: Config,
        source: Optional[GitHubSource] = None,
        syncer: Optional[RepoSyncer] = None,
    ) -> None:
        self.cfg = cfg
        self.gh = source or GitHubSource(cfg.github)
        self.syncer = syncer or RepoSyncer(
            cfg.behavior.destination,
            GitClient(timeout_s=cfg.behavior.git_timeout_s),
            dry_run=cfg.behavior.dry_run,
        )
        self.summary = SyncSummary()

    def run(self) -> int:
        try:
            self.gh.connect()
            repos = self.gh.list_repositories(exclude=self.cfg.behavior.exclude)
        except MirrorError as e:
            Logger.error(f"error: {e}")
            return EXIT_EXECUTION_ERROR

        Logger.info(f"found {len(repos)} repositories, updating now...")
        return self.sync_all(repos)

    def sync_all(self, repos: Iterable[RepositoryDescriptor]) -> int:
        """Sync repositories in order, applying the fail-fast policy."""
        repos = list(repos)
        total = len(repos)
        for idx, repo in enumerate(repos, start=1):
            Logger.debug(f"[{idx}/{total}] {repo.name}")
            outcome = self.syncer.sync(repo)
            self.summary.record(outcome)
            if outcome.ok:
                continue

            Logger.error(f"error: {outcome.error}")
            if self.cfg.behavior.fail_fast:
                Logger.error(
                    f"aborting after failure on '{repo.name}' (--fail-on-error); "
                    f"{total - idx} repositories not processed"
                )
                return EXIT_EXECUTION_ERROR

        self._report_summary()
        return EXIT_SUCCESS

    def _report_summary(self) -> None:
        summary = self.summary
        if self.cfg.behavior.dry_run:
            Logger.info(f"dry-run completed: {summary.planned} repositories planned")
            return

        Logger.info(
            f"done: {summary.total} repositories, {summary.cloned} cloned, "
            f"{summary.updated} updated, {len(summary.failed)} failed"
        )
        if summary.failed:
            Logger.warn(f"failed repositories: {', '.join(summary.failed)}")
