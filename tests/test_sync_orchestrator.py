"""Tests for SyncOrchestrator failure policy."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from conftest import requires_git
from config import Config, GitHubConfig, SyncBehaviorConfig
from errors import CloneError, ListError
from models import RepositoryDescriptor, SyncAction, SyncOutcome
from repo_sync import RepoSyncer
from sync_orchestrator import EXIT_EXECUTION_ERROR, EXIT_SUCCESS, SyncOrchestrator


def _make_config(tmp_path: Path, fail_fast: bool = False) -> Config:
    return Config(
        github=GitHubConfig(token='gh-token', org='example-org'),
        behavior=SyncBehaviorConfig(
            destination=str(tmp_path / 'mirror'),
            fail_fast=fail_fast,
        ),
    )


def _repos(*names: str):
    return [
        RepositoryDescriptor(name=n, clone_url=f'git@github.com:example-org/{n}.git')
        for n in names
    ]


def _fake_syncer(failing: set) -> MagicMock:
    syncer = MagicMock(spec=RepoSyncer)

    def sync(repo):
        if repo.name in failing:
            return SyncOutcome(
                repo=repo,
                action=SyncAction.CLONE,
                error=CloneError(repo.name, 'unreachable'),
            )
        return SyncOutcome(repo=repo, action=SyncAction.CLONE)

    syncer.sync.side_effect = sync
    return syncer


def test_failure_is_skipped_by_default(tmp_path: Path) -> None:
    syncer = _fake_syncer({'b'})
    orchestrator = SyncOrchestrator(_make_config(tmp_path), source=MagicMock(), syncer=syncer)

    assert orchestrator.sync_all(_repos('a', 'b', 'c', 'd')) == EXIT_SUCCESS

    assert [c.args[0].name for c in syncer.sync.call_args_list] == ['a', 'b', 'c', 'd']
    assert orchestrator.summary.cloned == 3
    assert orchestrator.summary.failed == ['b']
    assert orchestrator.summary.total == 4


def test_fail_fast_stops_before_next_repository(tmp_path: Path) -> None:
    syncer = _fake_syncer({'b'})
    orchestrator = SyncOrchestrator(
        _make_config(tmp_path, fail_fast=True), source=MagicMock(), syncer=syncer
    )

    assert orchestrator.sync_all(_repos('a', 'b', 'c')) == EXIT_EXECUTION_ERROR

    assert [c.args[0].name for c in syncer.sync.call_args_list] == ['a', 'b']


def test_list_error_is_fatal(tmp_path: Path) -> None:
    source = MagicMock()
    source.list_repositories.side_effect = ListError('forbidden (403)')
    syncer = _fake_syncer(set())
    orchestrator = SyncOrchestrator(_make_config(tmp_path), source=source, syncer=syncer)

    assert orchestrator.run() == EXIT_EXECUTION_ERROR
    syncer.sync.assert_not_called()


def test_run_passes_exclude_to_source(tmp_path: Path) -> None:
    cfg = Config(
        github=GitHubConfig(token='gh-token', org='example-org'),
        behavior=SyncBehaviorConfig(destination=str(tmp_path), exclude='legacy'),
    )
    source = MagicMock()
    source.list_repositories.return_value = _repos('a')
    orchestrator = SyncOrchestrator(cfg, source=source, syncer=_fake_syncer(set()))

    assert orchestrator.run() == EXIT_SUCCESS
    source.connect.assert_called_once_with()
    source.list_repositories.assert_called_once_with(exclude='legacy')


@requires_git
def test_partial_failure_with_real_git(tmp_path: Path, make_upstream) -> None:
    """An unreachable repository does not block the ones after it."""
    good = [make_upstream('alpha'), make_upstream('beta')]
    repos = [
        RepositoryDescriptor(name='broken', clone_url=str(tmp_path / 'nowhere.git')),
        RepositoryDescriptor(name='alpha', clone_url=good[0].url),
        RepositoryDescriptor(name='beta', clone_url=good[1].url),
    ]
    orchestrator = SyncOrchestrator(_make_config(tmp_path), source=MagicMock())

    assert orchestrator.sync_all(repos) == EXIT_SUCCESS

    mirror = tmp_path / 'mirror'
    assert (mirror / 'alpha' / 'README.md').exists()
    assert (mirror / 'beta' / 'README.md').exists()
    assert not (mirror / 'broken').exists()


@requires_git
def test_fail_fast_with_real_git(tmp_path: Path, make_upstream) -> None:
    upstream = make_upstream('alpha')
    repos = [
        RepositoryDescriptor(name='broken', clone_url=str(tmp_path / 'nowhere.git')),
        RepositoryDescriptor(name='alpha', clone_url=upstream.url),
    ]
    orchestrator = SyncOrchestrator(
        _make_config(tmp_path, fail_fast=True), source=MagicMock()
    )

    assert orchestrator.sync_all(repos) == EXIT_EXECUTION_ERROR
    assert not (tmp_path / 'mirror' / 'alpha').exists()
