"""Shared fixtures: throwaway upstream repositories driven by the real git binary."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason='git not installed')


def git(*args: str, cwd: Path = None) -> str:
    result = subprocess.run(
        ['git', '-c', 'commit.gpgsign=false', *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


class Upstream:
    """A bare repository plus a scratch working copy used to push commits into it."""

    def __init__(self, root: Path, name: str) -> None:
        self.bare = root / f'{name}.git'
        self.work = root / f'{name}-work'
        git('init', '--bare', str(self.bare))
        git('symbolic-ref', 'HEAD', 'refs/heads/main', cwd=self.bare)
        git('init', str(self.work))
        git('symbolic-ref', 'HEAD', 'refs/heads/main', cwd=self.work)
        git('remote', 'add', 'origin', str(self.bare), cwd=self.work)

    @property
    def url(self) -> str:
        return str(self.bare)

    def commit(self, filename: str, content: str, message: str) -> None:
        (self.work / filename).write_text(content)
        git('add', filename, cwd=self.work)
        git('commit', '-m', message, cwd=self.work)
        git('push', 'origin', 'HEAD:refs/heads/main', cwd=self.work)


@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('GIT_AUTHOR_NAME', 'Test Author')
    monkeypatch.setenv('GIT_AUTHOR_EMAIL', 'author@example.com')
    monkeypatch.setenv('GIT_COMMITTER_NAME', 'Test Author')
    monkeypatch.setenv('GIT_COMMITTER_EMAIL', 'author@example.com')


@pytest.fixture
def make_upstream(tmp_path: Path, git_identity: None):
    root = tmp_path / 'upstream'
    root.mkdir()

    def factory(name: str) -> Upstream:
        upstream = Upstream(root, name)
        upstream.commit('README.md', f'# {name}\n', 'initial commit')
        return upstream

    return factory
