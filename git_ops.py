#!/usr/bin/env python3
"""Thin wrapper around the git executable for clone and pull."""

from __future__ import annotations

import os
import subprocess
from typing import List, Optional

from config import DEFAULT_GIT_TIMEOUT_S
from errors import CloneError, PullError
from logging_utils import Logger
from models import CommitInfo
from security import SecurityValidator
from utils import format_commit_message

# Separates author from message in `git log` output
_FIELD_SEP = "%x00"


class GitClient:
    """Runs git commands for a single repository at a time."""

    def __init__(self, timeout_s: float = DEFAULT_GIT_TIMEOUT_S) -> None:
        self.timeout_s = timeout_s

    def _env(self) -> dict:
        env = os.environ.copy()
        # Never block on a credential or host-key prompt
        env["GIT_TERMINAL_PROMPT"] = "0"
        env.setdefault("GIT_SSH_COMMAND", "ssh -o BatchMode=yes")
        return env

    def _run(self, args: List[str], cwd: Optional[str] = None) -> subprocess.CompletedProcess:
        Logger.debug(f"running: {' '.join(args)}")
        return subprocess.run(
            args,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
            timeout=self.timeout_s,
            env=self._env(),
        )

    @staticmethod
    def _describe_failure(error: subprocess.CalledProcessError) -> str:
        output = (error.stderr or error.stdout or "").strip()
        safe_output = SecurityValidator.sanitize_for_logging(output)
        return f"git exited with status {error.returncode}: {safe_output}"

    def clone(self, name: str, clone_url: str, path: str) -> None:
        """Create a full working copy of clone_url at path."""
        try:
            self._run(["git", "clone", "--", clone_url, path])
        except subprocess.TimeoutExpired as e:
            raise CloneError(name, f"git clone timed out after {self.timeout_s:.0f}s") from e
        except subprocess.CalledProcessError as e:
            raise CloneError(name, self._describe_failure(e)) from e
        except OSError as e:
            raise CloneError(name, f"could not run git: {e}") from e

    def pull_rebase(self, name: str, path: str) -> None:
        """Rebase the working copy at path onto its upstream branch."""
        if not os.path.isdir(os.path.join(path, ".git")):
            raise PullError(name, f"'{path}' is not a git working copy")
        try:
            self._run(["git", "pull", "--rebase"], cwd=path)
        except subprocess.TimeoutExpired as e:
            raise PullError(name, f"git pull timed out after {self.timeout_s:.0f}s") from e
        except subprocess.CalledProcessError as e:
            raise PullError(name, self._describe_failure(e)) from e
        except OSError as e:
            raise PullError(name, f"could not run git: {e}") from e

    def latest_commit(self, name: str, path: str) -> CommitInfo:
        """Return author and message of HEAD."""
        try:
            result = self._run(
                ["git", "log", "-1", f"--format=%an{_FIELD_SEP}%B"], cwd=path
            )
        except subprocess.TimeoutExpired as e:
            raise PullError(name, "git log timed out") from e
        except subprocess.CalledProcessError as e:
            raise PullError(name, self._describe_failure(e)) from e
        except OSError as e:
            raise PullError(name, f"could not run git: {e}") from e

        author, _, message = result.stdout.partition("\x00")
        return CommitInfo(message=format_commit_message(message), author=author)
