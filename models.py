#!/usr/bin/env python3
"""Value types passed between the repository lister and the sync driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from errors import SyncError


class SyncAction(Enum):
    """What the sync driver does with a repository."""
    CLONE = "clone"
    UPDATE = "update"


@dataclass(frozen=True)
class RepositoryDescriptor:
    """A repository of the organization and the URL to clone it from."""
    name: str
    clone_url: str


@dataclass(frozen=True)
class CommitInfo:
    """Latest commit of a working copy after an update."""
    message: str
    author: str


@dataclass(frozen=True)
class SyncOutcome:
    """Result of synchronizing one repository."""
    repo: RepositoryDescriptor
    action: SyncAction
    commit: Optional[CommitInfo] = None
    error: Optional[SyncError] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SyncSummary:
    """Running totals for one mirror run."""
    cloned: int = 0
    updated: int = 0
    planned: int = 0
    failed: List[str] = field(default_factory=list)

    def record(self, outcome: SyncOutcome) -> None:
        if not outcome.ok:
            self.failed.append(outcome.repo.name)
        elif outcome.dry_run:
            self.planned += 1
        elif outcome.action == SyncAction.CLONE:
            self.cloned += 1
        else:
            self.updated += 1

    @property
    def total(self) -> int:
        return self.cloned + self.updated + self.planned + len(self.failed)
