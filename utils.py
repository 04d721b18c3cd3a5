#!/usr/bin/env python3
"""Utility functions for gh-org-mirror."""

import threading
import time
from typing import List, Optional

from logging_utils import Logger

GITHUB_HOST = "github.com"


class RateLimiter:
    """Sliding-window limiter for GitHub API requests."""

    def __init__(self, max_requests: int = 60, window_s: float = 60.0):
        self.max_requests = max_requests
        self.window_s = window_s
        self.requests: List[float] = []
        self.lock = threading.Lock()

    def wait_if_needed(self, operation_type: str = "API") -> None:
        """Sleep until another request fits in the window."""
        current_time = time.time()

        with self.lock:
            self._clean_old_requests(current_time)
            if len(self.requests) >= self.max_requests:
                wait_time = self.window_s - (current_time - self.requests[0])
                if wait_time > 0:
                    Logger.warn(
                        f"rate limit reached for {operation_type}, "
                        f"waiting {wait_time:.2f}s"
                    )
                    time.sleep(wait_time)
                    current_time = time.time()
                    self._clean_old_requests(current_time)
            self.requests.append(current_time)

    def _clean_old_requests(self, current_time: float) -> None:
        cutoff_time = current_time - self.window_s
        self.requests = [
            req_time for req_time in self.requests if req_time > cutoff_time
        ]


def replace_clone_host(clone_url: str, host_override: Optional[str]) -> str:
    """Replace every literal 'github.com' in a clone URL with host_override.

    Meant for users who route GitHub through an ssh_config alias, e.g.
    'git@github.com:org/repo.git' -> 'git@github-work:org/repo.git'.
    An empty or missing override returns the URL unchanged.
    """
    if not host_override:
        return clone_url
    return clone_url.replace(GITHUB_HOST, host_override)


def format_commit_message(message: str) -> str:
    """Drop trailing newlines git appends to commit messages."""
    return message.rstrip("\r\n")
