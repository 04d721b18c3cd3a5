#!/usr/bin/env python3
"""GitHub API wrapper for listing the repositories of an organization."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Set

import github
import requests

if TYPE_CHECKING:
    from github.Organization import Organization

from config import DEFAULT_API_URL, GitHubConfig
from errors import ListError
from logging_utils import Logger
from models import RepositoryDescriptor
from security import SecurityValidator
from utils import RateLimiter, replace_clone_host

PAGE_SIZE = 100


class GitHubSource:
    """Wrapper around the GitHub API to enumerate organization repositories."""

    def __init__(self, config: GitHubConfig) -> None:
        self.config = config
        self.api: Optional[github.Github] = None
        self.org: Optional["Organization"] = None
        self.rate_limiter = RateLimiter(max_requests=50)

    def connect(self) -> None:
        """Authenticate and resolve the organization, raising ListError on failure."""
        Logger.info(f"init github API: {self.config.api_url}")
        self._preflight_org_access()
        try:
            auth = github.Auth.Token(self.config.token)
            if self.config.api_url.rstrip("/") != DEFAULT_API_URL:
                self.api = github.Github(
                    base_url=self.config.api_url, auth=auth, per_page=PAGE_SIZE
                )
            else:
                self.api = github.Github(auth=auth, per_page=PAGE_SIZE)
            self.rate_limiter.wait_if_needed("GitHub API")
            self.org = self.api.get_organization(self.config.org)
            Logger.debug(f"github org: {self.org.login}")
        except github.BadCredentialsException as e:
            raise ListError("authentication failed (github): invalid token") from e
        except github.GithubException as e:
            raise ListError(f"github error: {e}") from e
        except requests.RequestException as e:
            raise ListError(f"failed to contact github api: {e}") from e

    def _get_api_headers(self) -> dict:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.config.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _preflight_org_access(self) -> None:
        """Check the organization exists and is visible to the token."""
        org_url = f"{self.config.api_url.rstrip('/')}/orgs/{self.config.org}"
        try:
            self.rate_limiter.wait_if_needed("GitHub API")
            response = requests.get(org_url, headers=self._get_api_headers(), timeout=30)
        except requests.RequestException as e:
            raise ListError(f"failed to contact github api: {e}") from e

        if response.status_code == 401:
            raise ListError(
                "unauthorized (401): token invalid or not authorized for GitHub API"
            )
        if response.status_code == 403:
            raise ListError(
                "forbidden (403): token lacks permission to read the organization. "
                "Possible causes: missing read:org scope, fine-grained token not "
                "granted to the org, SAML SSO not authorized, or rate limit exceeded."
            )
        if response.status_code == 404:
            raise ListError(
                f"not found (404): organization '{self.config.org}' does not "
                "exist or is not visible to this token."
            )
        if response.status_code != 200:
            Logger.warn(
                f"unexpected response checking org visibility: {response.status_code}"
            )

    def list_repositories(self, exclude: Optional[str] = None) -> List[RepositoryDescriptor]:
        """Return every repository of the organization, in API order.

        Pages are requested one after another until the API hands back an
        empty one; servers may return fewer than PAGE_SIZE items on a page
        that is not the last. Any failing page aborts the whole listing.
        """
        if self.org is None:
            raise ListError("github API not initialized")

        Logger.info(f"listing repositories of: {self.config.org}")
        descriptors: List[RepositoryDescriptor] = []
        seen: Set[str] = set()
        try:
            paginated = self.org.get_repos(type="all")
            page = 0
            while True:
                self.rate_limiter.wait_if_needed("GitHub API")
                batch = paginated.get_page(page)
                if not batch:
                    break
                Logger.debug(f"page {page + 1}: {len(batch)} repositories")
                for raw in batch:
                    descriptor = self._to_descriptor(raw)
                    if descriptor.name in seen:
                        Logger.debug(f"skipping duplicate listing entry: {descriptor.name}")
                        continue
                    seen.add(descriptor.name)
                    if exclude and exclude in descriptor.name:
                        Logger.warn(f"excluding: {descriptor.name}")
                        continue
                    descriptors.append(descriptor)
                page += 1
        except github.GithubException as e:
            raise ListError(
                f"failed to list repositories of '{self.config.org}': {e}"
            ) from e
        except requests.RequestException as e:
            raise ListError(
                f"request error while listing repositories of '{self.config.org}': {e}"
            ) from e

        Logger.info(f"found {len(descriptors)} repositories to process")
        return descriptors

    def _to_descriptor(self, raw: object) -> RepositoryDescriptor:
        name = getattr(raw, "name", "")
        try:
            name = SecurityValidator.validate_repo_name(name)
        except ValueError as e:
            raise ListError(f"refusing repository from API listing: {e}") from e
        clone_url = replace_clone_host(
            getattr(raw, "ssh_url", ""), self.config.host_override
        )
        return RepositoryDescriptor(name=name, clone_url=clone_url)
