#!/usr/bin/env python3
"""Input validation and log sanitization for gh-org-mirror."""

import os
import re
from typing import List, Optional


class SecurityValidator:
    """Validation of user and API supplied values before they reach git or disk."""

    MAX_REPO_NAME_LENGTH = 100
    MAX_ORG_NAME_LENGTH = 39
    MAX_URL_LENGTH = 2048
    MAX_HOST_LENGTH = 253
    MAX_PATH_LENGTH = 4096

    # GitHub repository names
    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    # GitHub logins: alphanumerics and single inner hyphens
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
    # ssh_config Host aliases and hostnames
    SAFE_HOST_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    @staticmethod
    def _has_control_chars(value: str) -> bool:
        return "\x00" in value or any(ord(c) < 32 for c in value)

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Check a repository name is safe to use as a directory name."""
        if not name or not isinstance(name, str):
            raise ValueError("repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        if name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"repository name '{name}' contains invalid path characters")

        if cls._has_control_chars(name):
            raise ValueError("repository name contains null bytes or control characters")

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValueError(f"repository name '{name}' contains invalid characters")

        return name

    @classmethod
    def validate_org_name(cls, org: str) -> str:
        """Validate a GitHub organization login."""
        if not org or not isinstance(org, str):
            raise ValueError("organization name must be a non-empty string")

        if len(org) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(org):
            raise ValueError("organization name contains invalid characters")

        return org

    @classmethod
    def validate_host(cls, host: str) -> str:
        """Validate an SSH host (or ssh_config alias) used in clone URLs."""
        if len(host) > cls.MAX_HOST_LENGTH:
            raise ValueError(f"host exceeds maximum length of {cls.MAX_HOST_LENGTH}")

        if not cls.SAFE_HOST_PATTERN.match(host):
            raise ValueError("host contains invalid characters")

        return host

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if cls._has_control_chars(url):
            raise ValueError("URL contains null bytes or control characters")

        if not url.startswith(("http://", "https://")):
            raise ValueError("URL must use http or https scheme")

        if allowed_schemes:
            scheme = url.split("://")[0].lower()
            if scheme not in allowed_schemes:
                raise ValueError(
                    f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
                )

        return url

    @classmethod
    def validate_destination(cls, path: str) -> str:
        """Validate and normalize the local mirror root."""
        if not path or not isinstance(path, str):
            raise ValueError("destination must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"destination exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("destination contains null bytes")

        normalized = os.path.normpath(os.path.expanduser(path))
        if os.path.exists(normalized) and not os.path.isdir(normalized):
            raise ValueError(f"destination '{normalized}' exists and is not a directory")

        return normalized

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),  # Password assignments
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained PATs
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
