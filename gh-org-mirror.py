#!/usr/bin/env python3
"""
GH Org Mirror - Clone or update all repositories of a GitHub organization
into a local directory.

Each repository lands in <destination>/<name>. Missing repositories are
cloned over SSH, existing working copies are updated with `git pull
--rebase`. Failures are reported and skipped unless --fail-on-error is set.
"""

from cli import main

if __name__ == "__main__":
    main()
