#!/usr/bin/env python3
"""
devtool - developer tooling CLI for GitHub integrations and debugging.

`sync-github repos` snapshots the repositories visible to a GitHub token
(user or organization scope) into a local JSON file and reports what was
added, removed or changed since the previous snapshot. `doctor github`
walks through the usual causes of access failures: a bad token, missing
org membership, or zero visible repositories.

License: MIT
"""

from __future__ import annotations

import sys
from typing import List, Optional

from argument_parser import parse_arguments
from doctor import GitHubDoctor
from status import run_status
from sync_orchestrator import SyncOrchestrator

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


def main(argv: Optional[List[str]] = None) -> int:
    command = parse_arguments(argv)

    if command.name == "status":
        return run_status()
    if command.name == "sync-github":
        return SyncOrchestrator(command.config).run()
    if command.name == "doctor":
        return GitHubDoctor(command.config).run()
    return EXIT_EXECUTION_ERROR


if __name__ == "__main__":
    sys.exit(main())
