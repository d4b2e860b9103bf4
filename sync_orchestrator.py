#!/usr/bin/env python3
"""Orchestrator for syncing a GitHub repository listing into a local snapshot."""

from __future__ import annotations

from typing import Optional

from config import Scope, SyncConfig
from diff_engine import diff_repos
from github_client import GitHubClient, GitHubClientError
from logging_utils import Logger
from models import Snapshot, SyncReport
from normalizer import normalize_repos
from snapshot_store import read_previous, write_snapshot
from utils import utc_now_iso

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1

CHANGED_SAMPLE_SIZE = 10


class SyncOrchestrator:
    def __init__(self, cfg: SyncConfig, client: Optional[GitHubClient] = None) -> None:
        self.cfg = cfg
        self.gh = client or GitHubClient(cfg.client)

    def run(self) -> int:
        try:
            report = self.sync_repositories(self.cfg.scope, self.cfg.out_path)
        except GitHubClientError as e:
            Logger.error(f"sync failed: {e}")
            Logger.error(f"hint: {e.hint}")
            return EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

        self._print_report(report)
        return EXIT_SUCCESS

    def sync_repositories(self, scope: Scope, out_path: str) -> SyncReport:
        """Fetch, diff against the previous snapshot, and persist.

        Client errors propagate before anything is written.
        """
        previous = read_previous(out_path)
        if previous is None:
            Logger.info(f"no usable previous snapshot at {out_path}; treating all repos as new")
        else:
            Logger.info(f"loaded previous snapshot: {len(previous)} repos")

        Logger.info(f"fetching repositories ({scope.describe()})")
        raw_repos = self.gh.fetch_all_repositories(scope)
        current = normalize_repos(raw_repos)
        Logger.info(f"fetched {len(current)} repos")

        diff = diff_repos(previous or [], current)

        snapshot = Snapshot(generated_at=utc_now_iso(), repos=current)
        write_snapshot(out_path, snapshot)

        return SyncReport(
            scope=scope.describe(),
            out_path=out_path,
            generated_at=snapshot.generated_at,
            had_previous=previous is not None,
            total=len(current),
            private_count=sum(1 for repo in current if repo.private),
            archived_count=sum(1 for repo in current if repo.archived),
            added=len(diff.added),
            removed=len(diff.removed),
            changed=len(diff.changed),
            unchanged=len(diff.unchanged),
            changed_sample=diff.changed[:CHANGED_SAMPLE_SIZE],
        )

    def _print_report(self, report: SyncReport) -> None:
        Logger.info(f"snapshot written: {report.out_path}")
        Logger.info(
            f"repos: total={report.total} private={report.private_count} "
            f"archived={report.archived_count}"
        )
        Logger.info(
            f"diff: added={report.added} removed={report.removed} "
            f"changed={report.changed} unchanged={report.unchanged}"
        )
        if not report.changed_sample:
            return

        Logger.info(f"changed (showing {len(report.changed_sample)} of {report.changed}):")
        for repo in report.changed_sample:
            Logger.info(
                f"  - {repo.full_name} updated_at={repo.updated_at} pushed_at={repo.pushed_at}"
            )
