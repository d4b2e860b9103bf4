"""Tests for SyncOrchestrator."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from config import GitHubClientConfig, Scope, SyncConfig
from github_client import GitHubApiError
from models import Snapshot
from normalizer import normalize_repo
from snapshot_store import write_snapshot
from sync_orchestrator import EXIT_EXECUTION_ERROR, EXIT_SUCCESS, SyncOrchestrator
from tests.helpers import make_raw_repo


def _make_orchestrator(tmp_path: Path, raw_repos=None, error=None) -> SyncOrchestrator:
    out_path = str(tmp_path / 'cache' / 'repos.json')
    cfg = SyncConfig(
        client=GitHubClientConfig(token='gh-token'),
        scope=Scope.user(),
        out_path=out_path,
    )
    client = MagicMock()
    if error is not None:
        client.fetch_all_repositories.side_effect = error
    else:
        client.fetch_all_repositories.return_value = raw_repos or []
    return SyncOrchestrator(cfg, client=client)


def _read(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding='utf-8'))


def test_end_to_end_add_remove_keep(tmp_path: Path) -> None:
    """Previous {1, 2} and fetched {1, 3}: 3 added, 2 removed, 1 unchanged."""
    orchestrator = _make_orchestrator(
        tmp_path,
        raw_repos=[make_raw_repo(1, updated_at='A'), make_raw_repo(3, updated_at='C')],
    )
    out_path = orchestrator.cfg.out_path
    write_snapshot(
        out_path,
        Snapshot(
            generated_at='earlier',
            repos=[
                normalize_repo(make_raw_repo(1, updated_at='A')),
                normalize_repo(make_raw_repo(2, updated_at='B')),
            ],
        ),
    )

    report = orchestrator.sync_repositories(Scope.user(), out_path)

    assert (report.added, report.removed, report.changed, report.unchanged) == (1, 1, 0, 1)
    assert report.had_previous is True
    assert report.total == 2

    data = _read(out_path)
    assert data['count'] == 2
    assert [repo['id'] for repo in data['repos']] == [1, 3]
    assert data['generated_at'] != 'earlier'


def test_first_run_treats_everything_as_added(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(
        tmp_path,
        raw_repos=[make_raw_repo(1, private=True), make_raw_repo(2, archived=True)],
    )

    report = orchestrator.sync_repositories(Scope.user(), orchestrator.cfg.out_path)

    assert report.had_previous is False
    assert report.added == 2
    assert report.private_count == 1
    assert report.archived_count == 1


def test_corrupt_previous_snapshot_is_ignored(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, raw_repos=[make_raw_repo(1)])
    out_path = Path(orchestrator.cfg.out_path)
    out_path.parent.mkdir(parents=True)
    out_path.write_text('{truncated', encoding='utf-8')

    report = orchestrator.sync_repositories(Scope.user(), str(out_path))

    assert report.had_previous is False
    assert report.added == 1
    assert _read(str(out_path))['count'] == 1


def test_changed_sample_is_capped_at_ten(tmp_path: Path) -> None:
    previous = [normalize_repo(make_raw_repo(i)) for i in range(15)]
    fetched = [make_raw_repo(i, updated_at='2024-06-01T00:00:00Z') for i in range(15)]
    orchestrator = _make_orchestrator(tmp_path, raw_repos=fetched)
    write_snapshot(orchestrator.cfg.out_path, Snapshot(generated_at='t', repos=previous))

    report = orchestrator.sync_repositories(Scope.user(), orchestrator.cfg.out_path)

    assert report.changed == 15
    assert [repo.id for repo in report.changed_sample] == list(range(10))


def test_empty_diff_still_rewrites_snapshot(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, raw_repos=[make_raw_repo(1)])
    out_path = orchestrator.cfg.out_path
    write_snapshot(out_path, Snapshot(generated_at='old', repos=[normalize_repo(make_raw_repo(1))]))

    report = orchestrator.sync_repositories(Scope.user(), out_path)

    assert report.unchanged == 1
    assert _read(out_path)['generated_at'] != 'old'


def test_client_failure_aborts_without_writing(tmp_path: Path) -> None:
    error = GitHubApiError(401, 'Unauthorized', 'Token invalid/expired or missing access.', '')
    orchestrator = _make_orchestrator(tmp_path, error=error)

    with pytest.raises(GitHubApiError):
        orchestrator.sync_repositories(Scope.user(), orchestrator.cfg.out_path)

    assert not Path(orchestrator.cfg.out_path).exists()


def test_client_failure_keeps_previous_snapshot(tmp_path: Path) -> None:
    error = GitHubApiError(500, 'Server Error', 'Request failed.', '')
    orchestrator = _make_orchestrator(tmp_path, error=error)
    out_path = orchestrator.cfg.out_path
    write_snapshot(out_path, Snapshot(generated_at='keep', repos=[]))

    assert orchestrator.run() == EXIT_EXECUTION_ERROR
    assert _read(out_path)['generated_at'] == 'keep'


def test_run_reports_hint_on_failure(tmp_path: Path, capsys) -> None:
    error = GitHubApiError(404, 'Not Found', 'Not found. The resource may not exist.', '')
    orchestrator = _make_orchestrator(tmp_path, error=error)

    assert orchestrator.run() == EXIT_EXECUTION_ERROR

    err = capsys.readouterr().err
    assert 'GitHub API 404' in err
    assert 'hint: Not found' in err


def test_run_prints_summary_and_changed_entries(tmp_path: Path, capsys) -> None:
    orchestrator = _make_orchestrator(
        tmp_path, raw_repos=[make_raw_repo(1, updated_at='2024-06-01T00:00:00Z')]
    )
    write_snapshot(
        orchestrator.cfg.out_path,
        Snapshot(generated_at='t', repos=[normalize_repo(make_raw_repo(1))]),
    )

    assert orchestrator.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert 'added=0 removed=0 changed=1 unchanged=0' in out
    assert 'octo/repo-1 updated_at=2024-06-01T00:00:00Z' in out


def test_org_scope_is_passed_to_client(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, raw_repos=[])

    report = orchestrator.sync_repositories(Scope.for_org('acme'), orchestrator.cfg.out_path)

    orchestrator.gh.fetch_all_repositories.assert_called_once_with(Scope.for_org('acme'))
    assert report.scope == 'org:acme'


def test_deeply_nested_previous_snapshot_is_overwritten(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, raw_repos=[make_raw_repo(1)])
    out_path = Path(orchestrator.cfg.out_path)
    out_path.parent.mkdir(parents=True)
    out_path.write_text('{"repos": ' + '[' * 200000, encoding='utf-8')

    assert orchestrator.run() == EXIT_SUCCESS

    data = _read(str(out_path))
    assert data['count'] == 1
    assert [repo['id'] for repo in data['repos']] == [1]
