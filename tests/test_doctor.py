"""Tests for the GitHub doctor checks."""

from __future__ import annotations

from unittest.mock import MagicMock

from config import DoctorConfig, GitHubClientConfig
from doctor import EXIT_EXECUTION_ERROR, EXIT_SUCCESS, GitHubDoctor
from github_client import GitHubApiError


def _error(status: int, hint: str) -> GitHubApiError:
    return GitHubApiError(status, '', hint, '')


def _make_doctor(org=None) -> GitHubDoctor:
    client = MagicMock()
    client.get_viewer.return_value = {'login': 'octocat'}
    client.get_org.return_value = {'login': 'acme'}
    client.get_org_membership.return_value = {'state': 'active', 'role': 'member'}
    client.list_all_org_repos.return_value = [
        {'full_name': f'acme/repo-{i}'} for i in range(7)
    ]
    cfg = DoctorConfig(client=GitHubClientConfig(token='gh-token'), org=org)
    return GitHubDoctor(cfg, client=client)


def test_user_scope_stops_after_viewer(capsys) -> None:
    doctor = _make_doctor()

    assert doctor.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert 'authenticated as octocat' in out
    assert 'no org provided' in out
    doctor.gh.get_org.assert_not_called()


def test_viewer_failure_exits_nonzero(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.get_viewer.side_effect = _error(401, 'Token invalid/expired or missing access.')

    assert doctor.run() == EXIT_EXECUTION_ERROR

    err = capsys.readouterr().err
    assert 'could not authenticate' in err
    assert 'Token invalid/expired' in err
    doctor.gh.get_org.assert_not_called()


def test_healthy_org_lists_top_five(capsys) -> None:
    doctor = _make_doctor(org='acme')

    assert doctor.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert 'state=active, role=member' in out
    assert 'ok: org repos visible: 7' in out
    assert '[REDACTED]' not in out
    assert 'acme/repo-4' in out
    assert 'acme/repo-5' not in out


def test_intermediate_failures_do_not_abort(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.get_org.side_effect = _error(404, 'Not found.')
    doctor.gh.get_org_membership.side_effect = _error(403, 'Forbidden.')

    assert doctor.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert "org 'acme' not accessible" in out
    assert 'cannot confirm membership' in out
    doctor.gh.list_all_org_repos.assert_called_once_with('acme')


def test_failed_check_reports_error_at_default_level(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.get_org.side_effect = _error(404, 'Not found.')

    assert doctor.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert "doctor check 'org' failed: GitHub API 404" in out


def test_repo_listing_failure_exits_nonzero(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.list_all_org_repos.side_effect = _error(403, 'Forbidden.')

    assert doctor.run() == EXIT_EXECUTION_ERROR

    assert 'cannot list org repos' in capsys.readouterr().err


def test_zero_repos_explains_likely_causes(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.list_all_org_repos.return_value = []

    assert doctor.run() == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert 'seeing 0 repos usually means' in out


def test_pending_membership_is_flagged(capsys) -> None:
    doctor = _make_doctor(org='acme')
    doctor.gh.get_org_membership.return_value = {'state': 'pending', 'role': 'member'}

    assert doctor.run() == EXIT_SUCCESS

    assert 'membership is not active' in capsys.readouterr().out
