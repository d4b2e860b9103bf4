"""Builders for fake API responses and raw repository payloads."""

from __future__ import annotations

from typing import Any, Dict, Optional
from unittest.mock import MagicMock


def make_response(
    status: int = 200,
    payload: Any = None,
    headers: Optional[Dict[str, str]] = None,
    reason: str = 'OK',
    text: str = '',
) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    response.headers = headers or {}
    response.text = text
    response.json.return_value = payload
    return response


def make_raw_repo(repo_id: int, **overrides: Any) -> Dict[str, Any]:
    raw = {
        'id': repo_id,
        'name': f'repo-{repo_id}',
        'full_name': f'octo/repo-{repo_id}',
        'private': False,
        'archived': False,
        'fork': False,
        'default_branch': 'main',
        'updated_at': '2024-01-01T00:00:00Z',
        'pushed_at': '2024-01-01T00:00:00Z',
        'html_url': f'https://github.com/octo/repo-{repo_id}',
        'owner': {'login': 'octo'},
    }
    raw.update(overrides)
    return raw
