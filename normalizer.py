#!/usr/bin/env python3
"""Map raw GitHub repository payloads onto NormalizedRepo."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from models import NormalizedRepo


def _owner_login(raw: Dict[str, Any]) -> Optional[str]:
    owner = raw.get("owner")
    if not isinstance(owner, dict):
        return None
    return owner.get("login")


def normalize_repo(raw: Dict[str, Any]) -> NormalizedRepo:
    """Build a NormalizedRepo from a raw API record.

    Optional fields fall back to False/None. Required fields (id, name,
    full_name, html_url) are looked up directly, so a malformed payload
    raises KeyError.
    """
    return NormalizedRepo(
        id=int(raw["id"]),
        name=raw["name"],
        full_name=raw["full_name"],
        private=bool(raw.get("private", False)),
        archived=bool(raw.get("archived", False)),
        fork=bool(raw.get("fork", False)),
        default_branch=raw.get("default_branch"),
        updated_at=raw.get("updated_at"),
        pushed_at=raw.get("pushed_at"),
        html_url=raw["html_url"],
        owner_login=_owner_login(raw),
    )


def normalize_repos(raws: Iterable[Dict[str, Any]]) -> List[NormalizedRepo]:
    return [normalize_repo(raw) for raw in raws]
