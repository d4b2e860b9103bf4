#!/usr/bin/env python3
"""Record and report dataclasses for devtool."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class NormalizedRepo:
    """Canonical repository record persisted in snapshots."""
    id: int
    name: str
    full_name: str
    private: bool
    archived: bool
    fork: bool
    default_branch: Optional[str]
    updated_at: Optional[str]
    pushed_at: Optional[str]
    html_url: str
    owner_login: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Snapshot:
    """Contents of a snapshot file."""
    generated_at: str
    repos: List[NormalizedRepo]

    @property
    def count(self) -> int:
        return len(self.repos)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "count": self.count,
            "repos": [repo.to_dict() for repo in self.repos],
        }


@dataclass
class DiffResult:
    """Partition of a current collection against a previous one."""
    added: List[NormalizedRepo] = field(default_factory=list)
    removed: List[NormalizedRepo] = field(default_factory=list)
    changed: List[NormalizedRepo] = field(default_factory=list)
    unchanged: List[NormalizedRepo] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)


@dataclass
class SyncReport:
    """Summary of a sync run."""
    scope: str
    out_path: str
    generated_at: str
    had_previous: bool
    total: int
    private_count: int
    archived_count: int
    added: int
    removed: int
    changed: int
    unchanged: int
    changed_sample: List[NormalizedRepo] = field(default_factory=list)
