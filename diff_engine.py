#!/usr/bin/env python3
"""Compare two repository collections keyed by repository id."""

from __future__ import annotations

from typing import Dict, List

from models import DiffResult, NormalizedRepo


def is_changed(old: NormalizedRepo, new: NormalizedRepo) -> bool:
    """Only the two activity timestamps count as a change.

    Renames and visibility flips that leave updated_at/pushed_at untouched
    are reported as unchanged.
    """
    return old.updated_at != new.updated_at or old.pushed_at != new.pushed_at


def diff_repos(
    previous: List[NormalizedRepo], current: List[NormalizedRepo]
) -> DiffResult:
    """Partition `current` into added/changed/unchanged and collect removals.

    Each partition keeps the order of the collection it was drawn from.
    """
    previous_by_id: Dict[int, NormalizedRepo] = {repo.id: repo for repo in previous}
    current_ids = {repo.id for repo in current}

    result = DiffResult()
    for repo in current:
        old = previous_by_id.get(repo.id)
        if old is None:
            result.added.append(repo)
        elif is_changed(old, repo):
            result.changed.append(repo)
        else:
            result.unchanged.append(repo)

    for repo in previous:
        if repo.id not in current_ids:
            result.removed.append(repo)

    return result
