#!/usr/bin/env python3
"""Read and write repository snapshot files."""

from __future__ import annotations

import json
import os
from typing import List, Optional

from logging_utils import Logger
from models import NormalizedRepo, Snapshot
from normalizer import normalize_repo


def read_previous(path: str) -> Optional[List[NormalizedRepo]]:
    """Load the repos of a previous snapshot.

    Returns None when there is no usable history: the file is missing,
    unreadable, not JSON, not an object, lacks a `repos` list, or holds an
    entry that cannot be parsed. None is never an error condition.
    """
    if not os.path.exists(path):
        Logger.debug(f"no previous snapshot at {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError, RecursionError) as e:
        Logger.debug(f"ignoring unreadable snapshot {path}: {e}")
        return None

    if not isinstance(data, dict) or not isinstance(data.get("repos"), list):
        Logger.debug(f"ignoring snapshot without a repos list: {path}")
        return None

    try:
        return [_entry_to_repo(entry) for entry in data["repos"]]
    except (KeyError, TypeError, ValueError) as e:
        Logger.debug(f"ignoring snapshot with malformed entry {path}: {e}")
        return None


def _entry_to_repo(entry: dict) -> NormalizedRepo:
    # Snapshot entries store the owner flat; rebuild the nested shape the
    # normalizer reads from.
    raw = dict(entry)
    raw["owner"] = {"login": entry.get("owner_login")}
    return normalize_repo(raw)


def write_snapshot(path: str, snapshot: Snapshot) -> None:
    """Write `snapshot` to `path`, replacing any existing file.

    Missing parent directories are created. OSErrors propagate.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", encoding="utf-8") as handle:
        json.dump(snapshot.to_dict(), handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    Logger.debug(f"wrote snapshot with {snapshot.count} repos to {path}")
