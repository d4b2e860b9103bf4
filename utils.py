#!/usr/bin/env python3
"""Utility functions for devtool."""

import os
from datetime import datetime, timezone
from typing import Optional


class MissingCredentialError(Exception):
    """A required credential environment variable is unset or blank."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"missing {name}. Set it in your shell before running this command:\n"
            f"  export {name}=YOUR_TOKEN_HERE   (bash/zsh)\n"
            f'  $env:{name}="YOUR_TOKEN_HERE"   (PowerShell)'
        )


def require_env(name: str) -> str:
    """Return the stripped value of an environment variable or raise."""
    value = os.getenv(name)
    if not value or not value.strip():
        raise MissingCredentialError(name)
    return value.strip()


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return now.isoformat().replace("+00:00", "Z")


def format_unix_time(value: Optional[str]) -> Optional[str]:
    """Render a unix timestamp header value as ISO-8601, or None if unparseable."""
    if value is None:
        return None
    try:
        moment = datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return moment.isoformat().replace("+00:00", "Z")
