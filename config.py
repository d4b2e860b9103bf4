#!/usr/bin/env python3
"""Configuration dataclasses for devtool."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "dev-integration-toolkit"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_SNAPSHOT_PATH = ".cache/github/repos.json"
TOKEN_ENV_VAR = "GITHUB_TOKEN"


class ScopeKind(Enum):
    """Enumeration for repository listing scopes."""
    USER = "user"
    ORG = "org"


@dataclass(frozen=True)
class Scope:
    """Whose repositories to list: the authenticated user or an organization."""
    kind: ScopeKind
    org: Optional[str] = None

    @classmethod
    def user(cls) -> "Scope":
        return cls(ScopeKind.USER)

    @classmethod
    def for_org(cls, org: str) -> "Scope":
        return cls(ScopeKind.ORG, org)

    def describe(self) -> str:
        if self.kind == ScopeKind.ORG:
            return f"org:{self.org}"
        return "user"


@dataclass
class GitHubClientConfig:
    """GitHub API connection configuration."""
    token: str
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_s: float = DEFAULT_TIMEOUT_S


@dataclass
class SyncConfig:
    """Configuration for `sync-github repos`."""
    client: GitHubClientConfig
    scope: Scope
    out_path: str = DEFAULT_SNAPSHOT_PATH


@dataclass
class DoctorConfig:
    """Configuration for `doctor github`."""
    client: GitHubClientConfig
    org: Optional[str] = None


@dataclass
class StatusConfig:
    """Configuration for `status`."""


@dataclass
class Command:
    """A parsed CLI invocation."""
    name: str
    config: Union[SyncConfig, DoctorConfig, StatusConfig]
