#!/usr/bin/env python3
"""GitHub REST API client for repository listing and access diagnostics."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from config import GitHubClientConfig, Scope, ScopeKind
from logging_utils import Logger
from utils import format_unix_time

PAGE_SIZE = 100
API_VERSION = "2022-11-28"


class GitHubClientError(Exception):
    """Base class for failures talking to the GitHub API."""

    hint = "Request failed. See error details."


class GitHubConnectionError(GitHubClientError):
    """The request never produced an HTTP response (DNS, reset, timeout)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        self.hint = "Could not reach the GitHub API. Check network access and --gh-api."
        super().__init__(f"GitHub API request to {url} failed: {cause}")


class GitHubApiError(GitHubClientError):
    """GitHub answered with a non-2xx status."""

    def __init__(self, status: int, reason: str, hint: str, body: str) -> None:
        self.status = status
        self.reason = reason
        self.hint = hint
        self.body = body
        super().__init__(f"GitHub API {status} {reason}. {hint}")

    def __str__(self) -> str:
        message = super().__str__()
        if self.body:
            return f"{message}\n{self.body}".strip()
        return message


def build_hint(status: int, headers: Dict[str, str]) -> str:
    """Derive a remediation hint from a failed response."""
    if status == 401:
        return "Token invalid/expired or missing access."
    if status == 403:
        if headers.get("x-ratelimit-remaining") == "0":
            reset = headers.get("x-ratelimit-reset")
            reset_at = format_unix_time(reset)
            if reset_at:
                return f"Rate limited. Resets at unix={reset} ({reset_at})."
            return f"Rate limited. Resets at unix={reset}."
        return (
            "Forbidden. Check token permissions / org access "
            "(missing scope, fine-grained token not granted, or SSO not authorized)."
        )
    if status == 404:
        return "Not found. The resource may not exist or is not visible to this token."
    return "Request failed."


class GitHubClient:
    """Thin wrapper around the handful of GitHub endpoints devtool needs.

    Requests are issued one at a time and never retried; every non-2xx
    response surfaces as a GitHubApiError.
    """

    def __init__(
        self, config: GitHubClientConfig, session: Optional[requests.Session] = None
    ) -> None:
        if not config.token:
            raise ValueError("GitHubClient: token is required")
        self.config = config
        self.api_url = config.api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(self._get_api_headers())

    def _get_api_headers(self) -> dict:
        """Get standard API headers for GitHub requests."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.config.token}",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": self.config.user_agent,
        }

    def _request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.api_url}{path}"
        Logger.debug(f"GET {path} {params or ''}".rstrip())
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout_s)
        except requests.RequestException as e:
            raise GitHubConnectionError(url, e) from e

        if not response.ok:
            headers = {k.lower(): v for k, v in response.headers.items()}
            raise GitHubApiError(
                status=response.status_code,
                reason=response.reason or "",
                hint=build_hint(response.status_code, headers),
                body=response.text or "",
            )
        return response.json()

    @staticmethod
    def _page_params(per_page: int, page: int) -> Dict[str, Any]:
        return {
            "per_page": per_page,
            "page": page,
            "sort": "updated",
            "direction": "desc",
        }

    def get_viewer(self) -> Dict[str, Any]:
        return self._request("/user")

    def get_org(self, org: str) -> Dict[str, Any]:
        return self._request(f"/orgs/{org}")

    def get_org_membership(self, org: str) -> Dict[str, Any]:
        return self._request(f"/user/memberships/orgs/{org}")

    def list_user_repos(self, per_page: int = PAGE_SIZE, page: int = 1) -> List[Dict[str, Any]]:
        return self._request("/user/repos", self._page_params(per_page, page))

    def list_org_repos(
        self, org: str, per_page: int = PAGE_SIZE, page: int = 1
    ) -> List[Dict[str, Any]]:
        return self._request(f"/orgs/{org}/repos", self._page_params(per_page, page))

    def list_all_user_repos(self) -> List[Dict[str, Any]]:
        return self._collect_pages(lambda page: self.list_user_repos(PAGE_SIZE, page))

    def list_all_org_repos(self, org: str) -> List[Dict[str, Any]]:
        return self._collect_pages(lambda page: self.list_org_repos(org, PAGE_SIZE, page))

    def fetch_all_repositories(self, scope: Scope) -> List[Dict[str, Any]]:
        """Every repository visible in `scope`, most recently updated first."""
        if scope.kind == ScopeKind.ORG:
            return self.list_all_org_repos(scope.org)
        return self.list_all_user_repos()

    @staticmethod
    def _collect_pages(fetch_page) -> List[Dict[str, Any]]:
        # A short page is the last one.
        repos: List[Dict[str, Any]] = []
        page = 1
        while True:
            batch = fetch_page(page)
            repos.extend(batch)
            Logger.debug(f"page {page}: {len(batch)} repos")
            if len(batch) < PAGE_SIZE:
                break
            page += 1
        return repos
