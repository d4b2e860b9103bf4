#!/usr/bin/env python3
"""Step-by-step diagnosis of GitHub token and organization access."""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from config import TOKEN_ENV_VAR, DoctorConfig
from github_client import GitHubClient, GitHubClientError
from logging_utils import Logger

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1

REPO_SAMPLE_SIZE = 5


class GitHubDoctor:
    """Runs independent access probes; a failed probe never stops later ones
    except where nothing further can be learned (no identity)."""

    def __init__(self, cfg: DoctorConfig, client: Optional[GitHubClient] = None) -> None:
        self.cfg = cfg
        self.gh = client or GitHubClient(cfg.client)

    def _probe(self, label: str, fn: Callable[[], Any]) -> Tuple[Any, Optional[str]]:
        """Run one check, returning (data, None) or (None, hint)."""
        try:
            return fn(), None
        except GitHubClientError as e:
            Logger.warn(f"doctor check '{label}' failed: {e}")
            return None, e.hint
        except Exception as e:
            Logger.warn(f"doctor check '{label}' raised unexpectedly: {e}")
            return None, GitHubClientError.hint

    def run(self) -> int:
        org = self.cfg.org
        Logger.info("GitHub doctor")

        # Reaching this point means the token was loaded
        Logger.info(f"ok: {TOKEN_ENV_VAR} is set")

        viewer, hint = self._probe("viewer", self.gh.get_viewer)
        if hint is not None:
            Logger.error("fail: could not authenticate with GitHub")
            Logger.error(f"  -> {hint}")
            Logger.error(
                f"  fix: regenerate the token or ensure it has access, then re-export "
                f"{TOKEN_ENV_VAR}."
            )
            return EXIT_EXECUTION_ERROR
        Logger.info(f"ok: authenticated as {viewer.get('login', 'unknown')}")

        if not org:
            Logger.info("ok: no org provided (user scope)")
            Logger.info(
                "next: try `sync-github repos` (user scope) or add `--org <org>` "
                "to diagnose org access."
            )
            return EXIT_SUCCESS

        Logger.info(f"ok: org check requested: {org}")
        self._check_org(org)
        self._check_membership(org)
        return self._check_org_repos(org)

    def _check_org(self, org: str) -> None:
        data, hint = self._probe("org", lambda: self.gh.get_org(org))
        if hint is not None:
            Logger.warn(f"fail: org '{org}' not accessible")
            Logger.warn(f"  -> {hint}")
            Logger.warn("  fix: confirm the org name is correct and that your account can view it.")
            return
        Logger.info(f"ok: org exists/visible: {data.get('login') or org}")

    def _check_membership(self, org: str) -> None:
        data, hint = self._probe("org-membership", lambda: self.gh.get_org_membership(org))
        if hint is not None:
            Logger.warn(f"fail: cannot confirm membership for org '{org}'")
            Logger.warn(f"  -> {hint}")
            Logger.warn("  common causes:")
            Logger.warn("  - you are not a member of the org (or membership is private)")
            Logger.warn("  - the token is not authorized for org access (SSO/org policy)")
            Logger.warn("  - the token's permissions are too limited")
            return

        state = (data or {}).get("state") or "unknown"
        role = (data or {}).get("role") or "unknown"
        Logger.info(f"ok: org membership: state={state}, role={role}")
        if state != "active":
            Logger.warn("membership is not active; org repositories may be hidden until it is accepted")

    def _check_org_repos(self, org: str) -> int:
        repos, hint = self._probe("org-repos", lambda: self.gh.list_all_org_repos(org))
        if hint is not None:
            Logger.error(f"fail: cannot list org repos for '{org}'")
            Logger.error(f"  -> {hint}")
            Logger.error("  fix:")
            Logger.error("  - ensure your fine-grained token includes repo read access for that org")
            Logger.error("  - if the org requires SSO, authorize the token for SSO")
            return EXIT_EXECUTION_ERROR

        Logger.info(f"ok: org repos visible: {len(repos)}")
        if not repos:
            Logger.warn("seeing 0 repos usually means:")
            Logger.warn("  - you don't have access to any repos in that org, or")
            Logger.warn("  - the org has no repos, or")
            Logger.warn("  - visibility is restricted by org policies")
            Logger.warn("suggestion:")
            Logger.warn("  - verify you are a member of the org with access to at least one repo")
            Logger.warn("  - recreate the token and explicitly grant access to that org's repos")
        else:
            Logger.info(f"sample repos (top {REPO_SAMPLE_SIZE}):")
            for repo in repos[:REPO_SAMPLE_SIZE]:
                Logger.info(f"  - {repo.get('full_name')}")

        Logger.info("doctor complete")
        return EXIT_SUCCESS
