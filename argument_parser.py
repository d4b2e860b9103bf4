#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from config import (DEFAULT_API_URL, DEFAULT_SNAPSHOT_PATH, TOKEN_ENV_VAR,
                    Command, DoctorConfig, GitHubClientConfig, Scope,
                    StatusConfig, SyncConfig)
from logging_utils import Logger
from security import SecurityValidator
from status import TOOL_VERSION
from utils import MissingCredentialError, require_env

# Exit codes
EXIT_INVALID_ARGUMENTS = 1
EXIT_MISSING_CREDENTIALS = 1


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="devtool",
        description="Developer tooling CLI for GitHub integrations and debugging",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s status
  %(prog)s sync-github repos
  %(prog)s sync-github repos --org acme --out .cache/github/acme.json
  %(prog)s doctor github --org acme

Commands talking to GitHub read the token from {TOKEN_ENV_VAR}.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {TOOL_VERSION}")
    return parser


def _add_api_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--gh-api",
        dest="gh_api_url",
        default=DEFAULT_API_URL,
        help="Base URL of the GitHub API",
    )


def _add_org_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("--org", dest="org", help=help_text)


def _add_subcommands(parser: argparse.ArgumentParser) -> None:
    """Add the status, sync-github and doctor command trees."""
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    commands.add_parser("status", help="Show tool status and environment info")

    sync = commands.add_parser("sync-github", help="Sync GitHub data into a local snapshot")
    sync_targets = sync.add_subparsers(dest="target", metavar="TARGET")
    sync_targets.required = True
    repos = sync_targets.add_parser(
        "repos", help="Snapshot the repository listing and report changes"
    )
    _add_org_argument(repos, "Organization to list (default: authenticated user)")
    repos.add_argument(
        "--out",
        dest="out_path",
        default=DEFAULT_SNAPSHOT_PATH,
        help=f"Snapshot file to read and overwrite (default: {DEFAULT_SNAPSHOT_PATH})",
    )
    _add_api_argument(repos)

    doctor = commands.add_parser("doctor", help="Diagnose integration access problems")
    doctor_targets = doctor.add_subparsers(dest="target", metavar="TARGET")
    doctor_targets.required = True
    github = doctor_targets.add_parser("github", help="Diagnose GitHub token and org access")
    _add_org_argument(github, "Organization whose access should be checked")
    _add_api_argument(github)


def _validate_parsed_arguments(args) -> argparse.Namespace:
    """Validate and sanitize parsed arguments."""
    try:
        if getattr(args, "gh_api_url", None) is not None:
            args.gh_api_url = SecurityValidator.validate_url(args.gh_api_url, ["https"])
        if getattr(args, "org", None) is not None:
            args.org = SecurityValidator.validate_org_name(args.org)
        if getattr(args, "out_path", None) is not None:
            args.out_path = SecurityValidator.validate_file_path(args.out_path)
    except ValueError as e:
        Logger.error(f"invalid arguments: {e}")
        sys.exit(EXIT_INVALID_ARGUMENTS)
    return args


def _get_client_config(args) -> GitHubClientConfig:
    """Load the token from the environment and build the client config."""
    try:
        token = require_env(TOKEN_ENV_VAR)
    except MissingCredentialError as e:
        Logger.error(f"error: {e}")
        sys.exit(EXIT_MISSING_CREDENTIALS)
    return GitHubClientConfig(token=token, api_url=args.gh_api_url)


def parse_arguments(argv: Optional[List[str]] = None) -> Command:
    """Parse command line arguments and return the command to run."""
    parser = _create_argument_parser()
    _add_subcommands(parser)

    args = _validate_parsed_arguments(parser.parse_args(argv))

    if args.command == "status":
        return Command(name="status", config=StatusConfig())

    client = _get_client_config(args)
    if args.command == "sync-github":
        scope = Scope.for_org(args.org) if args.org else Scope.user()
        return Command(
            name="sync-github",
            config=SyncConfig(client=client, scope=scope, out_path=args.out_path),
        )
    return Command(name="doctor", config=DoctorConfig(client=client, org=args.org))
