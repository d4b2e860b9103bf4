#!/usr/bin/env python3
"""Input validation and log sanitization for devtool."""

import os
import re
from typing import List, Optional


class SecurityValidator:
    """Validation helpers for CLI inputs and credential-safe log output."""

    # GitHub limits organization logins to 39 characters
    MAX_ORG_NAME_LENGTH = 39
    MAX_URL_LENGTH = 2048
    MAX_PATH_LENGTH = 500

    # Alphanumerics and single hyphens, no leading/trailing hyphen
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9]))*$")

    @classmethod
    def validate_org_name(cls, name: str) -> str:
        """Validate a GitHub organization login."""
        if not name or not isinstance(name, str):
            raise ValueError("organization name must be a non-empty string")

        name = name.strip()
        if not name:
            raise ValueError("organization name must be a non-empty string")

        if len(name) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(name):
            raise ValueError("organization name contains invalid characters")

        return name

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        if not url.startswith(("http://", "https://")):
            raise ValueError("URL must use http or https scheme")

        if allowed_schemes:
            scheme = url.split("://")[0].lower()
            if scheme not in allowed_schemes:
                raise ValueError(
                    f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
                )

        return url.rstrip("/")

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate the snapshot output path."""
        if not path or not isinstance(path, str):
            raise ValueError("file path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"file path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("file path contains null bytes")

        if ".." in path.replace("\\", "/").split("/"):
            raise ValueError("file path contains path traversal sequences")

        if path.endswith(("/", "\\")):
            raise ValueError("file path must name a file, not a directory")

        return os.path.normpath(path)

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"bearer\s+[^\s]+", "Bearer [REDACTED]"),  # Authorization headers
            (r"\btoken\s*=\s*[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained PATs
            (r"ghp_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Classic PATs
            (r"gho_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # OAuth tokens
            (r"ghu_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # User-to-server tokens
            (r"ghs_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Server-to-server tokens
            (r"ghr_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Refresh tokens
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
