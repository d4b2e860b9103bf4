#!/usr/bin/env python3
"""`status` command: report tool and environment metadata."""

from __future__ import annotations

import json
import os
import platform
import sys
from typing import Any, Dict

from logging_utils import Logger
from utils import utc_now_iso

TOOL_NAME = "dev-integration-toolkit"
TOOL_VERSION = "0.1.0"

# Exit codes
EXIT_SUCCESS = 0


def collect_status() -> Dict[str, Any]:
    return {
        "name": TOOL_NAME,
        "version": TOOL_VERSION,
        "python": platform.python_version(),
        "platform": sys.platform,
        "env": os.getenv("DEVTOOL_ENV", "development"),
        "pid": os.getpid(),
        "time": utc_now_iso(),
    }


def run_status() -> int:
    info = collect_status()
    Logger.debug(f"status: {info}")
    sys.stdout.write(json.dumps(info, indent=2) + "\n")
    return EXIT_SUCCESS
