#!/usr/bin/env python3
"""Logging utilities for devtool."""

import os
import sys

import colorama

from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _level_from_env() -> int:
    name = os.getenv("LOG_LEVEL", "info").strip().lower()
    if name == "warning":
        name = "warn"
    return LEVELS.get(name, LEVELS["info"])


class Logger:
    """Handles formatted console output with colors and credential redaction."""

    PROCESS_NAME = "devtool"
    level = _level_from_env()

    @classmethod
    def set_level(cls, name: str) -> None:
        cls.level = LEVELS[name]

    @classmethod
    def debug(cls, *messages: str) -> None:
        if cls.level > LEVELS["debug"]:
            return
        cls._write_stdout(colorama.Fore.LIGHTBLACK_EX, *cls._sanitize(messages))

    @classmethod
    def info(cls, *messages: str) -> None:
        if cls.level > LEVELS["info"]:
            return
        cls._write_stdout(colorama.Fore.CYAN, *cls._sanitize(messages))

    @classmethod
    def warn(cls, *messages: str) -> None:
        if cls.level > LEVELS["warn"]:
            return
        cls._write_stdout(colorama.Fore.YELLOW, *cls._sanitize(messages))

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write_stderr(colorama.Fore.RED, *cls._sanitize(messages))

    @staticmethod
    def _sanitize(messages) -> list:
        return [SecurityValidator.sanitize_for_logging(str(m)) for m in messages]

    @classmethod
    def _write_stdout(cls, color: str, *messages: str) -> None:
        sys.stdout.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _write_stderr(cls, color: str, *messages: str) -> None:
        sys.stderr.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        message = " ".join(str(m) for m in messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
