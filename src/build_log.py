#!/usr/bin/env python3
"""
Build log output for the Trac publisher
"""

import sys


def _escape(message: str) -> str:
    """Escape a message for use in a GitHub workflow command"""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class BuildLog:
    """Progress sink for the build log.

    Warnings and errors are printed as GitHub workflow commands so they show
    up as annotations on the run.
    """

    def __init__(self, stream=None):
        self.stream = stream

    def _print(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def info(self, message: str) -> None:
        self._print(message)

    def warning(self, message: str) -> None:
        self._print(f"::warning::{_escape(message)}")

    def error(self, message: str) -> None:
        self._print(f"::error::{_escape(message)}")
