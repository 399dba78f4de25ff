# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Plain-text report rendering for probed endpoints."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from typing import TextIO

from ..diagnostics import status_label
from ..models import EndpointReport, Severity

DIVIDER = "-" * 30
DIVIDER_WIDE = "-" * 60
ERROR_PREFIX = "@@[error] "

_ANSI = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}
_RESET = "\033[0m"

# Presentation only; severity is decided by the classifier.
_STATUS_COLORS = {"2": "green", "3": "cyan", "4": "yellow", "5": "red"}


def color_enabled(stream: TextIO) -> bool:
    """Color when writing to a terminal and NO_COLOR is not set."""
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(callable(isatty) and isatty())


def status_color(status: str) -> str:
    if status == "000":
        return "red"
    return _STATUS_COLORS.get(status[:1], "red")


class ReportRenderer:
    """Writes one block per endpoint, then an optional failure summary."""

    def __init__(self, stream: TextIO | None = None, color: bool | None = None):
        self.stream = stream or sys.stdout
        self.color = color_enabled(self.stream) if color is None else color

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{_ANSI[color]}{text}{_RESET}"

    def _write(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def _section(self, text: str) -> None:
        if not text:
            return
        self._write(DIVIDER)
        self._write(text)

    def render(self, report: EndpointReport) -> None:
        self._write(f"Checking: {report.url}")
        self._write(self._paint(status_label(report.status), status_color(report.status)))
        self._write(f"Result: {report.severity.value.upper()}")

        if report.severity is Severity.SUCCESS:
            self._write(DIVIDER)
            self._write()
            return

        self._section(report.explanation)
        self._section(report.headers)
        self._section(report.body)
        self._write(DIVIDER_WIDE)
        self._write()
        self.stream.flush()

    def render_nothing_to_check(self) -> None:
        self._write("There aren't any URLs given to the component, exiting.")

    def render_failures(self, failures: Iterable[EndpointReport]) -> None:
        failures = list(failures)
        if not failures:
            return
        lines = ["These URLs failed:", *(report.summary_line() for report in failures)]
        for line in lines:
            self._write(self._paint(f"{ERROR_PREFIX}{line}", "red"))
        self.stream.flush()

    def render_error(self, message: str) -> None:
        for line in str(message).strip().splitlines():
            self._write(self._paint(f"{ERROR_PREFIX}{line}", "red"))
        self.stream.flush()


__all__ = ["DIVIDER", "DIVIDER_WIDE", "ERROR_PREFIX", "ReportRenderer", "color_enabled", "status_color"]
