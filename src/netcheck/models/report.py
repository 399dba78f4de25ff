# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Classification and run-result models."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..http.models import ProbeOutcome


class Severity(str, Enum):
    SUCCESS = "success"
    WARN = "warn"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Classification:
    """Outcome tier of a single probe plus a short reason code."""

    severity: Severity
    reason: str

    @property
    def failed(self) -> bool:
        return self.severity is Severity.FAIL


@dataclass
class EndpointReport:
    """Everything the renderer needs for one probed endpoint."""

    url: str
    outcome: ProbeOutcome
    classification: Classification
    explanation: str = ""
    headers: str = ""
    body: str = ""

    @property
    def severity(self) -> Severity:
        return self.classification.severity

    @property
    def status(self) -> str:
        return self.outcome.http_status

    def summary_line(self) -> str:
        return f"{self.url} — {self.status} ({self.classification.reason})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status,
            "severity": self.severity.value,
            "reason": self.classification.reason,
            "transport_exit_code": self.outcome.transport_exit_code,
            "effective_url": self.outcome.effective_url,
            "total_time": self.outcome.total_time,
        }


@dataclass
class RunResult:
    """
    Ordered url -> EndpointReport mapping built one probe at a time.

    Writes are serialized with a lock; once finalized the result is read-only.
    """

    _entries: dict[str, EndpointReport] = field(default_factory=dict)
    _finalized: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, report: EndpointReport) -> None:
        with self._lock:
            if self._finalized:
                raise RuntimeError("RunResult is finalized; no further probes can be recorded")
            self._entries[report.url] = report

    def finalize(self) -> RunResult:
        with self._lock:
            self._finalized = True
        return self

    @property
    def finalized(self) -> bool:
        return self._finalized

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EndpointReport]:
        return iter(list(self._entries.values()))

    def __getitem__(self, url: str) -> EndpointReport:
        return self._entries[url]

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def failures(self) -> list[EndpointReport]:
        return [report for report in self._entries.values() if report.classification.failed]

    @property
    def succeeded(self) -> bool:
        return not self.failures()

    def exit_code(self) -> int:
        """0 when nothing failed (warnings included), 1 otherwise."""
        return 0 if self.succeeded else 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoints": [report.to_dict() for report in self._entries.values()],
            "failed": [report.url for report in self.failures()],
        }


__all__ = ["Classification", "EndpointReport", "RunResult", "Severity"]
