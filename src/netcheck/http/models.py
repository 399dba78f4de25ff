# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/outcome data models shared by the transports."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

NO_RESPONSE_STATUS = "000"

_STATUS_RE = re.compile(r"^\d{3}$")


def normalize_status(value: object) -> str:
    """Return a 3-digit status string or the ``"000"`` sentinel."""
    text = "" if value is None else str(value).strip()
    return text if _STATUS_RE.match(text) else NO_RESPONSE_STATUS


@dataclass(frozen=True)
class ProbeRequest:
    """One bounded-time GET against a single endpoint."""

    url: str
    connect_timeout: float
    max_time: float


@dataclass(frozen=True)
class ProbeOutcome:
    """Raw result of one transport attempt."""

    transport_exit_code: int
    http_status: str = NO_RESPONSE_STATUS
    effective_url: str = ""
    total_time: float = 0.0
    raw_headers: str = ""
    raw_body: bytes | str = b""
    error_message: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transport_exit_code", int(self.transport_exit_code))
        status = normalize_status(self.http_status)
        if status != self.http_status:
            object.__setattr__(self, "http_status", status)

    @property
    def responded(self) -> bool:
        return self.http_status != NO_RESPONSE_STATUS

    @classmethod
    def failure(
        cls,
        exit_code: int,
        *,
        url: str = "",
        total_time: float = 0.0,
        error_message: str | None = None,
    ) -> ProbeOutcome:
        """Outcome for an attempt that never produced an HTTP response."""
        return cls(
            transport_exit_code=int(exit_code),
            http_status=NO_RESPONSE_STATUS,
            effective_url=url,
            total_time=total_time,
            error_message=error_message,
        )


@dataclass(frozen=True)
class CurlMetrics:
    """Fields written by curl's ``-w`` metrics format."""

    code: str
    effective_url: str = ""
    time_total: float | None = None
    parsed: bool = True


UNPARSEABLE_METRICS = CurlMetrics(code=NO_RESPONSE_STATUS, parsed=False)


def parse_metrics(raw: str | None) -> CurlMetrics:
    """
    Parse curl metrics output.

    Returns ``UNPARSEABLE_METRICS`` instead of raising: any transport failure
    before headers arrive leaves the output empty or partial.
    """
    text = (raw or "").strip()
    if not text:
        return UNPARSEABLE_METRICS
    try:
        data = json.loads(text)
    except ValueError:
        return UNPARSEABLE_METRICS
    if not isinstance(data, dict):
        return UNPARSEABLE_METRICS

    try:
        time_total: float | None = float(data.get("time_total"))
    except (TypeError, ValueError):
        time_total = None

    return CurlMetrics(
        code=normalize_status(data.get("code")),
        effective_url=str(data.get("effective_url") or ""),
        time_total=time_total,
    )


__all__ = [
    "CurlMetrics",
    "NO_RESPONSE_STATUS",
    "ProbeOutcome",
    "ProbeRequest",
    "UNPARSEABLE_METRICS",
    "normalize_status",
    "parse_metrics",
]
