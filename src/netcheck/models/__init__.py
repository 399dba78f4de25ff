# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for netcheck."""

from ..http.models import CurlMetrics, ProbeOutcome, ProbeRequest
from .report import Classification, EndpointReport, RunResult, Severity

__all__ = [
    "Classification",
    "CurlMetrics",
    "EndpointReport",
    "ProbeOutcome",
    "ProbeRequest",
    "RunResult",
    "Severity",
]
