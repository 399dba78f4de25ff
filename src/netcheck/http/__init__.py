# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport exports."""

from .adapters import StubTransport
from .client import Transport, create_default_transport
from .curl import METRICS_FMT, CurlTransport
from .headers import HEADER_KEYS, build_header_block, pick_headers
from .httpx_client import HttpxTransport
from .models import (
    NO_RESPONSE_STATUS,
    UNPARSEABLE_METRICS,
    CurlMetrics,
    ProbeOutcome,
    ProbeRequest,
    normalize_status,
    parse_metrics,
)

__all__ = [
    "HEADER_KEYS",
    "METRICS_FMT",
    "NO_RESPONSE_STATUS",
    "UNPARSEABLE_METRICS",
    "CurlMetrics",
    "CurlTransport",
    "HttpxTransport",
    "ProbeOutcome",
    "ProbeRequest",
    "StubTransport",
    "Transport",
    "build_header_block",
    "create_default_transport",
    "normalize_status",
    "parse_metrics",
    "pick_headers",
]
