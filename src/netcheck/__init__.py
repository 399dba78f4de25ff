# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
netcheck package entrypoint.

This package probes configured endpoints over HTTP(S), classifies each outcome
into success/warn/fail and renders a diagnostic report. HTTP execution is
abstracted behind an injectable transport interface (httpx or an external curl
process), and domain objects are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings, resolve_endpoints
from .diagnostics import classify, explain, extract
from .errors import ConfigurationError, TransportExitCode
from .http import (
    CurlTransport,
    HttpxTransport,
    ProbeOutcome,
    ProbeRequest,
    StubTransport,
    Transport,
    create_default_transport,
)
from .log import setup_logging
from .models import Classification, EndpointReport, RunResult, Severity
from .runtime import NetCheck
from .scan import ProbeEngine, ReportRenderer, RunAggregator
from .version import __version__

__all__ = [
    "Classification",
    "ConfigurationError",
    "CurlTransport",
    "EndpointReport",
    "HttpxTransport",
    "NetCheck",
    "ProbeEngine",
    "ProbeOutcome",
    "ProbeRequest",
    "ProbeSettings",
    "ReportRenderer",
    "RunAggregator",
    "RunResult",
    "Severity",
    "StubTransport",
    "Transport",
    "TransportExitCode",
    "classify",
    "create_default_transport",
    "explain",
    "extract",
    "load_probe_settings",
    "resolve_endpoints",
    "setup_logging",
    "__version__",
]
