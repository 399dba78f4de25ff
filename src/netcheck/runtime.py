# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level netcheck facade."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress

from .config import ProbeSettings, load_probe_settings
from .http.client import Transport, create_default_transport
from .models import EndpointReport, RunResult
from .scan.engine import ProbeEngine
from .scan.report import ReportRenderer
from .scan.runner import RunAggregator


class NetCheck:
    """
    Convenience wrapper that wires one transport across every probe of a run.

    Settings are validated on construction so a bad timeout combination fails
    before any endpoint is contacted.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        settings: ProbeSettings | None = None,
        renderer: ReportRenderer | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.settings.validate()
        self.transport = transport or create_default_transport(self.settings)
        self.renderer = renderer or ReportRenderer()
        self.engine = ProbeEngine(self.transport, self.settings)

    def probe(self, url: str) -> EndpointReport:
        return self.engine.run(url)

    def run(self, urls: Sequence[str]) -> RunResult:
        return RunAggregator(self.engine, self.renderer).run(urls)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.transport, "close"):
                self.transport.close()

    def __enter__(self) -> NetCheck:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
