# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine: transport, extraction, classification and explanation for one endpoint."""

from __future__ import annotations

import logging

from ..config import ProbeSettings, load_probe_settings
from ..diagnostics import classify, explain, extract
from ..http.client import Transport, create_default_transport
from ..http.models import ProbeRequest
from ..models import EndpointReport, Severity

logger = logging.getLogger(__name__)


class ProbeEngine:
    """Runs a single endpoint through the diagnostic pipeline."""

    def __init__(self, transport: Transport | None = None, settings: ProbeSettings | None = None):
        self.settings = settings or load_probe_settings()
        self.transport = transport or create_default_transport(self.settings)

    def run(self, url: str) -> EndpointReport:
        request = ProbeRequest(
            url=url,
            connect_timeout=self.settings.connect_timeout,
            max_time=self.settings.max_time,
        )
        outcome = self.transport.probe(request)
        if outcome.error_message:
            logger.debug("Transport reported for %s: %s", url, outcome.error_message)

        classification = classify(outcome.http_status, outcome.transport_exit_code)
        signals = extract(outcome, limit=self.settings.body_snippet_len)

        explanation = ""
        if classification.severity is not Severity.SUCCESS:
            explanation = explain(
                outcome.http_status,
                outcome.transport_exit_code,
                outcome.total_time,
                request.connect_timeout,
                request.max_time,
                outcome.effective_url,
            )

        logger.info("%s -> %s (%s)", url, classification.severity.value, classification.reason)
        return EndpointReport(
            url=url,
            outcome=outcome,
            classification=classification,
            explanation=explanation,
            headers=signals.headers,
            body=signals.body,
        )
