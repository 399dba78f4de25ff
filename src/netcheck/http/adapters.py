# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters that satisfy the Transport protocol without touching the network."""

from __future__ import annotations

from ..errors import TransportExitCode
from .client import Transport
from .models import ProbeOutcome, ProbeRequest


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests and dry runs."""

    def __init__(self, outcomes: dict[str, ProbeOutcome] | None = None):
        self._outcomes = outcomes or {}
        self.requests: list[ProbeRequest] = []
        self.closed = False

    def add(self, url: str, outcome: ProbeOutcome) -> None:
        self._outcomes[url] = outcome

    def probe(self, request: ProbeRequest) -> ProbeOutcome:
        self.requests.append(request)
        if request.url in self._outcomes:
            return self._outcomes[request.url]
        return ProbeOutcome.failure(
            TransportExitCode.COULDNT_RESOLVE_HOST,
            url=request.url,
            error_message="No stubbed outcome configured",
        )

    def close(self) -> None:
        self.closed = True


__all__ = ["StubTransport"]
