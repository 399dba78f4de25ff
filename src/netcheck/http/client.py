# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import ProbeOutcome, ProbeRequest


class Transport(Protocol):
    """Minimal protocol for probing one endpoint; must not raise for network failures."""

    def probe(self, request: ProbeRequest) -> ProbeOutcome: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: ProbeSettings | None = None) -> Transport:
    """Factory for the transport selected in settings (httpx unless ``curl`` is requested)."""
    settings = settings or load_probe_settings()
    if settings.transport == "curl":
        from .curl import CurlTransport

        return CurlTransport(settings)

    from .httpx_client import HttpxTransport

    return HttpxTransport(settings)
