# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import TransportExitCode, exit_code_for_exception
from .client import Transport
from .headers import build_header_block
from .models import ProbeOutcome, ProbeRequest

logger = logging.getLogger(__name__)


class MaxTimeExceeded(httpx.TimeoutException):
    """Raised when the overall probe deadline passes while the body is still streaming."""


class HttpxTransport(Transport):
    """Synchronous httpx transport with connect and total time bounds."""

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or load_probe_settings()
        self._clock = clock
        self._client = client or httpx.Client(
            follow_redirects=self.settings.follow_redirects,
            verify=self.settings.verify_ssl,
        )

    def probe(self, request: ProbeRequest) -> ProbeOutcome:
        """
        Run one GET with the whole attempt bounded by ``request.max_time``.

        httpx timeouts apply per read, so a server trickling headers or body
        would never trip them. The request runs on a daemon worker instead and
        the caller stops waiting once ``max_time`` of wall-clock time passes.
        """
        start = self._clock()
        cancelled = threading.Event()
        holder: dict[str, ProbeOutcome] = {}

        worker = threading.Thread(
            target=lambda: holder.setdefault("outcome", self._fetch(request, start, cancelled)),
            name=f"netcheck-probe-{request.url}",
            daemon=True,
        )
        worker.start()
        worker.join(request.max_time)

        outcome = holder.get("outcome")
        if outcome is None:
            # Worker stays blocked in a read; it stops at its next chunk or socket timeout.
            cancelled.set()
            logger.debug("Probe of %s exceeded max time of %ss", request.url, request.max_time)
            return ProbeOutcome.failure(
                TransportExitCode.OPERATION_TIMEDOUT,
                url=request.url,
                total_time=self._clock() - start,
                error_message=f"Operation timed out after {request.max_time}s",
            )
        return outcome

    def _fetch(self, request: ProbeRequest, start: float, cancelled: threading.Event) -> ProbeOutcome:
        deadline = start + request.max_time
        timeout = httpx.Timeout(request.max_time, connect=request.connect_timeout)
        headers = {"User-Agent": self.settings.user_agent}

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = 1024 * 1024

            with self._client.stream(
                "GET",
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=self.settings.follow_redirects,
            ) as resp:
                content = bytearray()
                for chunk in resp.iter_bytes():
                    if cancelled.is_set() or self._clock() > deadline:
                        raise MaxTimeExceeded(f"Operation timed out after {request.max_time}s", request=resp.request)
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if len(chunk) >= remaining:
                        content.extend(chunk[:remaining])
                        break
                    content.extend(chunk)

                status_line = f"{resp.http_version} {resp.status_code} {resp.reason_phrase}".strip()
                raw_headers = build_header_block(status_line, resp.headers.multi_items())

            return ProbeOutcome(
                transport_exit_code=TransportExitCode.OK,
                http_status=str(resp.status_code),
                effective_url=str(resp.url),
                total_time=self._clock() - start,
                raw_headers=raw_headers,
                raw_body=bytes(content),
            )
        except Exception as exc:  # noqa: BLE001
            exit_code = exit_code_for_exception(exc)
            logger.debug("Probe of %s failed with %s (exit %s): %s", request.url, type(exc).__name__, exit_code, exc)
            return ProbeOutcome.failure(
                exit_code,
                url=request.url,
                total_time=self._clock() - start,
                error_message=str(exc) or type(exc).__name__,
            )

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxTransport", "MaxTimeExceeded"]
