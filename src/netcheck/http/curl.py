# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport that shells out to the ``curl`` binary."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
import time
from pathlib import Path

from ..config import ProbeSettings, load_probe_settings
from ..errors import TransportExitCode
from .client import Transport
from .models import NO_RESPONSE_STATUS, ProbeOutcome, ProbeRequest, parse_metrics

logger = logging.getLogger(__name__)

METRICS_FMT = '{"code":"%{http_code}","effective_url":"%{url_effective}","time_total":"%{time_total}"}'

# Extra wall-clock allowance on top of --max-time before the process is killed.
PROCESS_GRACE_SECONDS = 5.0


def _format(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_curl_command(
    url: str,
    *,
    body_path: str,
    header_path: str,
    connect_timeout: float,
    max_time: float,
    settings: ProbeSettings,
    executable: str = "curl",
) -> list[str]:
    """Assemble the curl argument vector for one probe."""
    args = [
        executable,
        "-s",
        "-o",
        body_path,
        "-D",
        header_path,
        "-w",
        METRICS_FMT,
        "--connect-timeout",
        _format(connect_timeout),
        "--max-time",
        _format(max_time),
        "-A",
        settings.user_agent,
    ]
    if settings.follow_redirects:
        args.append("-L")
    if not settings.verify_ssl:
        args.append("-k")
    args.append(url)
    return args


def _read_bytes(path: Path, limit: int | None = None) -> bytes:
    if not path.exists():
        return b""
    with path.open("rb") as handle:
        return handle.read(limit) if limit else handle.read()


class CurlTransport(Transport):
    """
    Probe endpoints with an external ``curl`` process.

    Headers and body are dumped into a per-probe temporary directory whose name
    embeds the process id; the directory is removed on every exit path.
    """

    def __init__(self, settings: ProbeSettings | None = None, executable: str = "curl"):
        self.settings = settings or load_probe_settings()
        self.executable = executable

    def probe(self, request: ProbeRequest) -> ProbeOutcome:
        start = time.monotonic()
        with tempfile.TemporaryDirectory(prefix=f"netcheck-{os.getpid()}-") as workdir:
            body_path = Path(workdir) / "body"
            header_path = Path(workdir) / "headers"
            args = build_curl_command(
                request.url,
                body_path=str(body_path),
                header_path=str(header_path),
                connect_timeout=request.connect_timeout,
                max_time=request.max_time,
                settings=self.settings,
                executable=self.executable,
            )
            logger.debug("command: %s", shlex.join(args))

            try:
                completed = subprocess.run(
                    args,
                    capture_output=True,
                    text=True,
                    check=False,
                    timeout=request.max_time + PROCESS_GRACE_SECONDS,
                )
            except FileNotFoundError as exc:
                logger.debug("curl executable not found: %s", exc)
                return ProbeOutcome.failure(
                    TransportExitCode.FAILED_INIT,
                    url=request.url,
                    total_time=time.monotonic() - start,
                    error_message=str(exc),
                )
            except subprocess.TimeoutExpired:
                return ProbeOutcome.failure(
                    TransportExitCode.OPERATION_TIMEDOUT,
                    url=request.url,
                    total_time=time.monotonic() - start,
                    error_message="curl did not exit within the maximum time",
                )

            metrics = parse_metrics(completed.stdout)
            if not metrics.parsed:
                logger.debug("Unparseable curl metrics for %s: %r", request.url, completed.stdout)

            exit_code = completed.returncode
            status = metrics.code
            if exit_code != 0 and status == NO_RESPONSE_STATUS:
                raw_headers, raw_body = "", b""
            else:
                raw_headers = _read_bytes(header_path).decode("utf-8", errors="replace")
                raw_body = _read_bytes(body_path, self.settings.max_body_bytes)

            total_time = metrics.time_total if metrics.time_total is not None else time.monotonic() - start
            return ProbeOutcome(
                transport_exit_code=exit_code,
                http_status=status,
                effective_url=metrics.effective_url or request.url,
                total_time=total_time,
                raw_headers=raw_headers,
                raw_body=raw_body,
                error_message=completed.stderr.strip() or None,
            )

    def close(self) -> None:
        return None


__all__ = ["CurlTransport", "METRICS_FMT", "build_curl_command"]
