# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable explanations for non-success probe outcomes.

Output here is advisory only; it never feeds back into classification.
"""

from __future__ import annotations

import httpx

from ..errors import TransportExitCode, exit_message
from ..http.models import NO_RESPONSE_STATUS

UNEXPECTED_PHRASE = "Unexpected response"


def _seconds(value: float) -> str:
    return f"{int(value)}s" if float(value).is_integer() else f"{value:g}s"


def reason_phrase(status: str) -> str:
    """Descriptive phrase for a status code, e.g. 404 -> "Not Found"."""
    try:
        code = int(status)
    except (TypeError, ValueError):
        return UNEXPECTED_PHRASE
    return httpx.codes.get_reason_phrase(code) or UNEXPECTED_PHRASE


def status_label(status: str) -> str:
    """Headline for the endpoint block, grouped by status class."""
    if status == NO_RESPONSE_STATUS:
        return f"Connection/timeout error — HTTP response is {status}"
    prefixes = {
        "2": "HTTP response is",
        "3": "Redirect — HTTP response is",
        "4": "Client error — HTTP response is",
        "5": "Server error — HTTP response is",
    }
    return f"{prefixes.get(status[:1], 'Unexpected — HTTP response is')} {status}"


def describe_timeout(total_time: float, connect_timeout: float, max_time: float) -> str:
    """Say which bound an operation timeout hit: total time first, then connect."""
    if total_time >= max_time:
        return f"Timeout: reached the maximum time limit of {_seconds(max_time)}."
    if total_time >= connect_timeout:
        return f"Timeout: connection could not be established within {_seconds(connect_timeout)}."
    return "Timeout: the operation timed out before a response was received."


def explain(
    status: str,
    transport_exit_code: int,
    total_time: float,
    connect_timeout: float,
    max_time: float,
    effective_url: str | None = None,
) -> str:
    """Multi-line diagnostic text for one non-success outcome."""
    lines: list[str] = []

    if transport_exit_code != 0 or status == NO_RESPONSE_STATUS:
        lines.append(f"curl_exit: {transport_exit_code} ({exit_message(transport_exit_code)})")
        if transport_exit_code == TransportExitCode.OPERATION_TIMEDOUT:
            lines.append(describe_timeout(total_time, connect_timeout, max_time))
        elif transport_exit_code == 0:
            lines.append("No HTTP response could be read from the transport output.")

    if status != NO_RESPONSE_STATUS:
        lines.append(f"HTTP {status} {reason_phrase(status)}")
        if status.startswith("3") and effective_url:
            lines.append(f"Redirect target: {effective_url}")
        elif effective_url:
            lines.append(f"url: {effective_url}")
    elif effective_url:
        lines.append(f"url: {effective_url}")

    lines.append(f"time_total: {float(total_time):.3f}s")
    return "\n".join(lines)


__all__ = ["UNEXPECTED_PHRASE", "describe_timeout", "explain", "reason_phrase", "status_label"]
