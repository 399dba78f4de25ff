# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map (HTTP status, transport exit code) to a severity tier."""

from __future__ import annotations

from ..http.models import NO_RESPONSE_STATUS
from ..models.report import Classification, Severity

SUCCESS = Classification(Severity.SUCCESS, "success")
REDIRECT = Classification(Severity.WARN, "redirect")
CLIENT_ERROR = Classification(Severity.FAIL, "client error")
SERVER_ERROR = Classification(Severity.FAIL, "server error")
UNEXPECTED = Classification(Severity.FAIL, "unexpected")

# First match wins; later prefixes are only reached as fallthrough.
_PREFIX_RULES: tuple[tuple[str, Classification], ...] = (
    ("2", SUCCESS),
    ("3", REDIRECT),
    ("4", CLIENT_ERROR),
    ("5", SERVER_ERROR),
)


def classify(http_status: str, transport_exit_code: int) -> Classification:
    """
    Classify one probe.

    Any transport failure, or a missing response, is a hard failure regardless
    of the status. 3xx only warns; 4xx fails because the dependency is not
    usable even though the host answered.
    """
    if transport_exit_code != 0 or http_status == NO_RESPONSE_STATUS:
        return Classification(Severity.FAIL, f"transport error (exit {transport_exit_code})")
    status = http_status or ""
    for prefix, classification in _PREFIX_RULES:
        if status.startswith(prefix):
            return classification
    return UNEXPECTED


__all__ = ["CLIENT_ERROR", "REDIRECT", "SERVER_ERROR", "SUCCESS", "UNEXPECTED", "classify"]
