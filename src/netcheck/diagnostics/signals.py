# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Trim a raw ProbeOutcome down to the parts worth showing."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import BODY_SNIPPET_LEN
from ..http.headers import pick_headers
from ..http.models import ProbeOutcome
from ..models.report import Severity
from .classifier import classify

TRUNCATION_MARKER = "(truncated)"


def to_text(value: bytes | bytearray | str | None) -> str:
    """Coerce transport output to text; undecodable bytes become U+FFFD."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def snippet(text: str | None, limit: int = BODY_SNIPPET_LEN) -> str:
    """Trimmed body text, cut at ``limit`` characters with a truncation marker."""
    trimmed = (text or "").strip()
    if not trimmed:
        return ""
    if len(trimmed) > limit:
        return f"{trimmed[:limit]}\n{TRUNCATION_MARKER}"
    return trimmed


@dataclass(frozen=True)
class Signals:
    headers: str = ""
    body: str = ""


def extract(outcome: ProbeOutcome, *, limit: int = BODY_SNIPPET_LEN) -> Signals:
    """Filtered header block plus a body snippet (bodies are only kept for non-success outcomes)."""
    headers = pick_headers(to_text(outcome.raw_headers))
    if classify(outcome.http_status, outcome.transport_exit_code).severity is Severity.SUCCESS:
        return Signals(headers=headers)
    return Signals(headers=headers, body=snippet(to_text(outcome.raw_body), limit))


__all__ = ["Signals", "TRUNCATION_MARKER", "extract", "snippet", "to_text"]
