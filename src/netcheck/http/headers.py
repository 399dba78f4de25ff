# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header block utilities.

HTTP header field names are case-insensitive (RFC 9110). Transports hand us an
unparsed header block, so filtering works line by line on ``name:`` prefixes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

HEADER_KEYS: tuple[str, ...] = ("server", "content-type", "content-length", "cache-control")


def build_header_block(
    status_line: str,
    headers: Mapping[str, str] | Iterable[tuple[str, str]] | None,
) -> str:
    """Render a status line plus ``name: value`` lines, as curl's ``-D`` dump would."""
    lines = [status_line.strip()] if status_line and status_line.strip() else []
    if headers:
        items = headers.items() if isinstance(headers, Mapping) else headers
        for key, value in items:
            if key is None:
                continue
            lines.append(f"{key}: {'' if value is None else value}")
    return "\n".join(lines)


def pick_headers(raw_headers: str | None, keys: Iterable[str] = HEADER_KEYS) -> str:
    """
    Keep the status line plus at most one line per allow-listed header.

    The first non-empty line is kept verbatim; the remaining lines are searched
    for each key in allow-list order. Every other header is dropped.
    """
    if not raw_headers:
        return ""
    lines = [line.strip() for line in raw_headers.strip().splitlines()]
    if not lines or not lines[0]:
        return ""

    picked = [lines[0]]
    rest = lines[1:]
    for key in keys:
        prefix = f"{key.lower()}:"
        match = next((line for line in rest if line.lower().startswith(prefix)), None)
        if match is not None:
            picked.append(match)
    return "\n".join(picked)


__all__ = ["HEADER_KEYS", "build_header_block", "pick_headers"]
