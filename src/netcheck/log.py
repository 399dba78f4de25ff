# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the netcheck CLI; the report owns stdout, logs go to stderr."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOG_LEVEL_ENV = "NETCHECK_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# httpx logs every request at INFO; only let it through when debugging probes.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None, *, verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None, *, verbose: bool = False, stream: TextIO | None = None) -> int:
    """Configure root logging on stderr and return the effective level."""
    effective = resolve_level(level, verbose=verbose)
    logging.basicConfig(level=effective, format=LOG_FORMAT, stream=stream or sys.stderr)
    transport_level = logging.DEBUG if effective <= logging.DEBUG else max(effective, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective


__all__ = ["setup_logging", "resolve_level"]
