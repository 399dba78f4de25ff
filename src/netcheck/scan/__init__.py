# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe orchestration: per-endpoint engine, renderer and run aggregation."""

from .engine import ProbeEngine
from .report import ReportRenderer
from .runner import RunAggregator, RunState

__all__ = ["ProbeEngine", "ReportRenderer", "RunAggregator", "RunState"]
