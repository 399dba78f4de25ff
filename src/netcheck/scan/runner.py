# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run every configured endpoint and aggregate the results."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..models import RunResult
from .engine import ProbeEngine
from .report import ReportRenderer

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    PROBING = "probing"
    DONE = "done"


class RunAggregator:
    """
    Probes endpoints one at a time: IDLE -> PROBING(i) -> ... -> DONE.

    Every endpoint is attempted; pass/fail is only decided once all probes
    have been recorded.
    """

    def __init__(self, engine: ProbeEngine, renderer: ReportRenderer | None = None):
        self.engine = engine
        self.renderer = renderer or ReportRenderer()
        self.state = RunState.IDLE
        self.index = 0

    def run(self, urls: Sequence[str]) -> RunResult:
        if self.state is not RunState.IDLE:
            raise RuntimeError(f"Aggregator already used (state={self.state.value})")

        result = RunResult()
        if not urls:
            logger.info("No endpoints configured; nothing to check")
            self.renderer.render_nothing_to_check()
            self.state = RunState.DONE
            return result.finalize()

        self.state = RunState.PROBING
        for index, url in enumerate(urls):
            self.index = index
            logger.debug("Probing %d/%d: %s", index + 1, len(urls), url)
            report = self.engine.run(url)
            result.record(report)
            self.renderer.render(report)

        self.state = RunState.DONE
        result.finalize()
        failures = result.failures()
        if failures:
            self.renderer.render_failures(failures)
        return result


__all__ = ["RunAggregator", "RunState"]
