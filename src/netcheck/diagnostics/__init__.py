# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Signal extraction, classification and explanation for probe outcomes."""

from .classifier import classify
from .explainer import explain, reason_phrase, status_label
from .signals import Signals, extract, snippet, to_text

__all__ = [
    "Signals",
    "classify",
    "explain",
    "extract",
    "reason_phrase",
    "snippet",
    "status_label",
    "to_text",
]
