# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from netcheck.diagnostics import classify, explain, extract, reason_phrase, snippet, status_label, to_text
from netcheck.diagnostics.signals import TRUNCATION_MARKER
from netcheck.http.models import ProbeOutcome
from netcheck.models import Classification, Severity

LIMIT = 600


@pytest.mark.parametrize("status", ["200", "201", "204", "299"])
def test_classify_success(status):
    assert classify(status, 0) == Classification(Severity.SUCCESS, "success")


@pytest.mark.parametrize("status", ["300", "301", "302", "308"])
def test_classify_redirect_warns(status):
    assert classify(status, 0) == Classification(Severity.WARN, "redirect")


@pytest.mark.parametrize(
    ("status", "reason"),
    [("400", "client error"), ("404", "client error"), ("500", "server error"), ("503", "server error")],
)
def test_classify_http_errors_fail(status, reason):
    result = classify(status, 0)
    assert result.severity is Severity.FAIL
    assert result.reason == reason


@pytest.mark.parametrize("status", ["200", "301", "404", "000"])
@pytest.mark.parametrize("exit_code", [6, 7, 28, 35, 60])
def test_classify_transport_errors_win_over_status(status, exit_code):
    assert classify(status, exit_code) == Classification(Severity.FAIL, f"transport error (exit {exit_code})")


def test_classify_sentinel_fails_even_with_zero_exit():
    assert classify("000", 0) == Classification(Severity.FAIL, "transport error (exit 0)")


def test_classify_unexpected_status():
    assert classify("100", 0) == Classification(Severity.FAIL, "unexpected")
    assert classify("999", 0).reason == "unexpected"


def test_snippet_truncation_boundaries():
    exact = "a" * LIMIT
    assert snippet(exact, LIMIT) == exact

    over = "a" * (LIMIT + 1)
    cut = snippet(over, LIMIT)
    assert cut == "a" * LIMIT + "\n" + TRUNCATION_MARKER
    assert len(cut) <= LIMIT + len(TRUNCATION_MARKER) + 1

    assert snippet("  padded body \n", LIMIT) == "padded body"
    assert snippet("", LIMIT) == ""
    assert snippet(None, LIMIT) == ""


def test_to_text_replaces_undecodable_bytes():
    assert to_text(b"ok \xff\xfe done") == "ok \ufffd\ufffd done"
    assert to_text(None) == ""
    assert to_text("already text") == "already text"


def test_extract_hides_body_on_success():
    outcome = ProbeOutcome(
        transport_exit_code=0,
        http_status="200",
        raw_headers="HTTP/1.1 200 OK\nserver: x\nx-private: y",
        raw_body=b"<html>welcome</html>",
    )
    signals = extract(outcome)
    assert signals.body == ""
    assert signals.headers == "HTTP/1.1 200 OK\nserver: x"


def test_extract_keeps_prefix_of_failure_body():
    body = "  " + "e" * 1000 + "  "
    outcome = ProbeOutcome(transport_exit_code=0, http_status="500", raw_body=body.encode())
    signals = extract(outcome, limit=50)
    first_line = signals.body.splitlines()[0]
    assert body.strip().startswith(first_line)
    assert signals.body.endswith(TRUNCATION_MARKER)


def test_extract_shows_body_when_transport_failed_mid_response():
    outcome = ProbeOutcome(transport_exit_code=28, http_status="200", raw_body=b"partial")
    assert extract(outcome).body == "partial"


def test_extract_handles_missing_parts():
    signals = extract(ProbeOutcome.failure(7))
    assert signals.headers == ""
    assert signals.body == ""


def test_reason_phrase_lookup():
    assert reason_phrase("404") == "Not Found"
    assert reason_phrase("503") == "Service Unavailable"
    assert reason_phrase("299") == "Unexpected response"
    assert reason_phrase("000") == "Unexpected response"


def test_status_label_by_class():
    assert status_label("200") == "HTTP response is 200"
    assert status_label("301").startswith("Redirect")
    assert status_label("404").startswith("Client error")
    assert status_label("502").startswith("Server error")
    assert status_label("000").startswith("Connection/timeout error")
    assert status_label("100").startswith("Unexpected")


def test_explain_max_time_timeout():
    text = explain("000", 28, 20.01, 8, 20, "https://slow.example")
    assert "reached the maximum time limit of 20s" in text
    assert "curl_exit: 28 (Operation timeout)" in text
    assert "time_total: 20.010s" in text


def test_explain_connect_timeout():
    text = explain("000", 28, 8.2, 8, 20)
    assert "connection could not be established within 8s" in text
    assert "maximum time limit" not in text


def test_explain_generic_timeout():
    text = explain("000", 28, 1.0, 8, 20)
    assert "operation timed out" in text
    assert "maximum time limit" not in text
    assert "could not be established" not in text


def test_explain_transport_failure_message():
    text = explain("000", 6, 0.05, 8, 20, "https://nope.invalid")
    assert "curl_exit: 6 (Could not resolve host)" in text
    assert "time_total: 0.050s" in text
    assert "HTTP" not in text

    unknown = explain("000", 250, 0.0, 8, 20)
    assert "Unknown exit code" in unknown


def test_explain_http_statuses():
    text = explain("404", 0, 0.3, 8, 20, "https://example.com/missing")
    assert "HTTP 404 Not Found" in text
    assert "curl_exit" not in text

    redirect = explain("302", 0, 0.1, 8, 20, "https://example.com/login")
    assert "HTTP 302 Found" in redirect
    assert "Redirect target: https://example.com/login" in redirect

    odd = explain("299", 0, 0.1, 8, 20)
    assert "HTTP 299 Unexpected response" in odd


def test_explain_sentinel_with_zero_exit():
    text = explain("000", 0, 0.1, 8, 20)
    assert "curl_exit: 0 (OK)" in text
    assert "No HTTP response" in text
