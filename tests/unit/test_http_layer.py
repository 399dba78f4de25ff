# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import itertools
import threading
import time

import httpx

from netcheck.config import ProbeSettings
from netcheck.http.adapters import StubTransport
from netcheck.http.client import create_default_transport
from netcheck.http.curl import CurlTransport
from netcheck.http.headers import build_header_block, pick_headers
from netcheck.http.httpx_client import HttpxTransport
from netcheck.http.models import (
    UNPARSEABLE_METRICS,
    ProbeOutcome,
    ProbeRequest,
    normalize_status,
    parse_metrics,
)

RAW_HEADERS = "\r\n".join(
    [
        "HTTP/1.1 404 Not Found",
        "Date: Mon, 01 Jan 2024 00:00:00 GMT",
        "Content-Type: text/html",
        "Set-Cookie: session=secret",
        "Server: nginx",
        "Cache-Control: no-cache",
        "server: duplicate",
        "",
    ]
)


def _transport(handler, **settings_kwargs):
    settings = ProbeSettings(**settings_kwargs)
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxTransport(settings, client=client)


def test_normalize_status_and_outcome_sentinel():
    assert normalize_status("200") == "200"
    assert normalize_status(301) == "301"
    assert normalize_status("") == "000"
    assert normalize_status("20") == "000"
    assert normalize_status(None) == "000"

    outcome = ProbeOutcome(transport_exit_code=0, http_status="garbage")
    assert outcome.http_status == "000"
    assert outcome.responded is False

    failure = ProbeOutcome.failure(6, url="https://x")
    assert failure.http_status == "000"
    assert failure.transport_exit_code == 6
    assert failure.effective_url == "https://x"


def test_parse_metrics_success_and_sentinel():
    metrics = parse_metrics('{"code":"301","effective_url":"https://a/","time_total":"0.125"}')
    assert metrics.parsed is True
    assert metrics.code == "301"
    assert metrics.effective_url == "https://a/"
    assert metrics.time_total == 0.125

    assert parse_metrics("") is UNPARSEABLE_METRICS
    assert parse_metrics('{"code":"2') is UNPARSEABLE_METRICS
    assert parse_metrics("[1, 2]") is UNPARSEABLE_METRICS
    assert UNPARSEABLE_METRICS.code == "000"

    partial = parse_metrics('{"code":"000","time_total":"n/a"}')
    assert partial.parsed is True
    assert partial.code == "000"
    assert partial.time_total is None


def test_pick_headers_keeps_allow_list_in_order():
    picked = pick_headers(RAW_HEADERS)
    assert picked.splitlines() == [
        "HTTP/1.1 404 Not Found",
        "Server: nginx",
        "Content-Type: text/html",
        "Cache-Control: no-cache",
    ]
    assert "Set-Cookie" not in picked


def test_pick_headers_is_idempotent():
    once = pick_headers(RAW_HEADERS)
    assert pick_headers(once) == once

    odd = "server: first\nserver: second\ncontent-length: 3"
    assert pick_headers(pick_headers(odd)) == pick_headers(odd)


def test_pick_headers_handles_empty_input():
    assert pick_headers("") == ""
    assert pick_headers(None) == ""
    assert pick_headers("\n\n") == ""


def test_build_header_block():
    block = build_header_block("HTTP/1.1 200 OK", [("server", "x"), ("content-type", "text/plain")])
    assert block == "HTTP/1.1 200 OK\nserver: x\ncontent-type: text/plain"
    assert build_header_block("", None) == ""


def test_httpx_transport_success():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, headers={"Server": "unit", "X-Secret": "1"}, content=b"hello")

    transport = _transport(handler, user_agent="UA/1.0")
    outcome = transport.probe(ProbeRequest(url="https://example.com/", connect_timeout=8, max_time=20))

    assert outcome.transport_exit_code == 0
    assert outcome.http_status == "200"
    assert outcome.effective_url == "https://example.com/"
    assert outcome.raw_body == b"hello"
    assert outcome.raw_headers.splitlines()[0] == "HTTP/1.1 200 OK"
    assert "server: unit" in outcome.raw_headers.lower()
    assert outcome.total_time >= 0
    assert seen["ua"] == "UA/1.0"


def test_httpx_transport_does_not_follow_redirects_by_default():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200)

    outcome = _transport(handler).probe(ProbeRequest(url="https://example.com/old", connect_timeout=8, max_time=20))
    assert outcome.http_status == "301"

    followed = _transport(handler, follow_redirects=True).probe(
        ProbeRequest(url="https://example.com/old", connect_timeout=8, max_time=20)
    )
    assert followed.http_status == "200"
    assert followed.effective_url == "https://example.com/new"


def test_httpx_transport_caps_body():
    def handler(request):
        return httpx.Response(500, content=b"x" * 100)

    outcome = _transport(handler, max_body_bytes=10).probe(
        ProbeRequest(url="https://example.com", connect_timeout=8, max_time=20)
    )
    assert outcome.http_status == "500"
    assert outcome.raw_body == b"x" * 10


def test_httpx_transport_maps_failures_without_raising():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    outcome = _transport(handler).probe(ProbeRequest(url="https://slow.example", connect_timeout=8, max_time=20))
    assert outcome.transport_exit_code == 28
    assert outcome.http_status == "000"
    assert outcome.effective_url == "https://slow.example"
    assert "timed out" in outcome.error_message

    def dns_handler(request):
        raise httpx.ConnectError("[Errno -2] Name or service not known", request=request)

    outcome = _transport(dns_handler).probe(ProbeRequest(url="https://nope.invalid", connect_timeout=8, max_time=20))
    assert outcome.transport_exit_code == 6
    assert outcome.http_status == "000"


def test_httpx_transport_enforces_total_deadline_while_streaming():
    ticks = itertools.chain([0.0], itertools.repeat(25.0))

    def handler(request):
        return httpx.Response(200, content=b"slow body")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = HttpxTransport(ProbeSettings(), client=client, clock=lambda: next(ticks))
    outcome = transport.probe(ProbeRequest(url="https://example.com", connect_timeout=8, max_time=20))

    assert outcome.transport_exit_code == 28
    assert outcome.http_status == "000"
    assert outcome.total_time == 25.0


def test_httpx_transport_bounds_slow_headers_by_max_time():
    release = threading.Event()

    def handler(request):
        # Server that never finishes its header block within max_time.
        release.wait(10)
        return httpx.Response(200, content=b"late")

    transport = _transport(handler, connect_timeout=1, max_time=1)
    started = time.monotonic()
    try:
        outcome = transport.probe(ProbeRequest(url="https://trickle.example", connect_timeout=1, max_time=1))
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert outcome.transport_exit_code == 28
    assert outcome.http_status == "000"
    assert outcome.effective_url == "https://trickle.example"
    assert elapsed < 1.5
    assert "timed out after 1s" in outcome.error_message


def test_httpx_transport_bounds_blocked_body_read_by_max_time():
    release = threading.Event()

    def body():
        yield b"first chunk"
        release.wait(10)
        yield b"second chunk"

    def handler(request):
        return httpx.Response(200, content=body())

    transport = _transport(handler, connect_timeout=1, max_time=1)
    started = time.monotonic()
    try:
        outcome = transport.probe(ProbeRequest(url="https://stall.example", connect_timeout=1, max_time=1))
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert outcome.transport_exit_code == 28
    assert outcome.http_status == "000"
    assert elapsed < 1.5


def test_stub_transport_returns_registered_outcomes():
    stub = StubTransport()
    stub.add("https://ok", ProbeOutcome(transport_exit_code=0, http_status="204"))
    assert stub.probe(ProbeRequest("https://ok", 1, 2)).http_status == "204"

    missing = stub.probe(ProbeRequest("https://missing", 1, 2))
    assert missing.transport_exit_code == 6
    assert [r.url for r in stub.requests] == ["https://ok", "https://missing"]
    stub.close()
    assert stub.closed is True


def test_create_default_transport_honors_setting():
    httpx_transport = create_default_transport(ProbeSettings())
    try:
        assert isinstance(httpx_transport, HttpxTransport)
    finally:
        httpx_transport.close()
    assert isinstance(create_default_transport(ProbeSettings(transport="curl")), CurlTransport)
