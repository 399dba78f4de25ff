# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterator
from enum import IntEnum
from types import MappingProxyType

import httpx


class ConfigurationError(ValueError):
    """Raised when the run configuration can never produce a valid probe."""


class TransportExitCode(IntEnum):
    """curl-compatible transport exit codes."""

    OK = 0
    UNSUPPORTED_PROTOCOL = 1
    FAILED_INIT = 2
    URL_MALFORMAT = 3
    COULDNT_RESOLVE_PROXY = 5
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    REMOTE_ACCESS_DENIED = 9
    HTTP_RETURNED_ERROR = 22
    WRITE_ERROR = 23
    READ_ERROR = 26
    OUT_OF_MEMORY = 27
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    TOO_MANY_REDIRECTS = 47
    PEER_FAILED_VERIFICATION = 51
    GOT_NOTHING = 52
    SEND_ERROR = 55
    RECV_ERROR = 56
    SSL_CACERT = 60
    SSL_CACERT_BADFILE = 77
    REMOTE_FILE_NOT_FOUND = 78
    SSL_SHUTDOWN_FAILED = 80
    SSL_CRL_BADFILE = 82
    SSL_ISSUER_ERROR = 83
    SSL_CLIENTCERT = 90
    SSL_OPERATION_FAILED = 97
    HTTP3 = 98
    QUIC_CONNECT_ERROR = 99
    OTHER_SETUP_ERROR = 100


UNKNOWN_EXIT_MESSAGE = "Unknown exit code"

EXIT_MESSAGES: MappingProxyType[int, str] = MappingProxyType(
    {
        0: "OK",
        1: "Unsupported protocol",
        2: "Failed to initialize",
        3: "URL malformed",
        5: "Could not resolve proxy",
        6: "Could not resolve host",
        7: "Failed to connect to host",
        8: "Weird server reply",
        9: "Access denied to a resource",
        22: "HTTP error >= 400 returned",
        23: "Write error",
        26: "Read error",
        27: "Out of memory",
        28: "Operation timeout",
        35: "SSL connect error",
        47: "Too many redirects",
        51: "SSL certificate not OK",
        52: "Empty reply from server",
        55: "Failed sending network data",
        56: "Failure in receiving network data",
        60: "Peer certificate cannot be authenticated",
        77: "Problem with SSL CA cert",
        78: "Resource does not exist",
        80: "Failed to shut down SSL connection",
        82: "Could not load CRL file",
        83: "Issuer check failed",
        90: "Requested TLS level failed",
        97: "Operation failed in SSL layer",
        98: "HTTP/3 error",
        99: "QUIC connection error",
        100: "Other connection setup error",
    }
)


def exit_message(code: int) -> str:
    """User-facing message for a transport exit code."""
    return EXIT_MESSAGES.get(code, UNKNOWN_EXIT_MESSAGE)


_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)


def _iter_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _chain_has(exc: BaseException, *types: type[BaseException]) -> bool:
    return any(isinstance(item, types) for item in _iter_chain(exc))


def _chain_text(exc: BaseException) -> str:
    return " ".join(str(item) for item in _iter_chain(exc)).lower()


def exit_code_for_exception(exc: BaseException) -> int:
    """
    Map Python/httpx exceptions to a curl-compatible exit code.

    Order matters: timeouts, TLS and DNS failures are checked before the
    broader connection error buckets they inherit from.
    """
    if isinstance(exc, MemoryError):
        return TransportExitCode.OUT_OF_MEMORY
    if isinstance(exc, httpx.UnsupportedProtocol):
        return TransportExitCode.UNSUPPORTED_PROTOCOL
    if isinstance(exc, httpx.InvalidURL):
        return TransportExitCode.URL_MALFORMAT
    if isinstance(exc, httpx.TimeoutException) or _chain_has(exc, TimeoutError, socket.timeout):
        return TransportExitCode.OPERATION_TIMEDOUT
    if isinstance(exc, httpx.TooManyRedirects):
        return TransportExitCode.TOO_MANY_REDIRECTS
    if isinstance(exc, httpx.ProxyError):
        return TransportExitCode.COULDNT_RESOLVE_PROXY

    text = _chain_text(exc)
    if _chain_has(exc, ssl.SSLCertVerificationError) or "certificate verify failed" in text:
        return TransportExitCode.SSL_CACERT
    if _chain_has(exc, ssl.SSLError) or "[ssl" in text:
        return TransportExitCode.SSL_CONNECT_ERROR
    if _chain_has(exc, socket.gaierror) or any(marker in text for marker in _DNS_MARKERS):
        return TransportExitCode.COULDNT_RESOLVE_HOST
    if isinstance(exc, ValueError):
        return TransportExitCode.URL_MALFORMAT

    if isinstance(exc, httpx.ConnectError) or _chain_has(exc, ConnectionRefusedError):
        return TransportExitCode.COULDNT_CONNECT
    if isinstance(exc, httpx.RemoteProtocolError):
        if "without sending" in text or "no response" in text:
            return TransportExitCode.GOT_NOTHING
        return TransportExitCode.WEIRD_SERVER_REPLY
    if isinstance(exc, httpx.WriteError):
        return TransportExitCode.SEND_ERROR
    if isinstance(exc, (httpx.ReadError, httpx.DecodingError)):
        return TransportExitCode.RECV_ERROR
    return TransportExitCode.OTHER_SETUP_ERROR


__all__ = [
    "ConfigurationError",
    "EXIT_MESSAGES",
    "TransportExitCode",
    "UNKNOWN_EXIT_MESSAGE",
    "exit_code_for_exception",
    "exit_message",
]
