# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for netcheck."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"netcheck/{__version__}"
DEFAULT_CONNECT_TIMEOUT = 8
DEFAULT_MAX_TIME = 20
BODY_SNIPPET_LEN = 600

CONNECT_TIMEOUT_ENV = "AC_CHECK_NETWORK_CONNECT_TIMEOUT"
MAX_TIME_ENV = "AC_CHECK_NETWORK_MAX_TIME"
EXTRA_URLS_ENV = "AC_CHECK_NETWORK_EXTRA_URL_PARAMETERS"

TRANSPORTS = ("httpx", "curl")

# Order matters: endpoints are probed in this order.
WELL_KNOWN_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("AC_CHECK_NETWORK_GITHUB_APPCIRCLE", "https://github.com/appcircleio/"),
    ("AC_CHECK_NETWORK_RUBYGEMS", "https://rubygems.org"),
    ("AC_CHECK_NETWORK_INDEX_RUBYGEMS", "https://index.rubygems.org"),
    ("AC_CHECK_NETWORK_SERVICES_GRADLE_ORG", "https://services.gradle.org"),
    (
        "AC_CHECK_NETWORK_DL_GOOGLE_COM_ANDROID_REPOSITORY",
        "https://dl.google.com/android/repository/repository2-1.xml",
    ),
    (
        "AC_CHECK_NETWORK_DL_SSL_GOOGLE_COM_ANDROID_REPOSITORY",
        "https://dl-ssl.google.com/android/repository/repository2-1.xml",
    ),
    ("AC_CHECK_NETWORK_MAVEN_GOOGLE_COM", "https://maven.google.com/web/index.html"),
    ("AC_CHECK_NETWORK_REPO1_MAVEN_ORG_MAVEN2", "https://repo1.maven.org/maven2/"),
    ("AC_CHECK_NETWORK_CDCOAPODS_ORG", "https://cdn.cocoapods.org"),
    ("AC_CHECK_NETWORK_GITHUB_COCOAPODS_SPECS", "https://github.com/CocoaPods/Specs"),
    (
        "AC_CHECK_NETWORK_FIREBASEAPPDISTRIBUTION_GOOGLEAPIS_COM",
        "https://firebaseappdistribution.googleapis.com/$discovery/rest?version=v1",
    ),
)


def _positive_int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _transport_env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip().lower()
    return value if value in TRANSPORTS else default


@dataclass
class ProbeSettings:
    """Probe defaults shared by the transports and the explainer."""

    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    max_time: int = DEFAULT_MAX_TIME
    transport: str = "httpx"
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = False
    verify_ssl: bool = True
    max_body_bytes: int = 1024 * 1024
    body_snippet_len: int = BODY_SNIPPET_LEN

    @classmethod
    def from_env(cls) -> ProbeSettings:
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            connect_timeout=_positive_int_env(CONNECT_TIMEOUT_ENV, cls.connect_timeout),
            max_time=_positive_int_env(MAX_TIME_ENV, cls.max_time),
            transport=_transport_env("NETCHECK_TRANSPORT", cls.transport),
            user_agent=os.getenv("NETCHECK_USER_AGENT", cls.user_agent),
            follow_redirects=_bool_env("NETCHECK_FOLLOW_REDIRECTS", cls.follow_redirects),
            verify_ssl=_bool_env("NETCHECK_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=_positive_int_env("NETCHECK_MAX_BODY_BYTES", cls.max_body_bytes),
            body_snippet_len=_positive_int_env("NETCHECK_BODY_SNIPPET_LEN", cls.body_snippet_len),
        )

    def validate(self) -> None:
        """Reject timeout combinations that can never be honored."""
        if self.connect_timeout <= 0 or self.max_time <= 0:
            raise ConfigurationError("Timeouts must be positive integers.")
        if self.max_time < self.connect_timeout:
            raise ConfigurationError(
                f"Max time ({self.max_time}s) must be greater than or equal to "
                f"connect timeout ({self.connect_timeout}s)."
            )
        if self.transport not in TRANSPORTS:
            raise ConfigurationError(f"Unknown transport {self.transport!r}; expected one of {', '.join(TRANSPORTS)}.")


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()


def split_url_list(raw: str | None) -> list[str]:
    """Split a comma-separated URL list, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def resolve_endpoints(
    environ: Mapping[str, str] | None = None,
    *,
    extra: Iterable[str] = (),
) -> list[str]:
    """
    Build the ordered endpoint list.

    Well-known endpoints enabled through their toggle come first, followed by
    the free-form extra list and finally any explicitly supplied URLs.
    Duplicates keep their first position.
    """
    env = os.environ if environ is None else environ
    urls = [url for name, url in WELL_KNOWN_ENDPOINTS if (env.get(name) or "").strip().lower() == "true"]
    urls.extend(split_url_list(env.get(EXTRA_URLS_ENV)))
    urls.extend(url.strip() for url in extra if url and url.strip())
    return list(dict.fromkeys(urls))


__all__ = [
    "BODY_SNIPPET_LEN",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_TIME",
    "DEFAULT_USER_AGENT",
    "ProbeSettings",
    "WELL_KNOWN_ENDPOINTS",
    "load_probe_settings",
    "resolve_endpoints",
    "split_url_list",
]
