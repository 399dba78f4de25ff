from __future__ import annotations

"""
netcheck, network-reachability diagnostics for build machines.
Copyright (C) 2025  Theori Inc.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""netcheck CLI."""

import argparse
import logging
from typing import Any

from ..config import TRANSPORTS, ProbeSettings, load_probe_settings, resolve_endpoints
from ..errors import ConfigurationError
from ..http import create_default_transport
from ..log import setup_logging
from ..runtime import NetCheck
from ..scan.report import ReportRenderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Probe configured endpoints over HTTP(S) and fail if any is unreachable",
    )
    parser.add_argument(
        "urls",
        nargs="*",
        metavar="URL",
        help="Extra URLs to check after the ones enabled through the environment",
    )
    parser.add_argument("--connect-timeout", type=int, help="Connection timeout in seconds (default 8)")
    parser.add_argument("--max-time", type=int, help="Maximum time per probe in seconds (default 20)")
    parser.add_argument("--transport", choices=TRANSPORTS, help="HTTP transport to use")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--follow-redirects", action="store_true", help="Follow redirects to the final URL")
    color = parser.add_mutually_exclusive_group()
    color.add_argument("--color", dest="color", action="store_true", default=None, help="Force colored output")
    color.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")
    parser.add_argument("--log-level", help="Logging level for diagnostics on stderr (default WARNING)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every probe, including httpx traffic")
    return parser


def apply_overrides(settings: ProbeSettings, args: Any) -> ProbeSettings:
    """Layer command-line flags on top of environment settings; non-positive values are ignored."""
    if args.connect_timeout is not None and args.connect_timeout > 0:
        settings.connect_timeout = args.connect_timeout
    if args.max_time is not None and args.max_time > 0:
        settings.max_time = args.max_time
    if args.transport:
        settings.transport = args.transport
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.follow_redirects:
        settings.follow_redirects = True
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, verbose=args.verbose)

    renderer = ReportRenderer(color=args.color)
    settings = apply_overrides(load_probe_settings(), args)
    try:
        settings.validate()
    except ConfigurationError as exc:
        renderer.render_error(str(exc))
        return 1

    urls = resolve_endpoints(extra=args.urls)
    if not urls:
        renderer.render_nothing_to_check()
        return 0

    transport = create_default_transport(settings)
    with NetCheck(transport=transport, settings=settings, renderer=renderer) as checker:
        result = checker.run(urls)

    logger.info("Checked %d endpoint(s), %d failed", len(result), len(result.failures()))
    return result.exit_code()


if __name__ == "__main__":
    raise SystemExit(main())
