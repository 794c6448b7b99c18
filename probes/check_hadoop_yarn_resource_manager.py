#!/usr/bin/env python3
"""
check_hadoop_yarn_resource_manager.py — Nagios plugin for the YARN Resource Manager.

Checks:
  --node-managers   active / decommissioned / lost / unhealthy / rebooted node
                    managers, unhealthy count vs thresholds (default w=0/c=0)
  --app-stats       running, pending, active, submitted, completed, killed,
                    failed apps plus active users and available mb
  --heap-used       Resource Manager heap memory used % (default w=80/c=90)
  --non-heap-used   Resource Manager non-heap memory used % (default w=80/c=90)

Prints one `STATUS: message | perfdata` line and exits 0/1/2/3
(OK/WARNING/CRITICAL/UNKNOWN). Any usage, connection, decode or data
problem is UNKNOWN.

Usage:
    python3 -m probes.check_hadoop_yarn_resource_manager -H rm1 --heap-used
    HADOOP_YARN_RESOURCE_MANAGER_HOST=rm1 check_hadoop_yarn_resource_manager --node-managers -v
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Optional

from pydantic import ValidationError

from config.settings import DEFAULT_PORT, DEFAULT_TIMEOUT, load_settings
from probes import __version__
from probes.jmx import CheckError, CheckResult, Status
from probes.jmx.fetch import PROG
from probes.jmx.resource_manager import CheckMode, resolve_thresholds, run_check
from probes.log import configure_logger

log = logging.getLogger("yarn_rm_check")

MODE_ERROR = "must specify exactly one of " + " / ".join(f"--{m.value}" for m in CheckMode)


class UsageError(Exception):
    """Bad command line; reported as UNKNOWN before any request is made."""


class SelfTimeout(CheckError):
    pass


class _PluginArgumentParser(argparse.ArgumentParser):
    # argparse exits 2 on bad flags; the plugin contract wants UNKNOWN (3)
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _PluginArgumentParser(
        prog=PROG,
        description="Nagios Plugin to check Hadoop Yarn Resource Manager via its JMX servlet.",
    )
    parser.add_argument("-H", "--host", help="Resource Manager host ($HADOOP_YARN_RESOURCE_MANAGER_HOST, $HADOOP_HOST, $HOST)")
    parser.add_argument("-P", "--port", type=int, help=f"Resource Manager port (default: {DEFAULT_PORT})")
    parser.add_argument("-u", "--user", help="Username for HTTP basic auth")
    parser.add_argument("-p", "--password", help="Password for HTTP basic auth")

    modes = parser.add_argument_group("checks (exactly one)")
    modes.add_argument(
        "--node-managers",
        action="store_true",
        help="Node Manager metrics, check unhealthy node managers against thresholds (default w=0/c=0)",
    )
    modes.add_argument(
        "--app-stats",
        action="store_true",
        help="Yarn App stats (running, pending, active, submitted, completed, killed, failed)",
    )
    modes.add_argument(
        "--heap-used",
        action="store_true",
        help="Heap memory used %% against thresholds (default w=80/c=90)",
    )
    modes.add_argument(
        "--non-heap-used",
        action="store_true",
        help="Non-Heap memory used %% against thresholds (default w=80/c=90)",
    )

    parser.add_argument("-w", "--warning", type=float, help="Warning threshold")
    parser.add_argument("-c", "--critical", type=float, help="Critical threshold")
    parser.add_argument(
        "-t", "--timeout", type=int, help=f"Timeout in secs (default: {DEFAULT_TIMEOUT})"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Verbose mode (-v, -vv, -vvv)"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s version {__version__}")
    return parser


def select_mode(args: argparse.Namespace) -> CheckMode:
    selected = [m for m in CheckMode if getattr(args, m.value.replace("-", "_"))]
    if len(selected) != 1:
        raise UsageError(MODE_ERROR)
    return selected[0]


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(e["msg"].removeprefix("Value error, ") for e in exc.errors())


def _on_alarm(timeout: int):
    def handler(signum, frame):  # noqa: ANN001
        raise SelfTimeout(f"self timed out after {timeout} seconds")

    return handler


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        mode = select_mode(args)
    except UsageError as exc:
        print(f"{Status.UNKNOWN.name}: {exc}")
        parser.print_usage(sys.stderr)
        return Status.UNKNOWN

    configure_logger(args.verbose)

    try:
        cfg = load_settings(
            {
                "HOST": args.host,
                "PORT": args.port,
                "USER": args.user,
                "PASSWORD": args.password,
                "TIMEOUT": args.timeout,
            }
        )
        thresholds = resolve_thresholds(mode, args.warning, args.critical)
    except ValidationError as exc:
        print(f"{Status.UNKNOWN.name}: {_validation_message(exc)}")
        parser.print_usage(sys.stderr)
        return Status.UNKNOWN

    log.info("check: %s, thresholds: w=%s c=%s", mode.value, thresholds.warning, thresholds.critical)

    use_alarm = hasattr(signal, "SIGALRM")
    if use_alarm:
        previous_handler = signal.signal(signal.SIGALRM, _on_alarm(cfg.TIMEOUT))
        signal.alarm(cfg.TIMEOUT)
    try:
        result = run_check(cfg, mode, thresholds)
    except CheckError as exc:
        result = CheckResult.unknown(str(exc))
    except Exception as exc:  # noqa: BLE001
        log.debug("unexpected error", exc_info=True)
        result = CheckResult.unknown(f"{type(exc).__name__}: {exc}")
    finally:
        if use_alarm:
            signal.alarm(0)
            signal.signal(signal.SIGALRM, previous_handler or signal.SIG_DFL)

    print(result)
    return int(result.status)


if __name__ == "__main__":
    sys.exit(main())
