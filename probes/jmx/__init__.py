"""
probes/jmx — Hadoop JMX servlet checks in the Nagios plugin protocol.

Each check mode builds a CheckResult; the CLI prints it as a single
`STATUS: message | perfdata` line and exits with the status code.

Usage:
    from probes.jmx import CheckResult, Status
    from probes.jmx.resource_manager import run_check
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

_BINARY_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")


class Status(IntEnum):
    """Nagios states; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class CheckError(RuntimeError):
    """Terminal problem fetching or interpreting JMX data (reported as UNKNOWN)."""


def format_number(value: int | float) -> str:
    """Render whole floats without a trailing '.0' (1024.0 -> '1024')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def human_units(num_bytes: int | float) -> str:
    """Byte count with a binary prefix, e.g. 800000000 -> '762.94MB'."""
    if num_bytes < 1024:
        return f"{format_number(num_bytes)}B"
    value = float(num_bytes) / 1024
    for unit in _BINARY_UNITS[:-1]:
        if value < 1024:
            return f"{value:.2f}{unit}"
        value /= 1024
    return f"{value:.2f}{_BINARY_UNITS[-1]}"


@dataclass
class Perf:
    label: str
    value: int | float | str
    unit: str = ""
    warning: float | None = None
    critical: float | None = None

    def __str__(self) -> str:
        value = self.value if isinstance(self.value, str) else format_number(self.value)
        text = f"'{self.label}'={value}{self.unit}"
        if self.warning is not None or self.critical is not None:
            warn = "" if self.warning is None else format_number(self.warning)
            crit = "" if self.critical is None else format_number(self.critical)
            text += f";{warn};{crit}"
        return text


@dataclass
class CheckResult:
    status: Status
    message: str
    perfdata: list[Perf] = field(default_factory=list)

    @classmethod
    def unknown(cls, message: str) -> CheckResult:
        return cls(Status.UNKNOWN, message)

    def __str__(self) -> str:
        line = f"{self.status.name}: {self.message}"
        if self.perfdata:
            line += " | " + " ".join(str(p) for p in self.perfdata)
        return line
