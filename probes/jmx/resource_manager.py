"""
probes/jmx/resource_manager.py — YARN Resource Manager check modes.

Each mode names the MBean it reads, the thresholds it applies by default
and how it renders the matched bean into a CheckResult:

    node-managers   ClusterMetrics            unhealthy NMs vs w=0/c=0
    app-stats       QueueMetrics,q0=root      informational, always OK
    heap-used       java.lang:type=Memory     heap used %     vs w=80/c=90
    non-heap-used   java.lang:type=Memory     non-heap used % vs w=80/c=90

Usage:
    from probes.jmx.resource_manager import CheckMode, run_check
    result = run_check(cfg, CheckMode.HEAP_USED, Thresholds(warning=80, critical=90))
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from probes.jmx import CheckError, CheckResult, Perf, Status, format_number, human_units
from probes.jmx.beans import find_bean, get_float, get_int
from probes.jmx.fetch import fetch_jmx
from probes.jmx.thresholds import Thresholds

if TYPE_CHECKING:
    from config.settings import Settings


class CheckMode(str, Enum):
    NODE_MANAGERS = "node-managers"
    APP_STATS = "app-stats"
    HEAP_USED = "heap-used"
    NON_HEAP_USED = "non-heap-used"


MBEANS = {
    CheckMode.NODE_MANAGERS: "Hadoop:service=ResourceManager,name=ClusterMetrics",
    CheckMode.APP_STATS: "Hadoop:service=ResourceManager,name=QueueMetrics,q0=root",
    CheckMode.HEAP_USED: "java.lang:type=Memory",
    CheckMode.NON_HEAP_USED: "java.lang:type=Memory",
}

# (warning, critical) applied when -w / -c are not given
DEFAULT_THRESHOLDS: dict[CheckMode, tuple[Optional[float], Optional[float]]] = {
    CheckMode.NODE_MANAGERS: (0, 0),
    CheckMode.HEAP_USED: (80, 90),
    CheckMode.NON_HEAP_USED: (80, 90),
}


def resolve_thresholds(
    mode: CheckMode,
    warning: Optional[float] = None,
    critical: Optional[float] = None,
) -> Thresholds:
    """Fill in the mode's defaults for unset bounds and validate the pair.

    App stats are informational, so any -w/-c given there is ignored.

    Raises:
        ValidationError: negative bound, or warning above critical.
    """
    if mode not in DEFAULT_THRESHOLDS:
        return Thresholds()
    default_warning, default_critical = DEFAULT_THRESHOLDS[mode]
    return Thresholds(
        warning=default_warning if warning is None else warning,
        critical=default_critical if critical is None else critical,
    )


def check_memory(bean: dict[str, Any], thresholds: Thresholds, heap: bool = True) -> CheckResult:
    field = "HeapMemoryUsage" if heap else "NonHeapMemoryUsage"
    label = "heap" if heap else "non-heap"

    used = get_int(bean, f"{field}.used")
    max_ = get_int(bean, f"{field}.max")
    if max_ == 0:
        raise CheckError(f"{field}.max is 0, cannot calculate {label} used %")
    used_pc = f"{used / max_ * 100:.2f}"

    status = thresholds.classify(float(used_pc))
    message = f"{used_pc}% {label} used ({human_units(used)}/{human_units(max_)})"
    if status != Status.OK:
        message += thresholds.describe()

    perfdata = [
        Perf(f"{label} used %", used_pc, "%", thresholds.warning, thresholds.critical),
        Perf(f"{label} used", used, "b"),
        Perf(f"{label} max", max_, "b"),
        Perf(f"{label} committed", get_int(bean, f"{field}.committed"), "b"),
    ]
    return CheckResult(status, message, perfdata)


def check_node_managers(bean: dict[str, Any], thresholds: Thresholds) -> CheckResult:
    active = get_int(bean, "NumActiveNMs")
    decommissioned = get_int(bean, "NumDecommissionedNMs")
    lost = get_int(bean, "NumLostNMs")
    unhealthy = get_int(bean, "NumUnhealthyNMs")
    # TODO: confirm whether rebooted should come from NumRebootedNMs;
    # it has always been reported from the unhealthy counter.
    rebooted = get_int(bean, "NumUnhealthyNMs")

    status = thresholds.classify(unhealthy)
    message = (
        f"node managers: {active} active, {decommissioned} decommissioned, "
        f"{lost} lost, {unhealthy} unhealthy"
    )
    if status != Status.OK:
        message += thresholds.describe()
    message += f", {rebooted} rebooted"

    perfdata = [
        Perf("active node managers", active),
        Perf("decommissioned node managers", decommissioned),
        Perf("lost node managers", lost),
        Perf("unhealthy node managers", unhealthy, "", thresholds.warning, thresholds.critical),
        Perf("rebooted node managers", rebooted),
    ]
    return CheckResult(status, message, perfdata)


def check_app_stats(bean: dict[str, Any]) -> CheckResult:
    submitted = get_int(bean, "AppsSubmitted")
    running = get_int(bean, "AppsRunning")
    pending = get_int(bean, "AppsPending")
    completed = get_int(bean, "AppsCompleted")
    killed = get_int(bean, "AppsKilled")
    failed = get_int(bean, "AppsFailed")
    available_mb = get_float(bean, "AvailableMB")
    active_users = get_int(bean, "ActiveUsers")
    active_apps = get_int(bean, "ActiveApplications")

    message = (
        f"yarn apps: {running} running, {pending} pending, {active_apps} active, "
        f"{submitted} submitted, {completed} completed, {killed} killed, {failed} failed. "
        f"{active_users} active users, {format_number(available_mb)} available mb"
    )
    perfdata = [
        Perf("apps running", running),
        Perf("apps pending", pending),
        Perf("apps active", active_apps),
        Perf("apps submitted", submitted),
        Perf("apps completed", completed),
        Perf("apps killed", killed),
        Perf("apps failed", failed),
        Perf("active users", active_users),
        Perf("available mb", available_mb, "MB"),
    ]
    return CheckResult(Status.OK, message, perfdata)


def evaluate(data: dict[str, Any], mode: CheckMode, thresholds: Thresholds) -> CheckResult:
    """Select the mode's MBean from a decoded /jmx document and check it."""
    bean = find_bean(data, MBEANS[mode])
    if mode is CheckMode.HEAP_USED:
        return check_memory(bean, thresholds, heap=True)
    if mode is CheckMode.NON_HEAP_USED:
        return check_memory(bean, thresholds, heap=False)
    if mode is CheckMode.NODE_MANAGERS:
        return check_node_managers(bean, thresholds)
    return check_app_stats(bean)


def run_check(cfg: Settings, mode: CheckMode, thresholds: Thresholds) -> CheckResult:
    return evaluate(fetch_jmx(cfg), mode, thresholds)
