"""
probes/jmx/beans.py — MBean selection and typed field lookup.

The /jmx servlet returns {"beans": [{"name": "...", ...}, ...]}. A check
targets exactly one bean by name; nested attributes such as
HeapMemoryUsage.used are addressed by dotted path.
"""

from __future__ import annotations

from typing import Any

from probes.jmx import CheckError

SUPPORT_MSG = "API may have changed. Please try latest version of this plugin"


def find_bean(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return the single bean whose 'name' equals `name`."""
    beans = data.get("beans")
    if beans is None:
        beans = []
    if not isinstance(beans, list):
        raise CheckError(f"'beans' field is not a list. {SUPPORT_MSG}")

    matches = [b for b in beans if isinstance(b, dict) and b.get("name") == name]
    if not matches:
        raise CheckError(f"failed to find mbean '{name}'. {SUPPORT_MSG}")
    if len(matches) > 1:
        raise CheckError(f"more than one matching mbean found! '{name}'. {SUPPORT_MSG}")
    return matches[0]


def get_field(bean: dict[str, Any], path: str) -> Any:
    value: Any = bean
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            raise CheckError(f"field '{path}' not found in mbean '{bean.get('name')}'")
        value = value[part]
    return value


def get_int(bean: dict[str, Any], path: str) -> int:
    value = get_field(bean, path)
    # bool is an int subclass; JSON true/false is never a counter
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CheckError(f"invalid non-integer field '{path}' value returned: {value}")
    return value


def get_float(bean: dict[str, Any], path: str) -> float:
    value = get_field(bean, path)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CheckError(f"invalid non-float field '{path}' value returned: {value}")
    return float(value)
