"""
tests/conftest.py — Shared fixtures and path setup for all tests.

Adds the project root to sys.path so unit tests can import:
    from config.settings import Settings
    from probes.jmx.resource_manager import evaluate, CheckMode
    from probes.jmx import CheckResult, Status

The JMX fixtures are trimmed copies of what a Resource Manager's /jmx
servlet returns; fake_urlopen serves them without any network access.
"""
import pathlib
import sys

import orjson
import pytest

# Make project root importable without installing as a package
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.fixtures.jmx_beans import (  # noqa: E402
    CLUSTER_METRICS_BEAN,
    JVM_METRICS_BEAN,
    MEMORY_BEAN,
    QUEUE_METRICS_BEAN,
    jmx_doc,
)

# Keep the developer's shell (HOST, HADOOP_HOST, ...) out of the tests
_ENV_VARS = [
    f"{prefix}{suffix}"
    for prefix in ("HADOOP_YARN_RESOURCE_MANAGER_", "HADOOP_", "")
    for suffix in ("HOST", "PORT", "USER", "USERNAME", "PASSWORD")
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def jmx_document() -> dict:
    return jmx_doc(
        JVM_METRICS_BEAN,
        MEMORY_BEAN,
        CLUSTER_METRICS_BEAN,
        QUEUE_METRICS_BEAN,
    )


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):  # noqa: ANN002
        return False


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Serve a canned /jmx response; returns the list of requests made."""
    from probes.jmx import fetch

    requests = []

    def install(payload, status: int = 200, error: Exception | None = None):
        body = payload if isinstance(payload, bytes) else orjson.dumps(payload)

        def urlopen(request, timeout=None):  # noqa: ANN001
            requests.append((request, timeout))
            if error is not None:
                raise error
            return FakeResponse(body, status)

        monkeypatch.setattr(fetch.urllib.request, "urlopen", urlopen)
        return requests

    return install
