"""
probes/jmx/fetch.py — Single GET against a Hadoop daemon's /jmx servlet.

No retries: any connection problem, non-200 status, empty body or
undecodable payload raises CheckError and ends the run as UNKNOWN.
"""

from __future__ import annotations

import base64
import http.client
import logging
import urllib.error
import urllib.request
from typing import TYPE_CHECKING, Any

import orjson

from probes import __version__
from probes.jmx import CheckError
from probes.log import TRACE

if TYPE_CHECKING:
    from config.settings import Settings

PROG = "check_hadoop_yarn_resource_manager"
USER_AGENT = f"{PROG} version {__version__}"

log = logging.getLogger("yarn_rm_check")


def build_request(cfg: Settings) -> urllib.request.Request:
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if cfg.has_credentials:
        token = base64.b64encode(f"{cfg.USER}:{cfg.PASSWORD}".encode()).decode("ascii")
        headers["Authorization"] = f"Basic {token}"
    return urllib.request.Request(cfg.jmx_url, headers=headers, method="GET")


def fetch_content(cfg: Settings) -> bytes:
    url = cfg.jmx_url
    log.info("querying %s", url)
    try:
        with urllib.request.urlopen(build_request(cfg), timeout=cfg.TIMEOUT) as resp:
            status = resp.status
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise CheckError(f"{e.code} {e.reason} returned by '{url}'") from e
    except urllib.error.URLError as e:
        raise CheckError(f"failed to connect to '{url}': {e.reason}") from e
    except (TimeoutError, ConnectionError, http.client.HTTPException) as e:
        raise CheckError(f"failed to query '{url}': {e}") from e

    log.debug("HTTP %s, %d bytes", status, len(body))
    if status != 200:
        raise CheckError(f"unexpected HTTP status {status} returned by '{url}'")
    if not body.strip():
        raise CheckError(f"blank content returned by '{url}'")
    return body


def decode_json(content: bytes, url: str) -> dict[str, Any]:
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise CheckError(f"invalid json returned by Yarn Resource Manager at '{url}'") from e
    if not isinstance(data, dict):
        raise CheckError(f"invalid json returned by Yarn Resource Manager at '{url}'")
    if log.isEnabledFor(TRACE):
        log.log(TRACE, "decoded json:\n%s", orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
    return data


def fetch_jmx(cfg: Settings) -> dict[str, Any]:
    """GET the /jmx servlet and return the decoded document."""
    return decode_json(fetch_content(cfg), cfg.jmx_url)
