"""
config/settings.py — Connection contract for the Resource Manager probe.

Uses pydantic-settings to validate host, port, credentials and timeout.
Environment resolution is done explicitly by load_settings() so the
Nagios-style fallback chain stays predictable.

Two usage modes:
  Plugin run:
      cfg = load_settings({"HOST": args.host, "PORT": args.port})
      # CLI overrides > HADOOP_YARN_RESOURCE_MANAGER_* > HADOOP_* > bare vars

  Tests (isolated — no os.environ bleed):
      cfg = Settings(HOST="rm1.example.com", PORT=8088)
"""
from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_PORT = 8088
DEFAULT_TIMEOUT = 10
MAX_TIMEOUT = 60

# Searched in order; first non-empty wins.
ENV_PREFIXES = ("HADOOP_YARN_RESOURCE_MANAGER_", "HADOOP_", "")
ENV_ALIASES = {
    "HOST": ("HOST",),
    "PORT": ("PORT",),
    "USER": ("USERNAME", "USER"),
    "PASSWORD": ("PASSWORD",),
}

_HOSTNAME_RE = re.compile(
    r"^(?=.{1,253}$)[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*\.?$"
)
_IPV4_RE = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$")


class Settings(BaseSettings):
    # Values come only from kwargs. load_settings() is the entry point that
    # reads the environment and passes the result in explicitly.
    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    # -------------------------------------------------------------------------
    # Target
    # -------------------------------------------------------------------------
    HOST: Optional[str] = None
    PORT: int = DEFAULT_PORT

    # -------------------------------------------------------------------------
    # Basic auth (sent only when both are set)
    # -------------------------------------------------------------------------
    USER: Optional[str] = None
    PASSWORD: Optional[str] = None

    # -------------------------------------------------------------------------
    # Whole-run deadline, also used as the socket timeout
    # -------------------------------------------------------------------------
    TIMEOUT: int = DEFAULT_TIMEOUT

    @property
    def jmx_url(self) -> str:
        return f"http://{self.HOST}:{self.PORT}/jmx"

    @property
    def has_credentials(self) -> bool:
        return bool(self.USER) and self.PASSWORD is not None

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("HOST", "USER", mode="before")
    @classmethod
    def strip_blank(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("HOST")
    @classmethod
    def validate_host(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        m = _IPV4_RE.match(v)
        if m:
            if any(int(octet) > 255 for octet in m.groups()):
                raise ValueError(f"invalid host '{v}' (IP octet out of range)")
            return v
        if v.replace(".", "").isdigit() or not _HOSTNAME_RE.match(v):
            raise ValueError(f"invalid host '{v}'")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"invalid port {v}, must be between 1 and 65535")
        return v

    @field_validator("TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if not 1 <= v <= MAX_TIMEOUT:
            raise ValueError(f"invalid timeout {v}, must be between 1 and {MAX_TIMEOUT} secs")
        return v

    @model_validator(mode="after")
    def require_host(self) -> Settings:
        if self.HOST is None:
            raise ValueError(
                "host not defined (use --host or set "
                "$HADOOP_YARN_RESOURCE_MANAGER_HOST / $HADOOP_HOST / $HOST)"
            )
        return self


def resolve_env(environ: Mapping[str, str]) -> dict[str, str]:
    """Pick HOST/PORT/USER/PASSWORD from the environment by prefix precedence.

    For each field the first non-empty variable among
    HADOOP_YARN_RESOURCE_MANAGER_<X>, HADOOP_<X>, <X> is used.
    """
    found: dict[str, str] = {}
    for field, suffixes in ENV_ALIASES.items():
        for prefix in ENV_PREFIXES:
            value = next(
                (environ[prefix + s] for s in suffixes if environ.get(prefix + s, "").strip()),
                None,
            )
            if value is not None:
                found[field] = value.strip() if field != "PASSWORD" else value
                break
    return found


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build validated Settings from the environment plus CLI overrides.

    Overrides whose value is None are ignored so unset CLI flags fall
    through to the environment.

    Raises:
        ValidationError: bad host/port/timeout, or no host defined anywhere.
    """
    merged: dict[str, Any] = resolve_env(os.environ if environ is None else environ)
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})
    known = {k: v for k, v in merged.items() if k in Settings.model_fields}
    return Settings(**known)
