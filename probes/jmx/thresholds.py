"""
probes/jmx/thresholds.py — Upper-bound warning/critical thresholds.

    value <= warning             -> OK
    warning < value <= critical  -> WARNING
    value > critical             -> CRITICAL

An unset bound never triggers. Construction validates the pair, so a bad
-w/-c raises pydantic's ValidationError before any request is made.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from probes.jmx import Status, format_number


class Thresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    # finite and non-negative
    warning: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    critical: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def warning_within_critical(self) -> Thresholds:
        if self.warning is not None and self.critical is not None and self.warning > self.critical:
            raise ValueError(
                f"warning threshold ({format_number(self.warning)}) cannot be greater "
                f"than critical threshold ({format_number(self.critical)})"
            )
        return self

    def classify(self, value: float) -> Status:
        if self.critical is not None and value > self.critical:
            return Status.CRITICAL
        if self.warning is not None and value > self.warning:
            return Status.WARNING
        return Status.OK

    def describe(self) -> str:
        """The ' (w=80/c=90)' suffix appended to a breached value's phrase."""
        warn = "" if self.warning is None else format_number(self.warning)
        crit = "" if self.critical is None else format_number(self.critical)
        return f" (w={warn}/c={crit})"
