"""Unit tests for probes.jmx.thresholds upper-bound classification."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from probes.jmx import Status
from probes.jmx.thresholds import Thresholds


class TestValidation:
    def test_negative_warning_raises(self):
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            Thresholds(warning=-1, critical=10)

    def test_negative_critical_raises(self):
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            Thresholds(critical=-0.5)

    @pytest.mark.parametrize("bound", ["warning", "critical"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_bound_raises(self, bound, value):
        with pytest.raises(ValidationError, match="finite number"):
            Thresholds(**{bound: value})

    def test_warning_above_critical_raises(self):
        with pytest.raises(ValidationError, match="cannot be greater"):
            Thresholds(warning=95, critical=90)

    def test_equal_bounds_allowed(self):
        t = Thresholds(warning=0, critical=0)
        assert t.warning == t.critical == 0

    def test_unset_bounds_allowed(self):
        t = Thresholds()
        assert t.warning is None and t.critical is None


class TestClassify:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, Status.OK),
            (79.99, Status.OK),
            (80, Status.OK),
            (80.01, Status.WARNING),
            (90, Status.WARNING),
            (90.01, Status.CRITICAL),
            (100, Status.CRITICAL),
        ],
    )
    def test_upper_bound_semantics(self, value, expected):
        assert Thresholds(warning=80, critical=90).classify(value) == expected

    def test_monotonic_over_percent_range(self):
        t = Thresholds(warning=80, critical=90)
        statuses = [t.classify(p / 100) for p in range(0, 10001)]
        assert statuses == sorted(statuses)
        assert statuses[0] == Status.OK
        assert statuses[-1] == Status.CRITICAL

    def test_zero_thresholds_any_positive_is_critical(self):
        t = Thresholds(warning=0, critical=0)
        assert t.classify(0) == Status.OK
        assert t.classify(3) == Status.CRITICAL

    def test_unset_thresholds_never_trigger(self):
        assert Thresholds().classify(10**9) == Status.OK

    def test_warning_only(self):
        t = Thresholds(warning=5)
        assert t.classify(6) == Status.WARNING


class TestDescribe:
    def test_whole_numbers_have_no_decimal(self):
        assert Thresholds(warning=80, critical=90).describe() == " (w=80/c=90)"

    def test_fractional_bounds_kept(self):
        assert Thresholds(warning=80.5, critical=90).describe() == " (w=80.5/c=90)"

    def test_unset_bound_blank(self):
        assert Thresholds(critical=1).describe() == " (w=/c=1)"
