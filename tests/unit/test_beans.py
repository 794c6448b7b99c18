"""Unit tests for probes.jmx.beans selection and typed lookups."""

from __future__ import annotations

import pytest

from probes.jmx import CheckError
from probes.jmx.beans import find_bean, get_field, get_float, get_int
from tests.fixtures.jmx_beans import CLUSTER_METRICS_BEAN, MEMORY_BEAN, jmx_doc

MEMORY = "java.lang:type=Memory"


class TestFindBean:
    def test_selects_exact_name(self, jmx_document):
        bean = find_bean(jmx_document, MEMORY)
        assert bean["HeapMemoryUsage"]["used"] == 800000000

    def test_name_match_is_exact(self):
        data = jmx_doc({"name": "java.lang:type=MemoryPool,name=Code Cache"})
        with pytest.raises(CheckError, match="failed to find mbean"):
            find_bean(data, MEMORY)

    def test_missing_beans_array(self):
        with pytest.raises(CheckError, match="failed to find mbean"):
            find_bean({}, MEMORY)

    def test_null_beans_array(self):
        with pytest.raises(CheckError, match="failed to find mbean"):
            find_bean({"beans": None}, MEMORY)

    def test_empty_beans_array(self):
        with pytest.raises(CheckError, match="failed to find mbean"):
            find_bean({"beans": []}, MEMORY)

    def test_duplicate_target_beans(self):
        data = jmx_doc(MEMORY_BEAN, MEMORY_BEAN)
        with pytest.raises(CheckError, match="more than one matching mbean found"):
            find_bean(data, MEMORY)

    def test_beans_not_a_list(self):
        with pytest.raises(CheckError, match="not a list"):
            find_bean({"beans": {"name": MEMORY}}, MEMORY)

    def test_non_object_entries_skipped(self):
        data = {"beans": ["junk", 3, dict(MEMORY_BEAN)]}
        assert find_bean(data, MEMORY)["name"] == MEMORY


class TestFieldLookup:
    def test_dotted_path(self):
        assert get_field(MEMORY_BEAN, "NonHeapMemoryUsage.max") == 200000000

    def test_missing_field(self):
        with pytest.raises(CheckError, match="field 'HeapMemoryUsage.peak' not found"):
            get_field(MEMORY_BEAN, "HeapMemoryUsage.peak")

    def test_path_through_scalar(self):
        with pytest.raises(CheckError, match="not found"):
            get_field(MEMORY_BEAN, "Verbose.value")

    def test_get_int(self):
        assert get_int(CLUSTER_METRICS_BEAN, "NumActiveNMs") == 10

    @pytest.mark.parametrize("value", [1.5, "3", -1, True, None])
    def test_get_int_rejects(self, value):
        bean = {"name": "x", "NumLostNMs": value}
        with pytest.raises(CheckError, match="invalid non-integer field 'NumLostNMs'"):
            get_int(bean, "NumLostNMs")

    def test_get_float_accepts_int(self):
        value = get_float({"name": "x", "AvailableMB": 2048}, "AvailableMB")
        assert value == 2048.0
        assert isinstance(value, float)

    @pytest.mark.parametrize("value", ["2048", False, [1]])
    def test_get_float_rejects(self, value):
        with pytest.raises(CheckError, match="invalid non-float field"):
            get_float({"name": "x", "AvailableMB": value}, "AvailableMB")
