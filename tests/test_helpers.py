"""Tests for field ordering, naming, unit parsing and overlay helpers."""

import pytest

from kubetpl import (
    UnitParseError,
    hyphenate,
    map_to_named_list,
    object_items,
    object_values,
    overlay,
    si_to_num,
)
from kubetpl.pacts.helpers import require, to_string
from kubetpl.pacts.types import MissingFieldError


class TestObjectValues:
    """Tests for object_values / object_items."""

    def test_preserves_insertion_order(self):
        """Test values come back in declaration order, not sorted."""
        assert object_values({"b": 1, "a": 2, "c": 3}) == [1, 2, 3]

    def test_skips_hidden_fields(self):
        """Test trailing-underscore keys are treated as hidden."""
        mapping = {"visible": 1, "env_": {"X": 1}, "other": 2}
        assert object_values(mapping) == [1, 2]
        assert object_items(mapping) == [("visible", 1), ("other", 2)]


class TestHyphenate:
    """Tests for hyphenate."""

    def test_replaces_every_underscore(self):
        assert hyphenate("my_long_name") == "my-long-name"

    def test_no_underscore_unchanged(self):
        assert hyphenate("plain") == "plain"


class TestMapToNamedList:
    """Tests for map_to_named_list."""

    def test_order_and_names(self):
        """Test keys become names, in insertion order."""
        result = map_to_named_list({"a": {"x": 1}, "b": {"x": 2}})
        assert result == [{"name": "a", "x": 1}, {"name": "b", "x": 2}]

    def test_keys_are_hyphenated(self):
        result = map_to_named_list({"data_dir": {"mountPath": "/data"}})
        assert result == [{"name": "data-dir", "mountPath": "/data"}]

    def test_explicit_name_wins(self):
        """Test a name inside the partial object overrides the key."""
        result = map_to_named_list({"key": {"name": "other"}})
        assert result == [{"name": "other"}]

    def test_none_is_empty(self):
        assert map_to_named_list(None) == []


class TestSiToNum:
    """Tests for si_to_num."""

    def test_milli(self):
        assert si_to_num("500m") == 0.5

    def test_binary(self):
        assert si_to_num("2Ki") == 2048
        assert si_to_num("1Mi") == 1024 ** 2
        assert si_to_num("1Ei") == 2 ** 60

    def test_decimal(self):
        assert si_to_num("3G") == 3e9
        assert si_to_num("1K") == 1000
        assert si_to_num("2E") == 2 * 10 ** 18

    def test_fractional_mantissa(self):
        assert si_to_num("1.5Gi") == 1.5 * 2 ** 30

    def test_plain_number(self):
        assert si_to_num("42") == 42
        assert si_to_num(7) == 7

    def test_unknown_suffix(self):
        with pytest.raises(UnitParseError, match="5Q"):
            si_to_num("5Q")

    def test_unit_error_is_value_error(self):
        with pytest.raises(ValueError):
            si_to_num("12Zi")

    def test_missing_mantissa(self):
        with pytest.raises(UnitParseError):
            si_to_num("Gi")


class TestOverlay:
    """Tests for overlay."""

    def test_deep_merge(self):
        base = {"spec": {"replicas": 1, "template": {"a": 1}}}
        result = overlay(base, {"spec": {"template": {"b": 2}}})
        assert result == {"spec": {"replicas": 1, "template": {"a": 1, "b": 2}}}

    def test_last_writer_wins(self):
        result = overlay({"x": 1}, {"x": 2}, {"x": 3})
        assert result["x"] == 3

    def test_lists_replace(self):
        result = overlay({"items": [1, 2]}, {"items": [3]})
        assert result["items"] == [3]

    def test_none_deletes(self):
        result = overlay({"a": 1, "b": 2}, {"a": None})
        assert result == {"b": 2}

    def test_none_deletes_inside_new_mapping(self):
        """Test None is dropped from a mapping the base did not have yet."""
        result = overlay({"metadata": {"name": "x"}, "spec": "old"},
                         {"spec": {"tls": None, "rules": []}, "status": {"a": {"b": None}}})
        assert result == {"metadata": {"name": "x"}, "spec": {"rules": []}, "status": {"a": {}}}

    def test_inputs_untouched(self):
        """Test neither base nor patch is mutated."""
        base = {"m": {"k": 1}}
        patch = {"m": {"j": [1]}}
        result = overlay(base, patch)
        result["m"]["j"].append(2)
        assert base == {"m": {"k": 1}}
        assert patch == {"m": {"j": [1]}}


class TestSmallHelpers:
    """Tests for to_string and require."""

    def test_to_string(self):
        assert to_string(True) == "true"
        assert to_string(False) == "false"
        assert to_string(None) == ""
        assert to_string(8080) == "8080"

    def test_require_passes_value(self):
        assert require(0, "T", "f") == 0

    def test_require_missing(self):
        with pytest.raises(MissingFieldError) as excinfo:
            require(None, "Container", "image")
        assert excinfo.value.template == "Container"
        assert excinfo.value.field == "image"
        assert "Container: image required" in str(excinfo.value)
