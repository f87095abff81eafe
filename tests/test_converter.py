"""Tests for the generic tree -> canonical value converter."""

import math

import pytest

from cjson_interchange.config import DEFAULT_MAX_DEPTH, MAX_DEPTH_ENV
from cjson_interchange.errors import (
    EncodingError,
    NestingDepthError,
    UnsupportedNumberError,
)
from cjson_interchange.kernel.convert import convert
from cjson_interchange.kernel.value import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Integer,
    IntKind,
    Object,
    String,
)


def _nested_lists(levels):
    value = []
    for _ in range(levels - 1):
        value = [value]
    return value


class TestScalars:

    def test_identity_mappings(self):
        assert convert(None) == NULL
        assert convert(True) == TRUE
        assert convert(False) == FALSE
        assert convert("x") == String("x")

    def test_bool_is_not_an_integer(self):
        assert convert(True) != Integer.from_int(1)

    def test_integer_tagging(self):
        assert convert(5) == Integer(5, IntKind.I64)
        assert convert(2 ** 63) == Integer(2 ** 63, IntKind.U64)


class TestNumbersRejected:
    """Floats BANNED regardless of value; integers must fit 64 bits."""

    @pytest.mark.parametrize("value", [1.5, 1.0, -0.0, 1e3, math.nan, math.inf, -math.inf])
    def test_floats(self, value):
        with pytest.raises(UnsupportedNumberError):
            convert(value)

    @pytest.mark.parametrize("value", [2 ** 64, -(2 ** 63) - 1])
    def test_out_of_range_integers(self, value):
        with pytest.raises(UnsupportedNumberError) as excinfo:
            convert(value)
        assert excinfo.value.value == value

    def test_error_names_value_and_location(self):
        with pytest.raises(UnsupportedNumberError) as excinfo:
            convert({"o": {"a": [1, 2, 1.5]}})
        assert excinfo.value.value == 1.5
        assert excinfo.value.path == "o.a[2]"
        assert "1.5" in str(excinfo.value)


class TestObjects:

    def test_keys_reordered(self):
        result = convert({"foo": "bar", "baz": "quux"})
        assert isinstance(result, Object)
        assert result.keys() == ("baz", "foo")

    def test_insertion_order_irrelevant(self):
        first = {"z": 1, "a": {"y": 2, "b": 3}, "m": [1, 2]}
        second = {"m": [1, 2], "a": {"b": 3, "y": 2}, "z": 1}
        assert convert(first) == convert(second)

    def test_keys_sorted_by_utf8_bytes(self):
        result = convert({"é": 1, "z": 2, "Z": 3, "\U0001F600": 4, "\uff61": 5})
        assert result.keys() == ("Z", "z", "é", "\uff61", "\U0001F600")

    def test_non_string_key_rejected(self):
        with pytest.raises(EncodingError):
            convert({1: "one"})


class TestArrays:

    def test_order_preserved(self):
        assert convert([3, 1, 2]) == Array(tuple(Integer.from_int(n) for n in (3, 1, 2)))

    def test_tuple_treated_as_array(self):
        assert convert((1, "a")) == convert([1, "a"])

    def test_first_failure_propagates(self):
        with pytest.raises(EncodingError) as excinfo:
            convert([1, object(), 2.5])
        assert excinfo.value.path == "[1]"


class TestEncodingFailures:

    @pytest.mark.parametrize("value", [object(), b"bytes", {1, 2}])
    def test_non_json_types(self, value):
        with pytest.raises(EncodingError):
            convert(value)

    def test_lone_surrogate_string(self):
        with pytest.raises(EncodingError):
            convert({"k": "\ud800"})

    def test_lone_surrogate_key(self):
        with pytest.raises(EncodingError):
            convert({"\udfff": 1})


class TestDepthLimit:

    def test_default_limit_allows_exact_depth(self):
        convert(_nested_lists(DEFAULT_MAX_DEPTH))

    def test_default_limit_rejects_one_more(self):
        with pytest.raises(NestingDepthError) as excinfo:
            convert(_nested_lists(DEFAULT_MAX_DEPTH + 1))
        assert excinfo.value.limit == DEFAULT_MAX_DEPTH

    def test_explicit_limit(self):
        convert({"a": [1]}, max_depth=2)
        with pytest.raises(NestingDepthError):
            convert({"a": [1]}, max_depth=1)

    def test_limit_from_environment(self, monkeypatch):
        monkeypatch.setenv(MAX_DEPTH_ENV, "3")
        convert(_nested_lists(3))
        with pytest.raises(NestingDepthError):
            convert(_nested_lists(4))

    @pytest.mark.parametrize("raw", ["abc", "0", "-4"])
    def test_bad_environment_value_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv(MAX_DEPTH_ENV, raw)
        convert(_nested_lists(DEFAULT_MAX_DEPTH))

    def test_depth_error_is_encoding_error(self):
        assert issubclass(NestingDepthError, EncodingError)


def test_convert_is_repeatable():
    raw = {"b": [1, {"d": None, "c": True}], "a": "x"}
    assert convert(raw) == convert(raw)
    assert raw == {"b": [1, {"d": None, "c": True}], "a": "x"}
