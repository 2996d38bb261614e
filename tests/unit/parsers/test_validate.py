"""Unit tests for the raw-value validation functions."""
from __future__ import annotations

import math

import pytest

from mp_envkit.kernel.errors import ValueParseError
from mp_envkit.kernel.types import Ok
from mp_envkit.parsers import (
    validate_bigint,
    validate_boolean,
    validate_float,
    validate_integer,
    validate_json,
    validate_semicolon,
    validate_string,
    validate_url,
)


class TestValidateString:
    def test_string_passes(self):
        assert validate_string("hello") == Ok("hello")

    def test_non_string_is_error(self):
        res = validate_string(12)
        assert res.is_err()
        assert str(res.error) == "Invalid String value: 12"


class TestValidateBoolean:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", "Y", "on"])
    def test_truthy_spellings(self, raw):
        assert validate_boolean(raw) == Ok(True)

    @pytest.mark.parametrize("raw", ["false", "False", "0", "no", "n", "OFF"])
    def test_falsy_spellings(self, raw):
        assert validate_boolean(raw) == Ok(False)

    def test_unknown_value_is_error(self):
        res = validate_boolean("maybe")
        assert res.is_err()
        assert isinstance(res.error, ValueParseError)
        assert str(res.error) == 'Invalid Boolean value: "maybe"'


class TestValidateInteger:
    def test_plain_integer(self):
        assert validate_integer("42") == Ok(42)

    def test_negative_with_whitespace(self):
        assert validate_integer("  -7") == Ok(-7)

    def test_trailing_characters_are_ignored(self):
        assert validate_integer("3.14") == Ok(3)
        assert validate_integer("10px") == Ok(10)

    def test_non_numeric_is_error(self):
        res = validate_integer("abc")
        assert res.is_err()
        assert res.error.type_name == "Integer"


class TestValidateFloat:
    def test_decimal(self):
        assert validate_float("3.5") == Ok(3.5)

    def test_exponent(self):
        assert validate_float("1e5") == Ok(100000.0)

    def test_leading_dot(self):
        assert validate_float(".5") == Ok(0.5)

    def test_trailing_characters_are_ignored(self):
        assert validate_float("3.5kg") == Ok(3.5)

    def test_infinity(self):
        assert validate_float("-Infinity") == Ok(-math.inf)

    def test_non_numeric_is_error(self):
        assert validate_float("abc").is_err()


class TestValidateBigint:
    def test_large_integer(self):
        assert validate_bigint("12345678901234567890") == Ok(12345678901234567890)

    def test_int_passes_through(self):
        assert validate_bigint(5) == Ok(5)

    def test_fraction_is_error(self):
        res = validate_bigint("3.14")
        assert res.is_err()
        assert str(res.error) == 'Invalid BigInt value: "3.14"'

    def test_bool_is_error(self):
        assert validate_bigint(True).is_err()


class TestValidateUrl:
    def test_absolute_url(self):
        res = validate_url("https://example.com/path?x=1")
        assert res.is_ok()
        assert str(res.value) == "https://example.com/path?x=1"
        assert res.value.host == "example.com"

    def test_relative_url_is_error(self):
        res = validate_url("not a url")
        assert res.is_err()
        assert res.error.type_name == "URL"


class TestValidateJson:
    def test_object(self):
        assert validate_json('{"a": 1, "b": [true]}') == Ok({"a": 1, "b": [True]})

    def test_invalid_json_is_error(self):
        res = validate_json("{broken")
        assert res.is_err()
        assert res.error.type_name == "JSON"


class TestValidateSemicolon:
    def test_bare_keys_become_true(self):
        assert validate_semicolon("key1;key2=value2;key3") == Ok(
            {"key1": "true", "key2": "value2", "key3": "true"}
        )

    def test_empty_string_is_empty_mapping(self):
        assert validate_semicolon("") == Ok({})

    def test_empty_keys_are_dropped(self):
        assert validate_semicolon("=value2;key3=value3") == Ok({"key3": "value3"})

    def test_values_are_url_decoded(self):
        assert validate_semicolon("msg=hello%20world") == Ok({"msg": "hello world"})

    def test_only_first_equals_sign_splits(self):
        assert validate_semicolon("a=b=c") == Ok({"a": "b"})

    def test_key_format_is_applied(self):
        assert validate_semicolon("db_host=x", "UPPERCASE") == Ok({"DB_HOST": "x"})

    def test_non_string_is_error(self):
        assert validate_semicolon(None).is_err()
