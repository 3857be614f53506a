"""Tests for salt parameter encoding and decoding."""

from altcha.services.salt_codec import encode_salt, extract_expires, extract_params


class TestEncodeSalt:
    def test_no_params_returns_id(self):
        assert encode_salt("abc123") == "abc123"
        assert encode_salt("abc123", {}) == "abc123"

    def test_params_in_insertion_order(self):
        salt = encode_salt("abc", {"b": "2", "a": "1"})
        assert salt == "abc?b=2&a=1"

    def test_expires_appended_last(self):
        salt = encode_salt("abc", {"form": "signup"}, expires=1700000000)
        assert salt == "abc?form=signup&expires=1700000000"

    def test_values_are_percent_encoded(self):
        salt = encode_salt("abc", {"note": "a b&c=d"})
        assert salt == "abc?note=a+b%26c%3Dd"
        assert extract_params(salt) == {"note": "a b&c=d"}

    def test_existing_query_section_is_extended(self):
        salt = encode_salt("abc?x=1", expires=5)
        assert salt == "abc?x=1&expires=5"

    def test_trailing_separator_is_reused(self):
        assert encode_salt("abc?", expires=5) == "abc?expires=5"
        assert encode_salt("abc?x=1&", expires=5) == "abc?x=1&expires=5"

    def test_bare_flag_salt_keeps_expires_readable(self):
        salt = encode_salt("abc?flag", expires=5)
        assert salt == "abc?flag&expires=5"
        assert extract_expires(salt) == 5


class TestExtractParams:
    def test_no_query_section(self):
        assert extract_params("abc") == {}

    def test_order_independent(self):
        assert extract_params("abc?expires=10&form=x") == {"expires": "10", "form": "x"}
        assert extract_expires("abc?form=x&expires=10") == 10

    def test_bare_flag_decodes_to_empty_value(self):
        assert extract_params("abc?not-a-pair") == {"not-a-pair": ""}
        assert extract_expires("abc?expires") is None

    def test_odd_fields_do_not_hide_expires(self):
        assert extract_expires("abc?&expires=10") == 10
        assert extract_expires("abc?flag&expires=10") == 10
        assert extract_expires("abc?a=1&&expires=10&") == 10

    def test_non_string_salt(self):
        assert extract_params(None) == {}


class TestExtractExpires:
    def test_missing(self):
        assert extract_expires("abc?form=x") is None

    def test_non_numeric(self):
        assert extract_expires("abc?expires=soon") is None

    def test_round_trip(self):
        assert extract_expires(encode_salt("abc", expires=1234567890)) == 1234567890
