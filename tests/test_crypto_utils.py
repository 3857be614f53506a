"""Tests for the digest, HMAC and random primitives."""

import hashlib
import hmac
import random

import pytest

from altcha.exceptions import InvalidOptions, UnsupportedAlgorithm
from altcha.schemas import Algorithm
from altcha.services.crypto_utils import (
    constant_time_equals,
    digest,
    digest_hex,
    hmac_digest,
    hmac_hex,
    random_bytes,
    random_int,
)


class TestDigest:
    """Tests for digest and digest_hex."""

    @pytest.mark.parametrize(
        "algorithm,hash_function",
        [
            (Algorithm.SHA256, hashlib.sha256),
            (Algorithm.SHA384, hashlib.sha384),
            (Algorithm.SHA512, hashlib.sha512),
        ],
    )
    def test_matches_hashlib(self, algorithm, hash_function):
        assert digest(algorithm, "test data") == hash_function(b"test data").digest()

    def test_hex_is_lowercase(self):
        result = digest_hex(Algorithm.SHA256, "test data")
        assert result == hashlib.sha256(b"test data").hexdigest()
        assert result == result.lower()
        assert len(result) == 64

    def test_accepts_algorithm_token(self):
        """The wire token selects the same algorithm as the enum member."""
        assert digest("SHA-512", b"abc") == digest(Algorithm.SHA512, b"abc")

    def test_str_and_bytes_agree(self):
        assert digest(Algorithm.SHA256, "héllo") == digest(Algorithm.SHA256, "héllo".encode())

    @pytest.mark.parametrize("algorithm", ["MD5", "sha256", "", None])
    def test_unsupported_algorithm(self, algorithm):
        with pytest.raises(UnsupportedAlgorithm):
            digest(algorithm, "data")


class TestHmac:
    """Tests for hmac_digest and hmac_hex."""

    def test_matches_stdlib_hmac(self, hmac_key):
        expected = hmac.new(hmac_key.encode(), b"test data", hashlib.sha256).digest()
        assert hmac_digest(Algorithm.SHA256, "test data", hmac_key) == expected

    def test_hex(self, hmac_key):
        expected = hmac.new(hmac_key.encode(), b"test data", hashlib.sha384).hexdigest()
        assert hmac_hex(Algorithm.SHA384, "test data", hmac_key) == expected

    def test_key_changes_output(self):
        assert hmac_hex(Algorithm.SHA256, "data", "key-a") != hmac_hex(
            Algorithm.SHA256, "data", "key-b"
        )

    def test_unsupported_algorithm(self, hmac_key):
        with pytest.raises(UnsupportedAlgorithm):
            hmac_hex("SHA-1", "data", hmac_key)


class TestConstantTimeEquals:
    def test_equal(self):
        assert constant_time_equals("abc", "abc")
        assert constant_time_equals(b"abc", "abc")

    def test_not_equal(self):
        assert not constant_time_equals("abc", "abd")
        assert not constant_time_equals("abc", "abcd")

    def test_non_ascii_does_not_raise(self):
        """compare_digest rejects non-ASCII str; comparing as bytes avoids that."""
        assert not constant_time_equals("abc", "äbc")


class TestRandomBytes:
    def test_length(self):
        assert len(random_bytes(16)) == 16
        assert random_bytes(0) == b""

    def test_seeded_source_is_deterministic(self):
        assert random_bytes(12, random.Random(7)) == random_bytes(12, random.Random(7))

    def test_negative_length(self):
        with pytest.raises(InvalidOptions):
            random_bytes(-1)


class TestRandomInt:
    def test_within_range(self):
        for _ in range(200):
            assert 0 <= random_int(100) <= 100

    def test_zero_range(self):
        assert random_int(0) == 0

    def test_upper_bound_is_reachable(self):
        """The range is inclusive, so both ends show up for a tiny range."""
        rng = random.Random(0)
        seen = {random_int(1, rng) for _ in range(100)}
        assert seen == {0, 1}

    def test_negative_max(self):
        with pytest.raises(InvalidOptions):
            random_int(-1)
