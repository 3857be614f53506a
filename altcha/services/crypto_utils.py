import hashlib
import hmac
import random

from altcha.exceptions import InvalidOptions, UnsupportedAlgorithm
from altcha.schemas.challenge import Algorithm

_HASH_FUNCTIONS = {
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA384: hashlib.sha384,
    Algorithm.SHA512: hashlib.sha512,
}

# Process-wide CSPRNG; callers may inject a seeded random.Random instead.
_system_random = random.SystemRandom()


def _hash_function(algorithm: Algorithm | str):
    try:
        return _HASH_FUNCTIONS[Algorithm(algorithm)]
    except ValueError:
        raise UnsupportedAlgorithm(algorithm) from None


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def digest(algorithm: Algorithm | str, data: str | bytes) -> bytes:
    """Raw hash of data under the selected algorithm."""
    return _hash_function(algorithm)(_to_bytes(data)).digest()


def digest_hex(algorithm: Algorithm | str, data: str | bytes) -> str:
    return digest(algorithm, data).hex()


def hmac_digest(algorithm: Algorithm | str, data: str | bytes, key: str | bytes) -> bytes:
    """Raw keyed hash of data under key."""
    return hmac.new(_to_bytes(key), _to_bytes(data), _hash_function(algorithm)).digest()


def hmac_hex(algorithm: Algorithm | str, data: str | bytes, key: str | bytes) -> str:
    return hmac_digest(algorithm, data, key).hex()


def constant_time_equals(a: str | bytes, b: str | bytes) -> bool:
    """
    Compare two values without short-circuiting on the first mismatch.

    Strings are compared as their UTF-8 bytes so non-ASCII input from a
    client cannot make compare_digest raise.
    """
    return hmac.compare_digest(_to_bytes(a), _to_bytes(b))


def random_bytes(length: int, rng: random.Random | None = None) -> bytes:
    if length < 0:
        raise InvalidOptions(f"length must be non-negative, got {length}")
    return (rng or _system_random).randbytes(length)


def random_int(max_value: int, rng: random.Random | None = None) -> int:
    """
    Uniform integer in [0, max_value] inclusive.

    randint() draws through rejection sampling, so there is no modulo bias.
    """
    if max_value < 0:
        raise InvalidOptions(f"max must be non-negative, got {max_value}")
    return (rng or _system_random).randint(0, max_value)
