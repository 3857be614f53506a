import random
import time

import structlog

from altcha.exceptions import InvalidOptions
from altcha.schemas import (
    DEFAULT_MAX_NUMBER,
    Algorithm,
    Challenge,
    ChallengeOptions,
    Payload,
    Solution,
)
from altcha.services.crypto_utils import (
    constant_time_equals,
    digest_hex,
    hmac_hex,
    random_bytes,
    random_int,
)
from altcha.services.payload_parser import parse_payload
from altcha.services.salt_codec import encode_salt, extract_expires

logger = structlog.get_logger()


def create_challenge(options: ChallengeOptions, rng: random.Random | None = None) -> Challenge:
    """
    Issue a signed proof-of-work challenge.

    The secret number only exists inside this call; the returned Challenge
    carries its digest, never the number itself.
    """
    if not options.hmac_key:
        raise InvalidOptions("hmac_key must not be empty")
    if options.max_number < 0:
        raise InvalidOptions(f"max_number must be non-negative, got {options.max_number}")

    salt = options.salt
    if salt is None:
        salt = random_bytes(options.salt_length, rng).hex()
    salt = encode_salt(salt, options.params, options.expires)

    number = options.number
    if number is None:
        number = random_int(options.max_number, rng)

    challenge = digest_hex(options.algorithm, f"{salt}{number}")
    signature = hmac_hex(options.algorithm, challenge, options.hmac_key)

    logger.debug(
        "challenge_created",
        algorithm=options.algorithm.value,
        max_number=options.max_number,
        expires=options.expires,
    )

    return Challenge(
        algorithm=options.algorithm,
        challenge=challenge,
        salt=salt,
        signature=signature,
        max_number=options.max_number,
    )


def solve_challenge(
    challenge: str,
    salt: str,
    algorithm: Algorithm | str = Algorithm.SHA256,
    max_number: int = DEFAULT_MAX_NUMBER,
    start: int = 0,
) -> Solution | None:
    """
    Brute-force the secret number behind a challenge.

    Scans start..max_number inclusive in order and returns the first match,
    or None once the range is exhausted.
    """
    start_time = time.perf_counter()
    for number in range(start, max_number + 1):
        if constant_time_equals(digest_hex(algorithm, f"{salt}{number}"), challenge):
            took = (time.perf_counter() - start_time) * 1000
            logger.debug("challenge_solved", attempts=number - start + 1, took_ms=round(took, 2))
            return Solution(number=number, took=took)

    logger.debug("challenge_unsolved", start=start, max_number=max_number)
    return None


def verify_solution(payload, hmac_key: str | bytes, check_expires: bool = True) -> bool:
    """
    Verify a client's solution.

    Returns False for every kind of failure, including input that cannot be
    parsed into a Payload.
    """
    parsed: Payload | None = parse_payload(payload)
    if parsed is None:
        return False

    if check_expires:
        expires = extract_expires(parsed.salt)
        if expires is not None and expires <= int(time.time()):
            logger.debug("solution_rejected", reason="expired")
            return False

    expected_challenge = digest_hex(parsed.algorithm, f"{parsed.salt}{parsed.number}")
    if not constant_time_equals(expected_challenge, parsed.challenge):
        logger.debug("solution_rejected", reason="challenge_mismatch")
        return False

    expected_signature = hmac_hex(parsed.algorithm, parsed.challenge, hmac_key)
    if not constant_time_equals(expected_signature, parsed.signature):
        logger.debug("solution_rejected", reason="signature_mismatch")
        return False

    return True
