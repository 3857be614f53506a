import time
from collections.abc import Mapping, Sequence
from urllib.parse import parse_qsl

import structlog

from altcha.schemas import Algorithm, ServerSignatureVerificationData
from altcha.services.crypto_utils import constant_time_equals, digest_hex, hmac_hex
from altcha.services.payload_parser import parse_server_signature_payload

logger = structlog.get_logger()

FIELD_SEPARATOR = "\n"

# verification_data key -> (model field, converter)
_VERIFICATION_DATA_KEYS = {
    "classification": ("classification", str),
    "country": ("country", str),
    "detailedClassification": ("detailed_classification", str),
    "email": ("email", str),
    "expire": ("expire", int),
    "fields": ("fields", lambda v: v.split(",")),
    "fieldsHash": ("fields_hash", str),
    "ipAddress": ("ip_address", str),
    "reasons": ("reasons", lambda v: v.split(",")),
    "score": ("score", float),
    "time": ("time", int),
    "verified": ("verified", lambda v: v == "true"),
}


def _first_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Sequence):
        return _first_value(value[0]) if value else ""
    return str(value)


def verify_fields_hash(
    form_data: Mapping,
    field_names: Sequence[str],
    expected_hash: str,
    algorithm: Algorithm | str = Algorithm.SHA256,
) -> bool:
    """
    Check that the named form fields hash to expected_hash.

    Values are taken in field_names order (first value when a field has
    several), missing fields count as empty strings, and the values are
    joined with newlines before hashing.
    """
    if not isinstance(form_data, Mapping) or not isinstance(expected_hash, str):
        return False
    if isinstance(field_names, (str, bytes)) or not isinstance(field_names, Sequence):
        return False
    if not all(isinstance(name, str) for name in field_names):
        return False
    joined = FIELD_SEPARATOR.join(_first_value(form_data.get(name)) for name in field_names)
    return constant_time_equals(digest_hex(algorithm, joined), expected_hash)


def parse_verification_data(verification_data: str) -> ServerSignatureVerificationData:
    """Decode the query-string form of server verification data."""
    values = {}
    for key, raw in parse_qsl(verification_data, keep_blank_values=True):
        if key not in _VERIFICATION_DATA_KEYS:
            continue
        field, convert = _VERIFICATION_DATA_KEYS[key]
        try:
            values[field] = convert(raw)
        except ValueError:
            values[field] = None
    return ServerSignatureVerificationData(**values)


def verify_server_signature(payload, hmac_key: str | bytes) -> tuple[bool, str | None]:
    """
    Verify a server signature attesting to an earlier verification.

    Returns (is_verified, verification_data). is_verified requires a valid
    signature, a true ``verified`` claim and no elapsed ``expire``, whether
    set on the payload or embedded in verification_data.
    """
    parsed = parse_server_signature_payload(payload)
    if parsed is None:
        return False, None

    expected_signature = hmac_hex(
        parsed.algorithm,
        digest_hex(parsed.algorithm, parsed.verification_data),
        hmac_key,
    )
    signature_valid = constant_time_equals(expected_signature, parsed.signature)

    now = int(time.time())
    expires = [parsed.expire, parse_verification_data(parsed.verification_data).expire]
    expired = any(expire is not None and expire <= now for expire in expires)

    is_verified = signature_valid and parsed.verified and not expired
    if not is_verified:
        logger.debug(
            "server_signature_rejected",
            signature_valid=signature_valid,
            verified=parsed.verified,
            expired=expired,
        )
    return is_verified, parsed.verification_data
