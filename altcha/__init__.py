from altcha.exceptions import AltchaError, InvalidOptions, UnsupportedAlgorithm
from altcha.schemas import (
    Algorithm,
    Challenge,
    ChallengeOptions,
    Payload,
    ServerSignaturePayload,
    ServerSignatureVerificationData,
    Solution,
)
from altcha.services.crypto_utils import (
    constant_time_equals,
    digest,
    digest_hex,
    hmac_digest,
    hmac_hex,
    random_bytes,
    random_int,
)
from altcha.services.payload_parser import parse_payload, parse_server_signature_payload
from altcha.services.pow_service import create_challenge, solve_challenge, verify_solution
from altcha.services.salt_codec import encode_salt, extract_expires, extract_params
from altcha.services.verification_service import (
    parse_verification_data,
    verify_fields_hash,
    verify_server_signature,
)

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "AltchaError",
    "Challenge",
    "ChallengeOptions",
    "InvalidOptions",
    "Payload",
    "ServerSignaturePayload",
    "ServerSignatureVerificationData",
    "Solution",
    "UnsupportedAlgorithm",
    "constant_time_equals",
    "create_challenge",
    "digest",
    "digest_hex",
    "encode_salt",
    "extract_expires",
    "extract_params",
    "hmac_digest",
    "hmac_hex",
    "parse_payload",
    "parse_server_signature_payload",
    "parse_verification_data",
    "random_bytes",
    "random_int",
    "solve_challenge",
    "verify_fields_hash",
    "verify_server_signature",
    "verify_solution",
]
