from altcha.schemas.challenge import (
    DEFAULT_MAX_NUMBER,
    DEFAULT_SALT_LENGTH,
    Algorithm,
    Challenge,
    ChallengeOptions,
    Payload,
    Solution,
)
from altcha.schemas.server_signature import (
    ServerSignaturePayload,
    ServerSignatureVerificationData,
)

__all__ = [
    "DEFAULT_MAX_NUMBER",
    "DEFAULT_SALT_LENGTH",
    "Algorithm",
    "Challenge",
    "ChallengeOptions",
    "Payload",
    "ServerSignaturePayload",
    "ServerSignatureVerificationData",
    "Solution",
]
