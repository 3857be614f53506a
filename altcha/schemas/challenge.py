import base64
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_NUMBER = 1_000_000
DEFAULT_SALT_LENGTH = 12
# Largest integer a browser client can represent exactly (2**53 - 1)
MAX_PAYLOAD_NUMBER = 9_007_199_254_740_991


class Algorithm(str, Enum):
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"


class ChallengeOptions(BaseModel):
    """Issuer input. Range and key checks happen in create_challenge."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm = Algorithm.SHA256
    max_number: int = DEFAULT_MAX_NUMBER
    salt_length: int = Field(DEFAULT_SALT_LENGTH, gt=0)
    hmac_key: str | bytes
    salt: str | None = None
    number: int | None = None
    expires: int | None = Field(None, description="Absolute Unix timestamp in seconds")
    params: dict[str, Any] | None = None

    @field_validator("expires", mode="before")
    @classmethod
    def convert_expires(cls, v):
        """Accept a datetime and store whole seconds since the epoch."""
        if isinstance(v, datetime):
            return int(v.timestamp())
        return v


class Challenge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    algorithm: Algorithm
    challenge: str
    salt: str
    signature: str
    max_number: int = Field(
        ...,
        validation_alias=AliasChoices("max_number", "maxnumber"),
        serialization_alias="maxnumber",
    )

    def to_json(self) -> str:
        """Serialize in the widget wire format (``maxnumber`` key)."""
        return self.model_dump_json(by_alias=True)


class Payload(BaseModel):
    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    challenge: str
    number: int = Field(..., ge=0, le=MAX_PAYLOAD_NUMBER)
    salt: str
    signature: str

    @classmethod
    def from_challenge(cls, challenge: Challenge, number: int) -> "Payload":
        return cls(
            algorithm=challenge.algorithm,
            challenge=challenge.challenge,
            number=number,
            salt=challenge.salt,
            signature=challenge.signature,
        )

    def to_base64(self) -> str:
        """Encode as base64 JSON, the form a widget submits."""
        return base64.b64encode(self.model_dump_json().encode()).decode()


class Solution(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    took: float = Field(..., description="Elapsed milliseconds")
