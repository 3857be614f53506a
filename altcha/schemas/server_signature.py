from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from altcha.schemas.challenge import Algorithm


class ServerSignaturePayload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    algorithm: Algorithm
    verification_data: str = Field(
        ...,
        validation_alias=AliasChoices("verification_data", "verificationData"),
        serialization_alias="verificationData",
    )
    signature: str
    verified: bool
    expire: int | None = None


class ServerSignatureVerificationData(BaseModel):
    """Decoded ``verification_data`` entries. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    classification: str | None = None
    country: str | None = None
    detailed_classification: str | None = None
    email: str | None = None
    expire: int | None = None
    fields: list[str] | None = None
    fields_hash: str | None = None
    ip_address: str | None = None
    reasons: list[str] | None = None
    score: float | None = None
    time: int | None = None
    verified: bool = False
