from datetime import UTC, datetime, timedelta

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from altcha.schemas import DEFAULT_MAX_NUMBER, DEFAULT_SALT_LENGTH, Algorithm, ChallengeOptions


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_prefix="ALTCHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared secret for challenge signatures
    hmac_key: str = ""

    # Challenge defaults
    algorithm: Algorithm = Algorithm.SHA256
    max_number: int = DEFAULT_MAX_NUMBER
    salt_length: int = DEFAULT_SALT_LENGTH
    challenge_ttl_seconds: int = 300  # 5 minutes, 0 disables expiry

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" | "json"

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("console", "json"):
            raise ValueError("log_format must be 'console' or 'json'")
        return v

    def challenge_options(self, **overrides) -> ChallengeOptions:
        """Build ChallengeOptions from configuration, with per-call overrides."""
        values = {
            "algorithm": self.algorithm,
            "max_number": self.max_number,
            "salt_length": self.salt_length,
            "hmac_key": self.hmac_key,
        }
        if self.challenge_ttl_seconds > 0:
            expires_at = datetime.now(UTC) + timedelta(seconds=self.challenge_ttl_seconds)
            values["expires"] = int(expires_at.timestamp())
        values.update(overrides)
        return ChallengeOptions(**values)


settings = Settings()
