import random

import pytest
import structlog

from altcha.schemas import Algorithm, ChallengeOptions


@pytest.fixture
def hmac_key():
    return "test_key"


@pytest.fixture
def salt():
    return "test_salt"


@pytest.fixture
def number():
    return 123


@pytest.fixture
def challenge_options(hmac_key, salt, number):
    """Options with a fixed salt and number so results are reproducible."""
    return ChallengeOptions(
        algorithm=Algorithm.SHA256,
        hmac_key=hmac_key,
        salt=salt,
        number=number,
    )


@pytest.fixture
def seeded_rng():
    """Deterministic stand-in for the system random source."""
    return random.Random(1234)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep a developer's ALTCHA_* environment out of the tests."""
    for name in (
        "ALTCHA_HMAC_KEY",
        "ALTCHA_ALGORITHM",
        "ALTCHA_MAX_NUMBER",
        "ALTCHA_SALT_LENGTH",
        "ALTCHA_CHALLENGE_TTL_SECONDS",
        "ALTCHA_LOG_LEVEL",
        "ALTCHA_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (or the CLI) applied."""
    yield
    structlog.reset_defaults()
