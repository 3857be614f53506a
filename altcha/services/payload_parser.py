"""
Boundary adapters turning loosely typed client input into typed payloads.

Accepted forms: a model instance, a mapping, a JSON string or a
base64-encoded JSON string (what the widget submits). Every failure
collapses to None so callers cannot tell garbage from a wrong answer.
"""

import base64
import binascii
import json
from collections.abc import Mapping
from typing import TypeVar

import structlog
from pydantic import BaseModel

from altcha.schemas import Payload, ServerSignaturePayload

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode_text(value: str | bytes) -> dict | None:
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    value = value.strip()
    if not value.startswith("{"):
        try:
            value = base64.b64decode(value, validate=True).decode("utf-8")
        except binascii.Error:
            return None
    data = json.loads(value)
    return data if isinstance(data, dict) else None


def _parse(model_cls: type[ModelT], value) -> ModelT | None:
    if isinstance(value, model_cls):
        return value
    try:
        if isinstance(value, (str, bytes)):
            value = _decode_text(value)
        if not isinstance(value, Mapping):
            logger.debug("payload_unparseable", model=model_cls.__name__)
            return None
        return model_cls.model_validate(dict(value))
    except (ValueError, TypeError, RecursionError) as e:
        # ValidationError, JSONDecodeError and UnicodeDecodeError are all ValueErrors;
        # RecursionError comes from deeply nested JSON
        logger.debug("payload_invalid", model=model_cls.__name__, error=type(e).__name__)
        return None


def parse_payload(value) -> Payload | None:
    return _parse(Payload, value)


def parse_server_signature_payload(value) -> ServerSignaturePayload | None:
    return _parse(ServerSignaturePayload, value)
