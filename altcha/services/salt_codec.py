"""
Salt encoding.

A salt is a random identifier optionally followed by a query section:
``<id>?k1=v1&k2=v2``. The whole string is hashed verbatim; the query
section is only decoded to look up ``expires``.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode

EXPIRES_PARAM = "expires"


def encode_salt(
    salt_id: str,
    params: Mapping[str, Any] | None = None,
    expires: int | None = None,
) -> str:
    """Append params (insertion order) and expires to a salt identifier."""
    entries = dict(params or {})
    if expires is not None:
        entries[EXPIRES_PARAM] = int(expires)
    if not entries:
        return salt_id
    if salt_id.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&" if "?" in salt_id else "?"
    return f"{salt_id}{separator}{urlencode(entries)}"


def extract_params(salt: str) -> dict[str, str]:
    """
    Decode the query section of a salt.

    Repeated keys keep the last value. Empty fields are skipped and bare
    flags decode to an empty value, so one odd field never hides the rest.
    """
    if not isinstance(salt, str) or "?" not in salt:
        return {}
    _, query = salt.split("?", 1)
    return dict(parse_qsl(query, keep_blank_values=True))


def extract_expires(salt: str) -> int | None:
    value = extract_params(salt).get(EXPIRES_PARAM)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
