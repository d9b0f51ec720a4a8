"""Extraction of the legacy OpenID 2.0 identifier from an OAuth2 ``id_token``.

Google embeds an ``openid_id`` claim in the ``id_token`` when the ``openid``
scope is requested together with an ``openid.realm``. The token comes straight
from the code exchange that just authenticated the user, so only the payload
is decoded: the signature, issuer, audience and expiry are not checked.
"""

from __future__ import annotations

import base64
import json
import logging
import re
from typing import Any

from .contracts import MalformedIdTokenError

logger = logging.getLogger(__name__)

_NON_BASE64 = re.compile(r"[^A-Za-z0-9_-]")


def _parse_json_object(text: str | None) -> dict[str, Any] | None:
    if not text:
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        logger.debug("OAuth2: ignoring non-JSON content")
        return None
    return parsed if isinstance(parsed, dict) else None


def json_string(value: Any) -> str:
    """Render a JSON scalar as a string (numbers and booleans as JSON text).

    Raises:
        TypeError: if the value is a JSON object or array.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise TypeError(f"Expected a JSON primitive, got {type(value).__name__}")
    return json.dumps(value)


def decode_payload(id_token: str) -> str:
    """Decode the payload of a ``header.payload.signature`` token.

    Trailing empty parts are dropped before counting, so ``h.p.`` has two
    parts and ``h.p.s.`` has three. Decoding is lenient: both the standard and
    the URL-safe base64 alphabets are accepted, characters outside them are
    skipped, padding is optional and a trailing character that cannot complete
    a byte is discarded.

    Raises:
        MalformedIdTokenError: if the token is not made of exactly three parts.
    """
    parts = id_token.split(".")
    while parts and not parts[-1]:
        parts.pop()
    if len(parts) != 3:
        raise MalformedIdTokenError(
            f"Expected 3 dot-separated parts in id_token, found {len(parts)}"
        )
    segment = _NON_BASE64.sub("", parts[1].replace("+", "-").replace("/", "_"))
    if len(segment) % 4 == 1:
        segment = segment[:-1]
    segment += "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment).decode("utf-8", errors="replace")


def lookup_claimed_identity(raw_response: str | None) -> str | None:
    """Return the ``openid_id`` claim of the ``id_token`` in a token response.

    Args:
        raw_response: Raw token endpoint response body.

    Returns:
        The legacy claimed identifier, or None when the response carries no
        ``id_token`` or the token has no ``openid_id`` claim.
    """
    response = _parse_json_object(raw_response)
    if response is None:
        return None
    id_token = response.get("id_token")
    if id_token is None:
        return None

    if not isinstance(id_token, str):
        raise MalformedIdTokenError(f"id_token must be a string, got {type(id_token).__name__}")

    payload = decode_payload(id_token)
    claims = _parse_json_object(payload)
    if claims is None:
        return None

    openid_id = claims.get("openid_id")
    if openid_id is None:
        logger.debug("OAuth2: JWT doesn't contain openid_id element")
        return None
    if isinstance(openid_id, (dict, list)):
        logger.debug("OAuth2: ignoring non-primitive openid_id element")
        return None
    claimed = json_string(openid_id)
    logger.debug("OAuth2: openid_id=%s", claimed)
    return claimed
