"""
Structural JWT decoding.

Tokens are split and their header and payload decoded; the signature is
carried through untouched and never verified.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .codecs import decode_base64_bytes
from .exceptions import DecodeError, FormatError
from .timestamps import timestamp_to_datetime, to_iso, SECONDS_DIGITS

TIME_CLAIMS = ('iat', 'nbf', 'exp')


@dataclass
class JWTParts:
    header: Dict[str, Any]
    payload: Dict[str, Any]
    signature: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'header': self.header,
            'payload': self.payload,
            'signature': self.signature
        }


def decode_segment(segment: str) -> Dict[str, Any]:
    """Base64url-decode a segment and parse it as a JSON object."""
    raw = decode_base64_bytes(segment, urlsafe=True)
    value = json.loads(raw.decode('utf-8'))
    if not isinstance(value, dict):
        raise ValueError("segment is not a JSON object")
    return value


def decode_jwt(token: str) -> JWTParts:
    parts = token.strip().split('.')
    if len(parts) != 3 or not all(parts):
        raise FormatError("Invalid JWT format")

    try:
        header = decode_segment(parts[0])
        payload = decode_segment(parts[1])
    except (DecodeError, UnicodeDecodeError, ValueError, RecursionError) as e:
        raise FormatError("Invalid JWT") from e

    return JWTParts(header=header, payload=payload, signature=parts[2])


def describe_claims(payload: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Render the registered time claims as ISO dates and report expiry.

    Non-numeric claim values are reported as-is without a date.
    """
    now = now or datetime.now(timezone.utc)
    claims: Dict[str, Any] = {}

    for name in TIME_CLAIMS:
        value = payload.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            claims[name] = {'value': value, 'date': None}
            continue
        claims[name] = {
            'value': value,
            'date': to_iso(timestamp_to_datetime(int(value), SECONDS_DIGITS))
        }

    expired = None
    if isinstance(payload.get('exp'), (int, float)) and not isinstance(payload.get('exp'), bool):
        expired = timestamp_to_datetime(int(payload['exp']), SECONDS_DIGITS) <= now

    return {'claims': claims, 'expired': expired}
