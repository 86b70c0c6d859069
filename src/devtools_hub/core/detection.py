"""
Smart-paste data type detection.

``detect_data_type`` runs an ordered list of probes over trimmed input and
returns the first positive match. Structural formats come first and loose
heuristics last, so ``{"a": 1}`` is JSON even though it also contains a
``key: value`` line.

``is_likely_base64`` is a separate, narrower classifier used by the Base64
tool. It scores on a 0-100 integer scale rather than the 0-1 confidence of
``DetectionResult``.
"""

import base64
import binascii
import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from .codecs import BASE64_PATTERN, decode_base64_bytes, url_decode
from .exceptions import DecodeError, ParseError
from .jwt_tools import JWTParts, decode_jwt
from .timestamps import MILLISECONDS_DIGITS, SECONDS_DIGITS, timestamp_to_datetime, to_iso
from .xml_tools import reindent_markup

DATA_TYPES = ('json', 'jwt', 'base64', 'url', 'timestamp', 'hex', 'xml', 'yaml', 'text')

_TIMESTAMP_RE = re.compile(r'^-?\d+$', re.ASCII)
_HEX_COLOR_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')
_YAML_LINE_RE = re.compile(r'^\s*\w+:\s*.+')


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, JWTParts):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


@dataclass
class DetectionResult:
    """Outcome of a detection. ``confidence`` is a heuristic score in [0, 1]."""

    type: str
    confidence: float
    data: Any = None
    formatted: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'type': self.type,
            'confidence': self.confidence,
            'data': _jsonable(self.data)
        }
        if self.formatted is not None:
            result['formatted'] = self.formatted
        return result


@dataclass
class Base64Detection:
    """Outcome of ``is_likely_base64``. ``confidence`` is an integer 0-100."""

    is_valid: bool
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return {'is_valid': self.is_valid, 'confidence': self.confidence}


def _decoded_text(raw: bytes) -> str:
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        return raw.decode('latin-1')


def probe_json(text: str) -> Optional[DetectionResult]:
    if not text.startswith(('{', '[')):
        return None
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return DetectionResult('json', 0.9, parsed, json.dumps(parsed, indent=2, ensure_ascii=False))


def probe_jwt(text: str) -> Optional[DetectionResult]:
    parts = text.split('.')
    if len(parts) != 3 or not all(parts):
        return None
    try:
        for part in parts:
            decode_base64_bytes(part, urlsafe=True)
        token = decode_jwt(text)
    except (DecodeError, ParseError):
        return None

    formatted = json.dumps({'header': token.header, 'payload': token.payload},
                           indent=2, ensure_ascii=False)
    return DetectionResult('jwt', 0.95, token, formatted)


def probe_base64(text: str) -> Optional[DetectionResult]:
    # Only text that re-encodes to itself counts.
    if len(text) % 4 or not BASE64_PATTERN.match(text):
        return None
    try:
        raw = base64.b64decode(text, validate=True)
    except binascii.Error:
        return None
    if base64.b64encode(raw).decode('ascii') != text:
        return None

    decoded = _decoded_text(raw)
    return DetectionResult('base64', 0.8, {'encoded': text, 'decoded': decoded}, decoded)


def probe_url(text: str) -> Optional[DetectionResult]:
    if any(char.isspace() for char in text):
        return None
    try:
        parsed = urlparse(text)
        if not parsed.scheme or not parsed.hostname:
            return None
        parsed.port
        formatted = url_decode(text)
    except (ValueError, DecodeError):
        return None

    data = {
        'original': text,
        'protocol': parsed.scheme.lower() + ':',
        'host': parsed.netloc.rpartition('@')[2].lower(),
        'pathname': parsed.path or '/',
        'search': '?' + parsed.query if parsed.query else '',
        'hash': '#' + parsed.fragment if parsed.fragment else ''
    }
    return DetectionResult('url', 0.9, data, formatted)


def probe_timestamp(text: str) -> Optional[DetectionResult]:
    digits = len(text)
    if digits not in (SECONDS_DIGITS, MILLISECONDS_DIGITS) or not _TIMESTAMP_RE.match(text):
        return None
    value = int(text)
    # Negative values (pre-1970) and zero are rejected.
    if value <= 0:
        return None

    date = timestamp_to_datetime(value, digits)
    return DetectionResult('timestamp', 0.8, {'timestamp': value, 'date': date}, to_iso(date))


def probe_hex_color(text: str) -> Optional[DetectionResult]:
    if not _HEX_COLOR_RE.match(text):
        return None
    r, g, b = (int(text[i:i + 2], 16) for i in (1, 3, 5))
    data = {'hex': text, 'rgb': {'r': r, 'g': g, 'b': b}}
    return DetectionResult('hex', 0.9, data, f'rgb({r}, {g}, {b})')


def probe_xml(text: str) -> Optional[DetectionResult]:
    # Syntactic only, the markup is not validated.
    if not (text.startswith('<') and text.endswith('>')):
        return None
    return DetectionResult('xml', 0.7, text, reindent_markup(text))


def probe_yaml(text: str) -> Optional[DetectionResult]:
    # Any "key: value" line matches, so prose with a colon is classified as YAML.
    if not any(_YAML_LINE_RE.match(line) for line in text.split('\n')):
        return None
    return DetectionResult('yaml', 0.6, text, text)


Probe = Callable[[str], Optional[DetectionResult]]

PROBES: List[Tuple[str, Probe]] = [
    ('json', probe_json),
    ('jwt', probe_jwt),
    ('base64', probe_base64),
    ('url', probe_url),
    ('timestamp', probe_timestamp),
    ('hex', probe_hex_color),
    ('xml', probe_xml),
    ('yaml', probe_yaml),
]


def detect_data_type(text: str) -> DetectionResult:
    """Classify pasted text, falling back to ``text`` with confidence 1."""
    trimmed = text.strip()
    if not trimmed:
        return DetectionResult('text', 1.0, trimmed)

    for _name, probe in PROBES:
        result = probe(trimmed)
        if result is not None:
            return result

    return DetectionResult('text', 1.0, trimmed)


def _printable_ratio(raw: bytes) -> float:
    if not raw:
        return 0.0
    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError:
        printable = sum(1 for byte in raw if 32 <= byte <= 126 or byte in (9, 10, 13))
        return printable / len(raw)
    printable = sum(1 for char in text if char.isprintable() or char in '\t\n\r')
    return printable / len(text)


def is_likely_base64(text: str) -> Base64Detection:
    """Score how likely ``text`` is Base64.

    Points: alphabet match 30, length a multiple of 4 20, padding present or
    unnecessary 10, successful decode 20, printable decoded content 20 (scaled
    down below a 0.9 ratio). Decoding is only attempted when the alphabet
    matches.
    """
    cleaned = text.strip()
    if not cleaned or not BASE64_PATTERN.match(cleaned):
        return Base64Detection(False, 0)

    score = 30
    if len(cleaned) % 4 == 0:
        score += 20
    if cleaned.endswith('=') or len(cleaned) % 4 == 0:
        score += 10

    try:
        raw = decode_base64_bytes(cleaned)
    except DecodeError:
        return Base64Detection(False, score)
    score += 20

    ratio = _printable_ratio(raw)
    score += 20 if ratio >= 0.9 else int(20 * ratio)

    return Base64Detection(score >= 60, min(score, 100))
