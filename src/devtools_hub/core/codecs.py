"""
Primitive text codecs: Base64, URL, hex, binary and HTML entities.

Every codec works on Python ``str`` values. Hex and binary operate on the
UTF-8 bytes of the text, so multi-byte characters expand to several groups
and every string round-trips.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Callable, Dict, List
from urllib.parse import quote, unquote

from .exceptions import ConfigurationError, DecodeError

BASE64_PATTERN = re.compile(r'^[A-Za-z0-9+/]*={0,2}$')
_BASE64URL_PATTERN = re.compile(r'^[A-Za-z0-9_-]*={0,2}$')
_MALFORMED_PERCENT = re.compile(r'%(?![0-9A-Fa-f]{2})')
_HEX_DIGITS = re.compile(r'^[0-9A-Fa-f]*$')
_BINARY_GROUP = re.compile(r'^[01]{1,8}$')
_WHITESPACE = re.compile(r'\s+')


def _bytes_to_text(raw: bytes, codec: str) -> str:
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid {codec}: decoded bytes are not valid UTF-8") from e


def decode_base64_bytes(text: str, urlsafe: bool = False) -> bytes:
    """Decode Base64 (or base64url) text to raw bytes.

    Whitespace is ignored and missing ``=`` padding is restored.
    """
    cleaned = _WHITESPACE.sub('', text)
    pattern = _BASE64URL_PATTERN if urlsafe else BASE64_PATTERN
    if not pattern.match(cleaned):
        raise DecodeError("Invalid Base64: unexpected character")

    stripped = cleaned.rstrip('=')
    if len(stripped) % 4 == 1:
        raise DecodeError("Invalid Base64: incorrect length")
    if urlsafe:
        stripped = stripped.replace('-', '+').replace('_', '/')
    padded = stripped + '=' * (-len(stripped) % 4)

    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid Base64: {e}") from e


def base64_encode(text: str) -> str:
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def base64_decode(text: str) -> str:
    return _bytes_to_text(decode_base64_bytes(text), 'Base64')


def url_encode(text: str) -> str:
    return quote(text, safe='')


def url_decode(text: str) -> str:
    """Decode percent escapes. Text without escapes is returned unchanged."""
    if _MALFORMED_PERCENT.search(text):
        raise DecodeError("Invalid URL encoding: malformed percent sequence")
    try:
        return unquote(text, errors='strict')
    except UnicodeDecodeError as e:
        raise DecodeError("Invalid URL encoding: escapes are not valid UTF-8") from e


def hex_encode(text: str) -> str:
    return ' '.join(f'{byte:02x}' for byte in text.encode('utf-8'))


def hex_decode(text: str) -> str:
    digits = _WHITESPACE.sub('', text)
    if len(digits) % 2:
        raise DecodeError("Invalid hex: odd number of digits")
    if not _HEX_DIGITS.match(digits):
        raise DecodeError("Invalid hex: non-hex digit found")
    return _bytes_to_text(bytes.fromhex(digits), 'hex')


def binary_encode(text: str) -> str:
    return ' '.join(f'{byte:08b}' for byte in text.encode('utf-8'))


def binary_decode(text: str) -> str:
    groups = text.split()
    for group in groups:
        if not _BINARY_GROUP.match(group):
            raise DecodeError(f"Invalid binary group: {group!r}")
    return _bytes_to_text(bytes(int(group, 2) for group in groups), 'binary')


# Order matters only for readability; encoding is a single pass.
HTML_ENTITIES: Dict[str, str] = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
    '¢': '&cent;',
    '£': '&pound;',
    '¥': '&yen;',
    '€': '&euro;',
    '©': '&copy;',
    '®': '&reg;',
    '™': '&trade;',
    '°': '&deg;',
    '±': '&plusmn;',
    '¼': '&frac14;',
    '½': '&frac12;',
    '¾': '&frac34;',
    '×': '&times;',
    '÷': '&divide;',
    ' ': '&nbsp;',
}

_HTML_REVERSE = {entity: char for char, entity in HTML_ENTITIES.items()}
_HTML_ENCODE_RE = re.compile('[' + re.escape(''.join(HTML_ENTITIES)) + ']')
_HTML_DECODE_RE = re.compile(
    '|'.join(re.escape(entity) for entity in _HTML_REVERSE)
    + r'|&#(\d+);|&#[xX]([0-9a-fA-F]+);'
)


def html_encode(text: str) -> str:
    return _HTML_ENCODE_RE.sub(lambda m: HTML_ENTITIES[m.group(0)], text)


def _html_entity(match) -> str:
    decimal, hexadecimal = match.group(1), match.group(2)
    if decimal is None and hexadecimal is None:
        return _HTML_REVERSE[match.group(0)]
    code_point = int(decimal) if decimal is not None else int(hexadecimal, 16)
    try:
        return chr(code_point)
    except (ValueError, OverflowError) as e:
        raise DecodeError(f"Invalid numeric entity: {match.group(0)}") from e


def html_decode(text: str) -> str:
    """Decode table entities plus ``&#NN;`` and ``&#xHH;`` in one pass."""
    return _HTML_DECODE_RE.sub(_html_entity, text)


@dataclass(frozen=True)
class Codec:
    name: str
    label: str
    encode: Callable[[str], str]
    decode: Callable[[str], str]


CODECS: Dict[str, Codec] = {}


def register(codec: Codec) -> None:
    CODECS[codec.name] = codec


def get_codec(name: str) -> Codec:
    codec = CODECS.get(name)
    if codec is None:
        raise ConfigurationError(f"Unknown codec: {name}. Supported: {sorted(CODECS)}")
    return codec


def list_codecs() -> List[Dict[str, str]]:
    return [{'name': c.name, 'label': c.label} for c in CODECS.values()]


register(Codec('base64', 'Base64', base64_encode, base64_decode))
register(Codec('url', 'URL (percent-encoding)', url_encode, url_decode))
register(Codec('hex', 'Hexadecimal (UTF-8 bytes)', hex_encode, hex_decode))
register(Codec('binary', 'Binary (UTF-8 bytes)', binary_encode, binary_decode))
register(Codec('html', 'HTML entities', html_encode, html_decode))
