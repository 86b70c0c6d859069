"""
UUID and password generators.
"""

import secrets
import uuid
from typing import List

from .exceptions import ConfigurationError

UPPERCASE = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
LOWERCASE = 'abcdefghijklmnopqrstuvwxyz'
NUMBERS = '0123456789'
SYMBOLS = '!@#$%^&*()_+-=[]{}|;:,.<>?'
SIMILAR_CHARACTERS = 'il1Lo0O'

UUID_VERSIONS = ('v1', 'v4')
MAX_UUID_COUNT = 100
MIN_PASSWORD_LENGTH = 4
MAX_PASSWORD_LENGTH = 100
MAX_PASSWORD_COUNT = 50


def generate_uuid(version: str = 'v4') -> str:
    if version == 'v4':
        return str(uuid.uuid4())
    if version == 'v1':
        return str(uuid.uuid1())
    raise ConfigurationError(f"Unsupported UUID version: {version}. Supported: {list(UUID_VERSIONS)}")


def generate_uuids(count: int = 1, version: str = 'v4') -> List[str]:
    if not 1 <= count <= MAX_UUID_COUNT:
        raise ConfigurationError(f"Count must be between 1 and {MAX_UUID_COUNT}")
    return [generate_uuid(version) for _ in range(count)]


def password_charset(uppercase: bool = True, lowercase: bool = True, numbers: bool = True,
                     symbols: bool = False, exclude_similar: bool = False) -> str:
    charset = ''
    if uppercase:
        charset += UPPERCASE
    if lowercase:
        charset += LOWERCASE
    if numbers:
        charset += NUMBERS
    if symbols:
        charset += SYMBOLS
    if exclude_similar:
        charset = ''.join(c for c in charset if c not in SIMILAR_CHARACTERS)
    return charset


def generate_password(length: int = 12, uppercase: bool = True, lowercase: bool = True,
                      numbers: bool = True, symbols: bool = False,
                      exclude_similar: bool = False) -> str:
    """Generate a random password from the selected character classes.

    Raises:
        ConfigurationError: if no character class is selected or the length
            is outside 4..100
    """
    if not MIN_PASSWORD_LENGTH <= length <= MAX_PASSWORD_LENGTH:
        raise ConfigurationError(
            f"Length must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}"
        )
    charset = password_charset(uppercase, lowercase, numbers, symbols, exclude_similar)
    if not charset:
        raise ConfigurationError("Please select at least one character type")
    return ''.join(secrets.choice(charset) for _ in range(length))
