"""
Password based text encryption.

AES-GCM with a key derived by PBKDF2-HMAC-SHA256. The salt and nonce are
random per call and returned beside the ciphertext, rendered in the same
output encoding.
"""

import base64
import binascii
import os
from dataclasses import dataclass
from typing import Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import ConfigurationError, DecodeError

OUTPUT_FORMATS = ('base64', 'hex')
KEY_SIZES = {'aes-128': 16, 'aes-256': 32}
PBKDF2_ITERATIONS = 200_000
SALT_SIZE = 16
NONCE_SIZE = 12


@dataclass
class EncryptionResult:
    output: str
    iv: str
    salt: str
    format: str = 'base64'
    algorithm: str = 'aes-256'

    def to_dict(self) -> Dict[str, str]:
        return {
            'output': self.output,
            'iv': self.iv,
            'salt': self.salt,
            'format': self.format,
            'algorithm': self.algorithm
        }


def _render(raw: bytes, output_format: str) -> str:
    if output_format == 'hex':
        return raw.hex()
    return base64.b64encode(raw).decode('ascii')


def _parse(text: str, output_format: str, field: str) -> bytes:
    try:
        if output_format == 'hex':
            return bytes.fromhex(text)
        return base64.b64decode(text, validate=True)
    except (ValueError, binascii.Error) as e:
        raise DecodeError(f"Invalid {field}: not {output_format} encoded") from e


def _check_options(password: str, output_format: str, algorithm: str) -> None:
    if not password:
        raise ConfigurationError("Password is required")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(f"Invalid output format. Supported: {list(OUTPUT_FORMATS)}")
    if algorithm not in KEY_SIZES:
        raise ConfigurationError(f"Invalid algorithm. Supported: {list(KEY_SIZES)}")


def derive_key(password: str, salt: bytes, length: int = 32) -> bytes:
    kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=length, salt=salt, iterations=PBKDF2_ITERATIONS)
    return kdf.derive(password.encode('utf-8'))


def encrypt_text(plaintext: str, password: str, output_format: str = 'base64',
                 algorithm: str = 'aes-256') -> EncryptionResult:
    _check_options(password, output_format, algorithm)

    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)
    key = derive_key(password, salt, KEY_SIZES[algorithm])
    ciphertext = AESGCM(key).encrypt(nonce, plaintext.encode('utf-8'), None)

    return EncryptionResult(
        output=_render(ciphertext, output_format),
        iv=_render(nonce, output_format),
        salt=_render(salt, output_format),
        format=output_format,
        algorithm=algorithm
    )


def decrypt_text(result: EncryptionResult, password: str) -> str:
    """Reverse ``encrypt_text``.

    Raises:
        DecodeError: wrong password, tampered ciphertext, or malformed fields
        ConfigurationError: empty password or unknown format/algorithm
    """
    _check_options(password, result.format, result.algorithm)

    ciphertext = _parse(result.output, result.format, 'ciphertext')
    nonce = _parse(result.iv, result.format, 'iv')
    salt = _parse(result.salt, result.format, 'salt')
    if len(nonce) != NONCE_SIZE:
        raise DecodeError(f"Invalid iv: expected {NONCE_SIZE} bytes")

    key = derive_key(password, salt, KEY_SIZES[result.algorithm])
    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise DecodeError("Decryption failed: wrong password or corrupted data") from e

    try:
        return plaintext.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError("Decrypted bytes are not valid UTF-8") from e
