"""
Tests for password based text encryption.
"""

import base64
from dataclasses import replace

import pytest

from devtools_hub.core.encryption import NONCE_SIZE, SALT_SIZE, decrypt_text, encrypt_text
from devtools_hub.core.exceptions import ConfigurationError, DecodeError


class TestEncryptText:

    def test_round_trip_base64(self):
        result = encrypt_text('secret message', 'hunter2')
        assert result.format == 'base64'
        assert result.algorithm == 'aes-256'
        assert decrypt_text(result, 'hunter2') == 'secret message'

    def test_round_trip_hex_aes128(self):
        result = encrypt_text('héllo 🎉', 'pw', output_format='hex', algorithm='aes-128')
        assert len(bytes.fromhex(result.iv)) == NONCE_SIZE
        assert len(bytes.fromhex(result.salt)) == SALT_SIZE
        assert decrypt_text(result, 'pw') == 'héllo 🎉'

    def test_salt_and_nonce_are_random(self):
        first = encrypt_text('same', 'pw')
        second = encrypt_text('same', 'pw')
        assert first.output != second.output
        assert first.salt != second.salt

    def test_empty_plaintext(self):
        assert decrypt_text(encrypt_text('', 'pw'), 'pw') == ''

    def test_to_dict(self):
        result = encrypt_text('x', 'pw')
        assert set(result.to_dict()) == {'output', 'iv', 'salt', 'format', 'algorithm'}

    def test_password_required(self):
        with pytest.raises(ConfigurationError, match='Password is required'):
            encrypt_text('x', '')

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError):
            encrypt_text('x', 'pw', output_format='base32')

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError):
            encrypt_text('x', 'pw', algorithm='des')


class TestDecryptText:

    def test_wrong_password(self):
        result = encrypt_text('secret', 'right')
        with pytest.raises(DecodeError, match='wrong password'):
            decrypt_text(result, 'wrong')

    def test_tampered_ciphertext(self):
        result = encrypt_text('secret', 'pw')
        raw = bytearray(base64.b64decode(result.output))
        raw[0] ^= 1
        tampered = replace(result, output=base64.b64encode(bytes(raw)).decode('ascii'))
        with pytest.raises(DecodeError):
            decrypt_text(tampered, 'pw')

    def test_malformed_field(self):
        result = encrypt_text('secret', 'pw')
        with pytest.raises(DecodeError, match='Invalid ciphertext'):
            decrypt_text(replace(result, output='not base64!'), 'pw')

    def test_bad_iv_length(self):
        result = encrypt_text('secret', 'pw')
        with pytest.raises(DecodeError, match='Invalid iv'):
            decrypt_text(replace(result, iv=base64.b64encode(b'short').decode('ascii')), 'pw')
