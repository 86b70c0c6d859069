"""
Tests for the primitive text codecs and the codec registry.
"""

import pytest

from devtools_hub.core.codecs import (
    base64_decode, base64_encode, binary_decode, binary_encode, get_codec,
    hex_decode, hex_encode, html_decode, html_encode, list_codecs, url_decode,
    url_encode
)
from devtools_hub.core.exceptions import ConfigurationError, DecodeError

SAMPLES = ['', 'Hello, World!', 'héllo wörld', '日本語', 'emoji 🎉', 'tabs\tand\nnewlines', '<&"\'>']


class TestRoundTrips:
    """decode(encode(s)) == s for every codec."""

    @pytest.mark.parametrize('name', ['base64', 'url', 'hex', 'binary', 'html'])
    def test_round_trip(self, name):
        codec = get_codec(name)
        for sample in SAMPLES:
            assert codec.decode(codec.encode(sample)) == sample


class TestBase64:

    def test_encode_known_value(self):
        assert base64_encode('Hello, World!') == 'SGVsbG8sIFdvcmxkIQ=='

    def test_decode_tolerates_missing_padding(self):
        assert base64_decode('SGVsbG8sIFdvcmxkIQ') == 'Hello, World!'

    def test_decode_tolerates_whitespace(self):
        assert base64_decode('SGVs bG8s\nIFdv cmxk IQ==') == 'Hello, World!'

    def test_decode_rejects_bad_alphabet(self):
        with pytest.raises(DecodeError):
            base64_decode('abc!')

    def test_decode_rejects_impossible_length(self):
        with pytest.raises(DecodeError):
            base64_decode('A')

    def test_decode_rejects_invalid_utf8(self):
        """'/w==' is the single byte 0xff."""
        with pytest.raises(DecodeError):
            base64_decode('/w==')


class TestUrl:

    def test_encode_reserved_characters(self):
        assert url_encode('a b&c/d') == 'a%20b%26c%2Fd'

    def test_unreserved_characters_untouched(self):
        assert url_encode('AZaz09-._~') == 'AZaz09-._~'

    def test_plain_text_decodes_to_itself(self):
        assert url_decode('plain-text') == 'plain-text'

    def test_decode_rejects_malformed_escape(self):
        with pytest.raises(DecodeError):
            url_decode('%zz')
        with pytest.raises(DecodeError):
            url_decode('100%')

    def test_decode_rejects_invalid_utf8(self):
        with pytest.raises(DecodeError):
            url_decode('%FF')


class TestHexAndBinary:

    def test_hex_encode_uses_utf8_bytes(self):
        assert hex_encode('Hi') == '48 69'
        assert hex_encode('é') == 'c3 a9'

    def test_hex_decode_ignores_whitespace(self):
        assert hex_decode('48 69\n') == 'Hi'
        assert hex_decode('4869') == 'Hi'

    def test_hex_decode_rejects_odd_length(self):
        with pytest.raises(DecodeError):
            hex_decode('486')

    def test_hex_decode_rejects_non_hex(self):
        with pytest.raises(DecodeError):
            hex_decode('zz')

    def test_binary_encode(self):
        assert binary_encode('A') == '01000001'
        assert binary_encode('AB') == '01000001 01000010'

    def test_binary_decode_accepts_short_groups(self):
        assert binary_decode('1000001') == 'A'

    def test_binary_decode_rejects_bad_groups(self):
        with pytest.raises(DecodeError):
            binary_decode('2')
        with pytest.raises(DecodeError):
            binary_decode('101010101')


class TestHtmlEntities:

    def test_encode(self):
        assert html_encode("<a href='x'>") == '&lt;a&nbsp;href=&#39;x&#39;&gt;'

    def test_encode_symbols(self):
        assert html_encode('© 2024') == '&copy;&nbsp;2024'

    def test_decode_numeric_entities(self):
        assert html_decode('&#65;&#x42;&#X43;') == 'ABC'

    def test_decode_is_single_pass(self):
        assert html_decode('&amp;lt;') == '&lt;'

    def test_unknown_entities_left_alone(self):
        assert html_decode('&bogus;') == '&bogus;'


class TestRegistry:

    def test_list_codecs(self):
        names = [codec['name'] for codec in list_codecs()]
        assert names == ['base64', 'url', 'hex', 'binary', 'html']

    def test_unknown_codec(self):
        with pytest.raises(ConfigurationError):
            get_codec('rot13')
