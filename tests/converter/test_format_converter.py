"""
Test cases for the JSON-YAML-XML converter backend.
Covers detection, every conversion direction and error handling.
"""

import json
import xml.etree.ElementTree as ET

import pytest
import yaml

from devtools_hub.api.converter import FormatConverter, convert_format, validate_format
from devtools_hub.core.exceptions import ConfigurationError, ParseError


class TestFormatConverter:
    """Test the FormatConverter class methods."""

    def setup_method(self):
        """Setup converter instance for each test."""
        self.converter = FormatConverter()

    def test_detect_format_json(self):
        assert self.converter.detect_format('{"name": "test", "value": 123}') == 'json'

    def test_detect_format_yaml(self):
        assert self.converter.detect_format('name: test\nvalue: 123') == 'yaml'

    def test_detect_format_xml(self):
        assert self.converter.detect_format('<root><name>test</name></root>') == 'xml'

    def test_detect_format_unknown(self):
        """Plain prose parses as a YAML scalar but has no mapping or list indicators."""
        assert self.converter.detect_format('this is not any known format') == 'unknown'

    def test_detect_format_whitespace_only(self):
        assert self.converter.detect_format("   \n\t  ") == 'unknown'

    def test_detect_format_malformed_yaml(self):
        assert self.converter.detect_format("key: value\n  invalid: [unclosed") == 'unknown'

    def test_json_to_yaml(self):
        result = self.converter.convert('{"name": "John", "age": 30}', 'json', 'yaml')
        assert result == 'name: John\nage: 30\n'

    def test_yaml_dates_stay_strings(self):
        result = self.converter.convert('released: 2024-01-01', 'yaml', 'json')
        assert json.loads(result) == {'released': '2024-01-01'}

    def test_xml_to_json(self):
        result = self.converter.convert('<root><a>1</a><a>2</a></root>', 'xml', 'json')
        assert json.loads(result) == {'root': {'a': ['1', '2']}}

    def test_xml_attributes_survive_round_trip(self):
        as_json = self.converter.convert('<r id="7"><c>t</c></r>', 'xml', 'json')
        assert json.loads(as_json) == {'r': {'@id': '7', 'c': 't'}}

        back = ET.fromstring(self.converter.convert(as_json, 'json', 'xml'))
        assert back.tag == 'r'
        assert back.get('id') == '7'
        assert back.find('c').text == 't'

    def test_json_to_xml_single_key_becomes_root(self):
        result = self.converter.convert('{"person": {"name": "A", "tags": ["x", "y"]}}', 'json', 'xml')
        root = ET.fromstring(result)
        assert root.tag == 'person'
        assert root.find('name').text == 'A'
        assert [t.text for t in root.findall('tags')] == ['x', 'y']

    def test_json_list_to_xml(self):
        root = ET.fromstring(self.converter.convert('[1, null]', 'json', 'xml'))
        assert root.tag == 'root'
        assert [item.text for item in root.findall('item')] == ['1', None]

    def test_xml_to_xml_is_prettified(self):
        result = self.converter.convert('<a><b>1</b></a>', 'xml', 'xml')
        assert result.startswith('<?xml version="1.0" ?>')
        assert '  <b>1</b>' in result

    def test_yaml_to_xml(self):
        root = ET.fromstring(self.converter.convert('config:\n  debug: true\n', 'yaml', 'xml'))
        assert root.tag == 'config'
        assert root.find('debug').text == 'True'

    def test_yaml_with_integer_keys_to_xml(self):
        root = ET.fromstring(self.converter.convert('1: a\n2: b\n', 'yaml', 'xml'))
        assert root.tag == 'root'
        assert root.find('tag_1').text == 'a'
        assert root.find('tag_2').text == 'b'

    def test_single_integer_key_becomes_root(self):
        root = ET.fromstring(self.converter.convert('7: seven\n', 'yaml', 'xml'))
        assert root.tag == 'tag_7'
        assert root.text == 'seven'

    def test_json_to_yaml_keeps_unicode(self):
        assert 'café' in self.converter.convert('{"name": "café"}', 'json', 'yaml')

    @pytest.mark.parametrize('name,expected', [
        ('valid', 'valid'),
        ('with space', 'with_space'),
        ('1st', 'tag_1st'),
        ('', 'tag_'),
    ])
    def test_sanitize_tag_name(self, name, expected):
        assert self.converter._sanitize_tag_name(name) == expected

    def test_invalid_json(self):
        with pytest.raises(ParseError, match='Invalid JSON'):
            self.converter.convert('{bad', 'json', 'yaml')

    def test_deeply_nested_json(self):
        nested = '[' * 5000 + ']' * 5000
        assert self.converter.detect_format(nested) == 'unknown'
        with pytest.raises(ParseError, match='Invalid JSON'):
            self.converter.convert(nested, 'json', 'yaml')

    def test_invalid_xml(self):
        with pytest.raises(ParseError, match='Invalid XML'):
            self.converter.convert('<a>', 'xml', 'json')
        with pytest.raises(ParseError, match='Invalid XML'):
            self.converter.convert('<a>', 'xml', 'xml')

    def test_invalid_yaml(self):
        with pytest.raises(ParseError, match='Invalid YAML'):
            self.converter.convert('a: [1', 'yaml', 'json')

    def test_value_without_json_form(self):
        with pytest.raises(ParseError):
            self.converter.convert('!!set {a, b}', 'yaml', 'json')


class TestConvertFormat:

    def test_auto_detection(self):
        result = convert_format('{"a": 1}', 'auto', 'yaml')
        assert result['success'] is True
        assert result['input_format'] == 'json'
        assert result['operation'] == 'convert'
        assert yaml.safe_load(result['result']) == {'a': 1}

    def test_same_format_is_format_operation(self):
        result = convert_format('{"a":1}', 'json', 'json')
        assert result['operation'] == 'format'
        assert result['result'] == '{\n  "a": 1\n}'

    def test_auto_detection_failure(self):
        with pytest.raises(ParseError, match='Could not auto-detect'):
            convert_format('just words', 'auto', 'json')

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError):
            convert_format('{}', 'json', 'toml')


class TestValidateFormat:

    def test_valid(self):
        assert validate_format('{"a": 1}', 'json') == {'valid': True, 'format': 'json'}
        assert validate_format('a: 1', 'yaml')['valid'] is True
        assert validate_format('<a/>', 'xml')['valid'] is True

    def test_invalid_json(self):
        result = validate_format('{', 'json')
        assert result['valid'] is False
        assert result['error'].startswith('Invalid JSON')

    def test_invalid_xml(self):
        result = validate_format('<a>', 'xml')
        assert result['valid'] is False
        assert result['error'].startswith('Invalid xml')

    def test_unsupported(self):
        assert validate_format('x', 'toml') == {'valid': False, 'error': 'Unsupported format: toml'}
