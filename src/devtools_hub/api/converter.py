"""
Data format converter API using reliable Python libraries.
Handles conversion between JSON, YAML, and XML formats.
"""

import json
import xml.etree.ElementTree as ET
from typing import Any, Dict
from xml.dom import minidom
from xml.parsers.expat import ExpatError

import xmltodict
import yaml

from ..core.exceptions import ConfigurationError, ParseError

FORMATS = ['json', 'yaml', 'xml']


# Create a custom YAML loader that doesn't auto-convert dates to date objects
class StringLoader(yaml.SafeLoader):
    """Custom YAML loader that treats dates as strings."""
    pass

# Remove the implicit timestamp resolver so dates stay as strings
StringLoader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != 'tag:yaml.org,2002:timestamp']
    for key, resolvers in StringLoader.yaml_implicit_resolvers.items()
}


class FormatConverter:
    """Format converter built on json, PyYAML and xmltodict."""

    def __init__(self):
        self.yaml_loader = StringLoader

    def detect_format(self, data: str) -> str:
        """Detect the format of input data."""
        data = data.strip()
        if not data:
            return 'unknown'

        # Check for JSON first (most strict)
        try:
            json.loads(data)
            return 'json'
        except (json.JSONDecodeError, RecursionError):
            pass

        try:
            ET.fromstring(data)
            return 'xml'
        except ET.ParseError:
            pass

        # YAML accepts almost anything, so it goes last
        try:
            yaml.load(data, Loader=self.yaml_loader)
            if ':' in data or '-' in data:
                return 'yaml'
        except (yaml.YAMLError, RecursionError):
            pass

        return 'unknown'

    def load_json(self, json_str: str) -> Any:
        try:
            return json.loads(json_str)
        except (json.JSONDecodeError, RecursionError) as e:
            raise ParseError(f"Invalid JSON: {e}") from e

    def load_yaml(self, yaml_str: str) -> Any:
        try:
            return yaml.load(yaml_str, Loader=self.yaml_loader)
        except (yaml.YAMLError, RecursionError) as e:
            raise ParseError(f"Invalid YAML: {e}") from e

    def load_xml(self, xml_str: str) -> Dict[str, Any]:
        try:
            return xmltodict.parse(xml_str)
        except ExpatError as e:
            raise ParseError(f"Invalid XML: {e}") from e

    def dump_json(self, data: Any) -> str:
        try:
            return json.dumps(data, indent=2, ensure_ascii=False)
        except TypeError as e:
            raise ParseError(f"Value cannot be represented as JSON: {e}") from e

    def dump_yaml(self, data: Any) -> str:
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def dump_xml(self, data: Any, root_name: str = 'root') -> str:
        # A single top-level key becomes the root element
        if isinstance(data, dict) and len(data) == 1:
            key = next(iter(data))
            root_name = str(key)
            data = data[key]

        root = ET.Element(self._sanitize_tag_name(root_name))
        self._build_xml_element(root, data)
        dom = minidom.parseString(ET.tostring(root, encoding='unicode'))
        return dom.toprettyxml(indent="  ")

    def format_xml(self, xml_str: str) -> str:
        """Format/prettify XML string."""
        try:
            dom = minidom.parseString(xml_str)
        except ExpatError as e:
            raise ParseError(f"Invalid XML: {e}") from e
        return dom.toprettyxml(indent="  ")

    def convert(self, data: str, input_format: str, output_format: str) -> str:
        """Parse ``data`` as ``input_format`` and render it as ``output_format``.

        XML to XML is a prettify through minidom so attributes and mixed
        content survive untouched.
        """
        if input_format == 'xml' and output_format == 'xml':
            return self.format_xml(data)

        loaders = {'json': self.load_json, 'yaml': self.load_yaml, 'xml': self.load_xml}
        dumpers = {'json': self.dump_json, 'yaml': self.dump_yaml, 'xml': self.dump_xml}
        return dumpers[output_format](loaders[input_format](data))

    def _build_xml_element(self, parent: ET.Element, data: Any):
        """Recursively build XML elements from Python data structures."""
        if isinstance(data, dict):
            for key, value in data.items():
                key = str(key)
                # xmltodict attribute and text notation
                if key.startswith('@'):
                    parent.set(key[1:], str(value))
                elif key == '#text':
                    parent.text = str(value)
                elif isinstance(value, list):
                    for item in value:
                        child = ET.SubElement(parent, self._sanitize_tag_name(key))
                        self._build_xml_element(child, item)
                else:
                    child = ET.SubElement(parent, self._sanitize_tag_name(key))
                    self._build_xml_element(child, value)
        elif isinstance(data, list):
            for item in data:
                child = ET.SubElement(parent, 'item')
                self._build_xml_element(child, item)
        else:
            parent.text = str(data) if data is not None else ''

    def _sanitize_tag_name(self, name: str) -> str:
        """Sanitize string to be a valid XML tag name."""
        sanitized = ''.join(c if c.isalnum() or c in '-_.' else '_' for c in name)

        if not sanitized or not (sanitized[0].isalpha() or sanitized[0] == '_'):
            sanitized = 'tag_' + sanitized

        return sanitized


converter = FormatConverter()


def convert_format(input_data: str, input_format: str, output_format: str) -> Dict[str, Any]:
    """
    Convert data between formats.

    Args:
        input_data: The input data string
        input_format: Source format ('json', 'yaml', 'xml', 'auto')
        output_format: Target format ('json', 'yaml', 'xml')

    Returns:
        Dict with 'success', 'result', formats and the operation performed

    Raises:
        ParseError: input does not parse as the source format
        ConfigurationError: unknown format name
    """
    if input_format == 'auto':
        input_format = converter.detect_format(input_data)
        if input_format == 'unknown':
            raise ParseError('Could not auto-detect input format')

    if input_format not in FORMATS or output_format not in FORMATS:
        raise ConfigurationError(f'Invalid format. Supported: {FORMATS}')

    return {
        'success': True,
        'result': converter.convert(input_data, input_format, output_format),
        'input_format': input_format,
        'output_format': output_format,
        'operation': 'format' if input_format == output_format else 'convert'
    }


def validate_format(data: str, format_type: str) -> Dict[str, Any]:
    """
    Validate that data is in the specified format.

    Returns:
        Dict with 'valid', 'error' (if not valid), and 'format'
    """
    if format_type not in FORMATS:
        return {'valid': False, 'error': f'Unsupported format: {format_type}'}

    try:
        if format_type == 'json':
            converter.load_json(data)
        elif format_type == 'yaml':
            converter.load_yaml(data)
        else:
            ET.fromstring(data)
    except ET.ParseError as e:
        return {'valid': False, 'error': f'Invalid xml: {e}', 'format': format_type}
    except ParseError as e:
        return {'valid': False, 'error': str(e), 'format': format_type}

    return {'valid': True, 'format': format_type}
