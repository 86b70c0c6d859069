"""
Naive CSV parsing and conversion.

Lines are split on the delimiter directly: surrounding quotes are stripped
from each field but a delimiter inside quotes still splits the field.
"""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List
from xml.dom import minidom

import yaml

from .exceptions import ConfigurationError, ParseError

DELIMITERS = {
    ',': 'comma',
    ';': 'semicolon',
    '\t': 'tab',
    '|': 'pipe',
}
OUTPUT_FORMATS = ('json', 'xml', 'yaml', 'sql')

_SQL_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def _check_delimiter(delimiter: str) -> None:
    if delimiter not in DELIMITERS:
        raise ConfigurationError(f"Unsupported delimiter {delimiter!r}. Supported: comma, semicolon, tab, pipe")


def _split(line: str, delimiter: str) -> List[str]:
    return [re.sub(r'^"|"$', '', field.strip()) for field in line.split(delimiter)]


def _lines(text: str) -> List[str]:
    return [line.rstrip('\r') for line in text.strip().split('\n')]


def parse_csv(text: str, delimiter: str = ',', has_header: bool = True) -> List[Dict[str, str]]:
    """Parse CSV text into a list of row dicts.

    Rows are keyed by the header fields, or ``column_1``..``column_N`` when
    the first line is data. Extra fields beyond the header are keyed by
    position.
    """
    _check_delimiter(delimiter)
    if not text.strip():
        return []

    lines = _lines(text)
    headers = _split(lines[0], delimiter) if has_header else []
    rows = []

    for line in lines[1:] if has_header else lines:
        values = _split(line, delimiter)
        row = {}
        for index, value in enumerate(values):
            if index < len(headers):
                key = headers[index]
            else:
                key = f'column_{index + 1}'
            row[key] = value
        rows.append(row)

    return rows


def validate_csv(text: str, delimiter: str = ',', has_header: bool = True) -> Dict[str, Any]:
    _check_delimiter(delimiter)
    if not text.strip():
        return {'valid': False, 'errors': ['No data provided']}

    lines = _lines(text)
    errors = []
    if has_header and len(lines) < 2:
        errors.append('CSV must have at least 2 lines when header is enabled')

    expected = len(lines[0].split(delimiter))
    for number, line in enumerate(lines[1:], start=2):
        columns = len(line.split(delimiter))
        if columns != expected:
            errors.append(f'Line {number} has {columns} columns, expected {expected}')

    return {'valid': not errors, 'errors': errors}


def rows_to_json(rows: List[Dict[str, str]]) -> str:
    return json.dumps(rows, indent=2, ensure_ascii=False)


def _xml_tag(name: str) -> str:
    tag = ''.join(c if c.isalnum() or c in '-_.' else '_' for c in name)
    if not tag or not (tag[0].isalpha() or tag[0] == '_'):
        tag = 'field_' + tag
    return tag


def rows_to_xml(rows: List[Dict[str, str]]) -> str:
    root = ET.Element('root')
    for index, row in enumerate(rows, start=1):
        record = ET.SubElement(root, 'record', id=str(index))
        for key, value in row.items():
            ET.SubElement(record, _xml_tag(key)).text = value
    dom = minidom.parseString(ET.tostring(root, encoding='unicode'))
    return dom.toprettyxml(indent='  ')


def rows_to_yaml(rows: List[Dict[str, str]]) -> str:
    records = [{f'record_{index}': row} for index, row in enumerate(rows, start=1)]
    return yaml.dump(records, default_flow_style=False, allow_unicode=True, sort_keys=False)


def _sql_string(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def rows_to_sql(rows: List[Dict[str, str]], table_name: str = 'data') -> str:
    if not _SQL_IDENTIFIER.match(table_name):
        raise ConfigurationError(f"Invalid table name: {table_name!r}")
    if not rows:
        return ''

    columns = list(rows[0].keys())
    for column in columns:
        if not _SQL_IDENTIFIER.match(column):
            raise ParseError(f"Column name is not a valid SQL identifier: {column!r}")

    lines = [f'CREATE TABLE {table_name} (']
    lines.extend(
        f'  {column} VARCHAR(255)' + (',' if index < len(columns) - 1 else '')
        for index, column in enumerate(columns)
    )
    lines.append(');')
    lines.append('')

    column_list = ', '.join(columns)
    for row in rows:
        values = ', '.join(_sql_string(row.get(column, '')) for column in columns)
        lines.append(f'INSERT INTO {table_name} ({column_list}) VALUES ({values});')

    return '\n'.join(lines) + '\n'


def convert_csv(text: str, output_format: str, delimiter: str = ',',
                has_header: bool = True, table_name: str = 'data') -> str:
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(f"Invalid output format. Supported: {list(OUTPUT_FORMATS)}")

    rows = parse_csv(text, delimiter, has_header)
    if not rows:
        raise ParseError('Unable to parse CSV data')

    if output_format == 'json':
        return rows_to_json(rows)
    if output_format == 'xml':
        return rows_to_xml(rows)
    if output_format == 'yaml':
        return rows_to_yaml(rows)
    return rows_to_sql(rows, table_name)
