"""
Tests for CSV parsing, validation and conversion.
"""

import json
import xml.etree.ElementTree as ET

import pytest
import yaml

from devtools_hub.core.csv_tools import (
    convert_csv, parse_csv, rows_to_sql, rows_to_xml, rows_to_yaml, validate_csv
)
from devtools_hub.core.exceptions import ConfigurationError, ParseError

PEOPLE = "name,age\nAlice,30\nBob,25"


class TestParseCsv:

    def test_with_header(self):
        assert parse_csv(PEOPLE) == [
            {'name': 'Alice', 'age': '30'},
            {'name': 'Bob', 'age': '25'},
        ]

    def test_without_header(self):
        assert parse_csv("x,y\n1,2", has_header=False) == [
            {'column_1': 'x', 'column_2': 'y'},
            {'column_1': '1', 'column_2': '2'},
        ]

    def test_extra_fields_keyed_by_position(self):
        assert parse_csv("a\n1,2") == [{'a': '1', 'column_2': '2'}]

    def test_surrounding_quotes_stripped(self):
        assert parse_csv('"name","city"\n"Ann", "Oslo"') == [{'name': 'Ann', 'city': 'Oslo'}]

    def test_quoted_delimiter_still_splits(self):
        rows = parse_csv('a,b\n"x,y",z')
        assert rows == [{'a': 'x', 'b': 'y', 'column_3': 'z'}]

    def test_crlf_line_endings(self):
        assert parse_csv("a,b\r\n1,2\r\n") == [{'a': '1', 'b': '2'}]

    @pytest.mark.parametrize('delimiter', [';', '\t', '|'])
    def test_other_delimiters(self, delimiter):
        text = f"a{delimiter}b\n1{delimiter}2"
        assert parse_csv(text, delimiter=delimiter) == [{'a': '1', 'b': '2'}]

    def test_unsupported_delimiter(self):
        with pytest.raises(ConfigurationError):
            parse_csv("a:b", delimiter=':')

    def test_blank_input(self):
        assert parse_csv("  \n ") == []


class TestValidateCsv:

    def test_valid(self):
        assert validate_csv(PEOPLE) == {'valid': True, 'errors': []}

    def test_column_mismatch(self):
        result = validate_csv("a,b\n1,2,3\n4,5")
        assert result['valid'] is False
        assert result['errors'] == ['Line 2 has 3 columns, expected 2']

    def test_header_only(self):
        result = validate_csv("a,b")
        assert result['valid'] is False
        assert 'at least 2 lines' in result['errors'][0]

    def test_single_data_line_without_header(self):
        assert validate_csv("a,b", has_header=False)['valid'] is True

    def test_empty(self):
        assert validate_csv("") == {'valid': False, 'errors': ['No data provided']}


class TestConversions:

    def test_json(self):
        result = convert_csv(PEOPLE, 'json')
        assert json.loads(result) == parse_csv(PEOPLE)
        assert result.startswith('[\n  {')

    def test_xml(self):
        root = ET.fromstring(rows_to_xml(parse_csv(PEOPLE)))
        assert root.tag == 'root'
        records = root.findall('record')
        assert [r.get('id') for r in records] == ['1', '2']
        assert records[0].find('name').text == 'Alice'

    def test_xml_tag_names_sanitized(self):
        root = ET.fromstring(rows_to_xml([{'first name': 'a', '1st': 'b'}]))
        record = root.find('record')
        assert record.find('first_name').text == 'a'
        assert record.find('field_1st').text == 'b'

    def test_yaml(self):
        loaded = yaml.safe_load(rows_to_yaml(parse_csv(PEOPLE)))
        assert loaded == [
            {'record_1': {'name': 'Alice', 'age': '30'}},
            {'record_2': {'name': 'Bob', 'age': '25'}},
        ]

    def test_sql(self):
        assert convert_csv(PEOPLE, 'sql', table_name='people') == (
            "CREATE TABLE people (\n"
            "  name VARCHAR(255),\n"
            "  age VARCHAR(255)\n"
            ");\n"
            "\n"
            "INSERT INTO people (name, age) VALUES ('Alice', '30');\n"
            "INSERT INTO people (name, age) VALUES ('Bob', '25');\n"
        )

    def test_sql_escapes_quotes(self):
        assert "VALUES ('O''Brien');" in rows_to_sql([{'name': "O'Brien"}])

    def test_sql_rejects_bad_table_name(self):
        with pytest.raises(ConfigurationError):
            rows_to_sql([{'a': '1'}], table_name='drop table;')

    def test_sql_rejects_bad_column_name(self):
        with pytest.raises(ParseError):
            rows_to_sql([{'first name': 'x'}])

    def test_unknown_output_format(self):
        with pytest.raises(ConfigurationError):
            convert_csv(PEOPLE, 'html')

    def test_nothing_to_convert(self):
        with pytest.raises(ParseError):
            convert_csv("", 'json')
