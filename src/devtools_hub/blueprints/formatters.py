from flask import Blueprint, jsonify

from ..core.csv_tools import convert_csv, validate_csv
from ..core.json_tools import format_json, minify_json, validate_json
from ..core.markdown import markdown_to_html
from ..core.sql_tools import format_sql, minify_sql
from ..core.xml_tools import format_xml, minify_xml, validate_xml
from ..utils.request_helpers import error_response, get_flag, get_json_body, get_text, handle_tool_errors

formatters_bp = Blueprint('formatters', __name__)

JSON_OPERATIONS = ('format', 'minify', 'validate')
XML_OPERATIONS = ('format', 'minify', 'validate')
SQL_OPERATIONS = ('format', 'minify')


def _read_input():
    data = get_json_body()
    if data is None:
        return None, error_response('Invalid JSON format')

    text = get_text(data)
    if not text.strip():
        return None, error_response('No input data provided')
    return (data, text), None


@formatters_bp.route('/api/json/<op>', methods=['POST'])
@handle_tool_errors
def api_json(op):
    if op not in JSON_OPERATIONS:
        return error_response(f'Invalid operation. Supported: {list(JSON_OPERATIONS)}')

    parsed, error = _read_input()
    if error:
        return error
    data, text = parsed

    if op == 'validate':
        return jsonify({'success': True, **validate_json(text)})
    if op == 'minify':
        return jsonify({'success': True, 'result': minify_json(text)})
    return jsonify({'success': True, 'result': format_json(text, int(data.get('indent', 2)))})


@formatters_bp.route('/api/xml/<op>', methods=['POST'])
@handle_tool_errors
def api_xml(op):
    if op not in XML_OPERATIONS:
        return error_response(f'Invalid operation. Supported: {list(XML_OPERATIONS)}')

    parsed, error = _read_input()
    if error:
        return error
    data, text = parsed

    if op == 'validate':
        return jsonify({'success': True, **validate_xml(text)})
    if op == 'minify':
        return jsonify({'success': True, 'result': minify_xml(text)})

    result = format_xml(
        text,
        indent=int(data.get('indent', 2)),
        sort_attributes=get_flag(data, 'sort_attributes', False)
    )
    return jsonify({'success': True, 'result': result})


@formatters_bp.route('/api/sql/<op>', methods=['POST'])
@handle_tool_errors
def api_sql(op):
    if op not in SQL_OPERATIONS:
        return error_response(f'Invalid operation. Supported: {list(SQL_OPERATIONS)}')

    parsed, error = _read_input()
    if error:
        return error
    data, text = parsed

    if op == 'minify':
        return jsonify({'success': True, 'result': minify_sql(text)})

    result = format_sql(
        text,
        uppercase=get_flag(data, 'uppercase', True),
        indent=int(data.get('indent', 2))
    )
    return jsonify({'success': True, 'result': result})


@formatters_bp.route('/api/markdown/html', methods=['POST'])
@handle_tool_errors
def api_markdown_html():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    return jsonify({'success': True, 'result': markdown_to_html(get_text(data))})


@formatters_bp.route('/api/csv/convert', methods=['POST'])
@handle_tool_errors
def api_csv_convert():
    """Convert CSV to json, xml, yaml or sql"""
    parsed, error = _read_input()
    if error:
        return error
    data, text = parsed

    output_format = data.get('output_format', '')
    if not output_format:
        return error_response('Output format is required')

    result = convert_csv(
        text,
        output_format,
        delimiter=data.get('delimiter', ','),
        has_header=get_flag(data, 'has_header', True),
        table_name=data.get('table_name', 'data')
    )
    return jsonify({'success': True, 'result': result, 'output_format': output_format})


@formatters_bp.route('/api/csv/validate', methods=['POST'])
@handle_tool_errors
def api_csv_validate():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    result = validate_csv(
        get_text(data),
        delimiter=data.get('delimiter', ','),
        has_header=get_flag(data, 'has_header', True)
    )
    return jsonify({'success': True, **result})
