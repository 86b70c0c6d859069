from flask import Blueprint, jsonify

from ..api.converter import convert_format, converter, validate_format
from ..utils.request_helpers import error_response, get_json_body, get_text, handle_tool_errors

converter_bp = Blueprint('converter', __name__)


def _read_data():
    """Return the ``data`` field of the body, or an error response."""
    body = get_json_body()
    if body is None:
        return None, None, error_response('Invalid JSON format')

    text = get_text(body, 'data')
    if not text.strip():
        return None, None, error_response('No input data provided')
    return body, text, None


@converter_bp.route('/api/convert', methods=['POST'])
@handle_tool_errors
def api_convert():
    """Convert between JSON, YAML and XML; input_format defaults to auto-detection"""
    body, text, error = _read_data()
    if error:
        return error

    output_format = body.get('output_format', '')
    if not output_format:
        return error_response('Output format is required')

    return jsonify(convert_format(text, body.get('input_format', 'auto'), output_format))


@converter_bp.route('/api/validate', methods=['POST'])
@handle_tool_errors
def api_validate():
    body, text, error = _read_data()
    if error:
        return error

    format_type = body.get('format', '')
    if not format_type:
        return error_response('Format type is required')

    return jsonify({'success': True, **validate_format(text, format_type)})


@converter_bp.route('/api/detect-format', methods=['POST'])
@handle_tool_errors
def api_detect_format():
    _, text, error = _read_data()
    if error:
        return error

    detected = converter.detect_format(text)
    return jsonify({
        'success': True,
        'format': detected,
        'detected': detected != 'unknown'
    })
