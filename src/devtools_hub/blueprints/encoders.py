from flask import Blueprint, jsonify

from ..core.codecs import get_codec, list_codecs
from ..core.detection import detect_data_type, is_likely_base64
from ..core.jwt_tools import decode_jwt, describe_claims
from ..utils.request_helpers import error_response, get_json_body, get_text, handle_tool_errors

encoders_bp = Blueprint('encoders', __name__)

DIRECTIONS = ('encode', 'decode')


@encoders_bp.route('/api/detect', methods=['POST'])
@handle_tool_errors
def api_detect():
    """Classify pasted text and return a formatted rendering"""
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    result = detect_data_type(get_text(data))
    return jsonify({'success': True, **result.to_dict()})


@encoders_bp.route('/api/base64/inspect', methods=['POST'])
@handle_tool_errors
def api_base64_inspect():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    detection = is_likely_base64(get_text(data))
    return jsonify({'success': True, **detection.to_dict()})


@encoders_bp.route('/api/codecs')
def api_list_codecs():
    return jsonify({'codecs': list_codecs()})


@encoders_bp.route('/api/codecs/<name>/<direction>', methods=['POST'])
@handle_tool_errors
def api_codec(name, direction):
    """Run a named codec, e.g. POST /api/codecs/base64/encode {"text": "..."}"""
    if direction not in DIRECTIONS:
        return error_response(f'Invalid direction. Supported: {list(DIRECTIONS)}')

    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    codec = get_codec(name)
    text = get_text(data)
    result = codec.encode(text) if direction == 'encode' else codec.decode(text)

    return jsonify({
        'success': True,
        'codec': codec.name,
        'direction': direction,
        'result': result
    })


@encoders_bp.route('/api/jwt/decode', methods=['POST'])
@handle_tool_errors
def api_jwt_decode():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    token = get_text(data, 'token')
    if not token.strip():
        return error_response('No token provided')

    parts = decode_jwt(token)
    return jsonify({
        'success': True,
        **parts.to_dict(),
        **describe_claims(parts.payload)
    })
