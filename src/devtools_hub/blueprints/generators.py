import asyncio
import re

from flask import Blueprint, jsonify, request

from ..api.store import DEFAULT_MAX_INPUT_SIZE
from ..core.encryption import EncryptionResult, decrypt_text, encrypt_text
from ..core.file_analysis import analyze_file
from ..core.generators import generate_password, generate_uuids
from ..core.hashing import ALGORITHMS, generate_hashes, generate_hmac
from ..core.timestamps import format_timestamp, parse_timestamp
from ..utils.request_helpers import error_response, get_flag, get_json_body, get_settings, get_text, handle_tool_errors

generators_bp = Blueprint('generators', __name__)

_EPOCH_RE = re.compile(r'^-?\d+$')


@generators_bp.route('/api/hash', methods=['POST'])
@handle_tool_errors
def api_hash():
    """Hash text with one or more algorithms, results keyed by algorithm"""
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    algorithms = data.get('algorithms') or list(ALGORITHMS)
    if isinstance(algorithms, str):
        algorithms = [algorithms]
    if not isinstance(algorithms, list):
        return error_response('algorithms must be a name or a list of names')

    hashes = asyncio.run(generate_hashes(get_text(data), algorithms))
    return jsonify({'success': True, 'hashes': hashes})


@generators_bp.route('/api/hmac', methods=['POST'])
@handle_tool_errors
def api_hmac():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    key = data.get('key', '')
    if not key:
        return error_response('Secret key is required')

    algorithm = data.get('algorithm', 'SHA-256')
    digest = generate_hmac(get_text(data, 'message'), key, algorithm)
    return jsonify({'success': True, 'hmac': digest, 'algorithm': algorithm})


@generators_bp.route('/api/uuid', methods=['GET', 'POST'])
@handle_tool_errors
def api_uuid():
    if request.method == 'POST':
        data = get_json_body() or {}
    else:
        data = request.args

    count = int(data.get('count', 1))
    version = data.get('version', 'v4')
    return jsonify({'success': True, 'version': version, 'uuids': generate_uuids(count, version)})


@generators_bp.route('/api/password', methods=['POST'])
@handle_tool_errors
def api_password():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    count = int(data.get('count', 1))
    if not 1 <= count <= 50:
        return error_response('Count must be between 1 and 50')

    options = {
        'length': int(data.get('length', 12)),
        'uppercase': get_flag(data, 'uppercase', True),
        'lowercase': get_flag(data, 'lowercase', True),
        'numbers': get_flag(data, 'numbers', True),
        'symbols': get_flag(data, 'symbols', False),
        'exclude_similar': get_flag(data, 'exclude_similar', False),
    }
    passwords = [generate_password(**options) for _ in range(count)]
    return jsonify({'success': True, 'passwords': passwords})


@generators_bp.route('/api/encrypt', methods=['POST'])
@handle_tool_errors
def api_encrypt():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    result = encrypt_text(
        get_text(data),
        data.get('password', ''),
        output_format=data.get('format', 'base64'),
        algorithm=data.get('algorithm', 'aes-256')
    )
    return jsonify({'success': True, **result.to_dict()})


@generators_bp.route('/api/decrypt', methods=['POST'])
@handle_tool_errors
def api_decrypt():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    missing = [field for field in ('output', 'iv', 'salt') if not data.get(field)]
    if missing:
        return error_response(f'Missing fields: {", ".join(missing)}')

    encrypted = EncryptionResult(
        output=data['output'],
        iv=data['iv'],
        salt=data['salt'],
        format=data.get('format', 'base64'),
        algorithm=data.get('algorithm', 'aes-256')
    )
    plaintext = decrypt_text(encrypted, data.get('password', ''))
    return jsonify({'success': True, 'result': plaintext})


@generators_bp.route('/api/timestamp/convert', methods=['POST'])
@handle_tool_errors
def api_timestamp_convert():
    """Epoch value to ISO date, or ISO date to epoch seconds"""
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    value = str(data.get('value', '')).strip()
    if not value:
        return error_response('No value provided')

    if _EPOCH_RE.match(value):
        return jsonify({
            'success': True,
            'direction': 'to_date',
            'timestamp': int(value),
            'iso': format_timestamp(int(value))
        })

    seconds = parse_timestamp(value)
    return jsonify({
        'success': True,
        'direction': 'to_timestamp',
        'timestamp': seconds,
        'milliseconds': seconds * 1000,
        'iso': format_timestamp(seconds)
    })


@generators_bp.route('/api/file/analyze', methods=['POST'])
@handle_tool_errors
def api_file_analyze():
    """Analyze an uploaded file (multipart field ``file``)"""
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return error_response('No file provided')

    buffer = upload.read()
    max_size = get_settings().get('max_input_size', DEFAULT_MAX_INPUT_SIZE)
    if len(buffer) > max_size:
        return error_response(f'File too large. Maximum size: {max_size} bytes')

    stats = analyze_file(buffer, upload.filename, len(buffer), upload.mimetype or None)
    return jsonify({'success': True, **stats.to_dict()})
