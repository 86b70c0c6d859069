from flask import Blueprint, jsonify

from ..core.regex_tools import find_matches
from ..utils.request_helpers import error_response, get_json_body, get_text, handle_tool_errors

regex_bp = Blueprint('regex', __name__)


@regex_bp.route('/api/regex/test', methods=['POST'])
@handle_tool_errors
def api_regex_test():
    """Test a pattern against a text; ``flags`` uses the i, m, s, u and g letters"""
    data = get_json_body()
    if data is None or 'pattern' not in data or 'text' not in data:
        return error_response('Missing pattern or text field')

    pattern = data['pattern']
    if not isinstance(pattern, str):
        return error_response('Pattern must be a string')
    if not pattern:
        return error_response('Pattern cannot be empty')

    flags = data.get('flags') or ''
    if not isinstance(flags, str):
        return error_response('Flags must be a string')

    result = find_matches(pattern, flags, get_text(data, 'text'))
    return jsonify({'success': True, **result.to_dict()})
