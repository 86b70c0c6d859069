from flask import Blueprint, jsonify

from ..core.diff import context_diff, diff_lines, diff_stats, preprocess_texts, unified_diff
from ..utils.request_helpers import error_response, get_flag, get_json_body, get_text, handle_tool_errors

text_diff_bp = Blueprint('text_diff', __name__)

OUTPUT_FORMATS = ('json', 'unified', 'context', 'stats-only')


@text_diff_bp.route('/api/text-diff/compare', methods=['POST'])
@handle_tool_errors
def compare_texts():
    """Compare two texts line by line

    Supports multiple output formats:
    - json: positional line entries (default)
    - unified: Standard unified diff format
    - context: Context diff format
    - stats-only: Just statistics

    Options:
    - ignore_whitespace: Ignore whitespace differences
    - ignore_case: Case insensitive comparison
    - context_lines: Number of context lines (default: 3)
    """
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    if 'text1' not in data or 'text2' not in data:
        return error_response('Missing text1 or text2')

    output_format = data.get('format', 'json')
    if output_format not in OUTPUT_FORMATS:
        return error_response(f'Invalid format. Supported: {list(OUTPUT_FORMATS)}')

    text1, text2 = preprocess_texts(
        get_text(data, 'text1'),
        get_text(data, 'text2'),
        get_flag(data, 'ignore_whitespace', False),
        get_flag(data, 'ignore_case', False)
    )
    context_lines = int(data.get('context_lines', 3))

    entries = diff_lines(text1, text2)
    response = {
        'success': True,
        'format': output_format,
        'stats': diff_stats(entries)
    }

    if output_format == 'unified':
        response['diff'] = unified_diff(text1, text2, context_lines)
    elif output_format == 'context':
        response['diff'] = context_diff(text1, text2, context_lines)
    elif output_format == 'json':
        response['diff'] = [entry.to_dict() for entry in entries]

    return jsonify(response)
