from flask import Blueprint, jsonify, request

from ..api.store import validate_tool_name
from ..utils.request_helpers import error_response, get_json_body, get_store, handle_tool_errors

user_data_bp = Blueprint('user_data', __name__)


def _read_ids(data):
    """Pull user_id and tool_id from a body, returning an error response on failure."""
    user_id = str(data.get('user_id', '')).strip()
    tool_id = data.get('tool_id', '')
    if not user_id:
        return None, None, error_response('Missing user_id')
    if not validate_tool_name(tool_id):
        return None, None, error_response('Invalid tool id')
    return user_id, tool_id, None


# Tool usage tracking
@user_data_bp.route('/api/tool-usage', methods=['POST'])
@handle_tool_errors
def record_tool_usage():
    data = get_json_body()
    if data is None:
        return error_response('Invalid tool usage data')

    user_id, tool_id, error = _read_ids(data)
    if error:
        return error

    usage = get_store().record_usage(user_id, tool_id, data.get('tool_name'))
    return jsonify({'success': True, 'usage': usage})


@user_data_bp.route('/api/tool-usage/<user_id>', methods=['GET'])
def get_tool_usage(user_id):
    usage = get_store().get_usage(user_id)
    return jsonify({'user_id': user_id, 'usage': usage, 'count': len(usage)})


# Saved data management
@user_data_bp.route('/api/saved-data', methods=['POST'])
@handle_tool_errors
def save_data():
    data = get_json_body()
    if data is None:
        return error_response('Invalid saved data')

    user_id, tool_id, error = _read_ids(data)
    if error:
        return error

    title = str(data.get('title', '')).strip()
    if not title:
        return error_response('Missing title')
    if 'content' not in data:
        return error_response('Missing content')

    result = get_store().save_data(
        user_id, tool_id, title, data['content'], data.get('description', '')
    )
    return jsonify(result)


@user_data_bp.route('/api/saved-data/<user_id>', methods=['GET'])
def get_saved_data(user_id):
    tool_id = request.args.get('tool_id')
    if tool_id and not validate_tool_name(tool_id):
        return error_response('Invalid tool id')

    limit = request.args.get('limit', type=int)
    entries = get_store().get_saved_data(user_id, tool_id, limit)
    return jsonify({'user_id': user_id, 'data': entries, 'count': len(entries)})


@user_data_bp.route('/api/saved-data/<user_id>/<entry_id>', methods=['GET'])
def get_saved_entry(user_id, entry_id):
    entry = get_store().get_saved_entry(user_id, entry_id)
    if not entry:
        return error_response('Saved data not found', 404)
    return jsonify(entry)


@user_data_bp.route('/api/saved-data/<user_id>/<entry_id>', methods=['DELETE'])
def delete_saved_data(user_id, entry_id):
    if get_store().delete_saved_data(user_id, entry_id):
        return jsonify({'success': True, 'message': 'Saved data deleted'})
    return error_response('Saved data not found', 404)


# Favorites
@user_data_bp.route('/api/favorites/<user_id>', methods=['GET'])
def get_favorites(user_id):
    favorites = get_store().get_favorites(user_id)
    return jsonify({'user_id': user_id, 'favorites': favorites})


@user_data_bp.route('/api/favorites', methods=['POST'])
@handle_tool_errors
def add_favorite():
    data = get_json_body()
    if data is None:
        return error_response('Invalid JSON format')

    user_id, tool_id, error = _read_ids(data)
    if error:
        return error

    added = get_store().add_favorite(user_id, tool_id)
    return jsonify({
        'success': True,
        'added': added,
        'favorites': get_store().get_favorites(user_id)
    })


@user_data_bp.route('/api/favorites/<user_id>/<tool_id>', methods=['DELETE'])
def remove_favorite(user_id, tool_id):
    if get_store().remove_favorite(user_id, tool_id):
        return jsonify({'success': True, 'favorites': get_store().get_favorites(user_id)})
    return error_response('Favorite not found', 404)
