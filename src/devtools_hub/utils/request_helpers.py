import functools
import logging
from typing import Any, Dict, Optional

from flask import current_app, jsonify, request

from ..api.store import DEFAULT_MAX_INPUT_SIZE, ToolDataStore, sanitize_data
from ..core.exceptions import ConfigurationError, ToolError

logger = logging.getLogger(__name__)

STORE_EXTENSION = 'devtools_hub_store'
CONFIG_KEY = 'DEVTOOLS_HUB'


def error_response(message: str, status: int = 400):
    return jsonify({'success': False, 'error': message}), status


def get_json_body() -> Optional[Dict[str, Any]]:
    """Return the JSON object body of the request, or None when it is missing or not an object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def get_settings() -> Dict[str, Any]:
    return current_app.config.get(CONFIG_KEY, {})


def get_store() -> ToolDataStore:
    return current_app.extensions[STORE_EXTENSION]


def get_text(data: Dict[str, Any], field: str = 'text') -> str:
    """Read a string field, enforcing the configured maximum input size."""
    value = data.get(field, '')
    if value is None:
        value = ''
    max_size = get_settings().get('max_input_size', DEFAULT_MAX_INPUT_SIZE)
    return sanitize_data(value, max_size)


FLAG_STRINGS = {'true': True, 'false': False, '1': True, '0': False}


def get_flag(data: Dict[str, Any], field: str, default: bool) -> bool:
    """Read a boolean option. JSON booleans and the strings "true"/"false" are accepted."""
    value = data.get(field)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in FLAG_STRINGS:
        return FLAG_STRINGS[value.strip().lower()]
    raise ConfigurationError(f"{field} must be true or false")


def handle_tool_errors(view):
    """Map failures of a route to the standard error payload.

    ToolError and ValueError are client errors (400). Anything else is
    logged with its traceback and reported as a 500.
    """
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except (ToolError, ValueError) as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Unhandled error in %s", request.path)
            return error_response(f'Server error: {str(e)}', 500)
    return wrapper
