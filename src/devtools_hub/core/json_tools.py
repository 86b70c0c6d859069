"""JSON formatting helpers."""

import json
from typing import Any, Dict

from .exceptions import ParseError


def _load(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(str(e)) from e


def format_json(text: str, indent: int = 2) -> str:
    """Pretty-print JSON, keeping key order and non-ASCII characters."""
    return json.dumps(_load(text), indent=indent, ensure_ascii=False)


def minify_json(text: str) -> str:
    return json.dumps(_load(text), separators=(',', ':'), ensure_ascii=False)


def validate_json(text: str) -> Dict[str, Any]:
    try:
        json.loads(text)
        return {'valid': True}
    except (json.JSONDecodeError, RecursionError) as e:
        return {'valid': False, 'error': str(e)}
