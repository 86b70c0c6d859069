"""
Stateful helpers used by the HTTP layer: the format converter and the per-user tool data store.
"""

from .converter import FormatConverter, convert_format, validate_format
from .store import ToolDataStore, validate_tool_name, sanitize_data

__all__ = [
    'FormatConverter',
    'convert_format',
    'validate_format',
    'ToolDataStore',
    'validate_tool_name',
    'sanitize_data'
]
