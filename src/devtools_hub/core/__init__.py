"""
Detection and formatting engine for devtools-hub.
Pure functions with no framework or storage dependencies.
"""

from .exceptions import ToolError, ParseError, FormatError, DecodeError, ConfigurationError
from .codecs import Codec, get_codec, list_codecs
from .detection import DetectionResult, Base64Detection, detect_data_type, is_likely_base64
from .diff import DiffEntry, diff_lines, diff_stats, unified_diff
from .jwt_tools import JWTParts, decode_jwt

__all__ = [
    # Exceptions
    'ToolError', 'ParseError', 'FormatError', 'DecodeError', 'ConfigurationError',

    # Codecs
    'Codec', 'get_codec', 'list_codecs',

    # Detection
    'DetectionResult', 'Base64Detection', 'detect_data_type', 'is_likely_base64',

    # Diff
    'DiffEntry', 'diff_lines', 'diff_stats', 'unified_diff',

    # JWT
    'JWTParts', 'decode_jwt'
]
