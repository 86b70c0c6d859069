"""
Custom exceptions for the detection and formatting engine.
"""


class ToolError(Exception):
    """Base exception for all tool conversion errors."""
    pass


class ParseError(ToolError):
    """Raised when structured input (JSON, XML, SQL, CSV, dates) cannot be parsed."""
    pass


class FormatError(ParseError):
    """Raised when input has the wrong overall shape, e.g. a JWT without three segments."""
    pass


class DecodeError(ToolError):
    """Raised when encoded input (Base64, hex, binary, URL, ciphertext) is malformed."""
    pass


class ConfigurationError(ToolError):
    """Raised when a tool is asked to run with invalid options."""
    pass
