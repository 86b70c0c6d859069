"""
In-memory file statistics.

``analyze_file`` never touches the filesystem: callers hand over the bytes
together with the declared name, size and MIME type of the upload.
"""

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

BINARY_SAMPLE_SIZE = 8192
BINARY_THRESHOLD = 0.3
ENCODING_SAMPLE_SIZE = 1000
ENTROPY_SAMPLE_SIZE = 10000
SIZE_UNITS = ('B', 'KB', 'MB', 'GB')

_DECODERS = {
    'UTF-8 with BOM': 'utf-8-sig',
    'UTF-16 LE': 'utf-16',
    'UTF-16 BE': 'utf-16',
    'UTF-8': 'utf-8',
    'ASCII/Binary': 'latin-1',
}
_WORD_RE = re.compile(r"\b[\w']+\b")
_ALPHANUMERIC_RE = re.compile(r'[a-zA-Z0-9]')


@dataclass
class FileStats:
    name: str
    size: Dict[str, Any]
    encoding: str
    is_binary: bool
    mime_type: str = 'Unknown'
    line_stats: Dict[str, Any] = field(default_factory=dict)
    char_stats: Dict[str, int] = field(default_factory=dict)
    word_stats: Dict[str, Any] = field(default_factory=dict)
    entropy: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'size': self.size,
            'encoding': self.encoding,
            'is_binary': self.is_binary,
            'mime_type': self.mime_type,
            'line_stats': self.line_stats,
            'char_stats': self.char_stats,
            'word_stats': self.word_stats,
            'entropy': self.entropy
        }


def detect_encoding(buffer: bytes) -> str:
    if buffer[:3] == b'\xef\xbb\xbf':
        return 'UTF-8 with BOM'
    if buffer[:2] == b'\xff\xfe':
        return 'UTF-16 LE'
    if buffer[:2] == b'\xfe\xff':
        return 'UTF-16 BE'

    # Lead bytes only, continuation bytes are skipped rather than checked
    i = 0
    sample = buffer[:ENCODING_SAMPLE_SIZE]
    while i < len(sample):
        byte = sample[i]
        if byte > 127:
            if byte & 0xE0 == 0xC0:
                i += 1
            elif byte & 0xF0 == 0xE0:
                i += 2
            elif byte & 0xF8 == 0xF0:
                i += 3
            else:
                return 'ASCII/Binary'
        i += 1
    return 'UTF-8'


def is_binary(buffer: bytes) -> bool:
    sample = buffer[:BINARY_SAMPLE_SIZE]
    if not sample:
        return False
    null_bytes = sample.count(0)
    control_chars = sum(1 for byte in sample if byte < 32 and byte not in (9, 10, 13))
    return (null_bytes / len(sample) > BINARY_THRESHOLD
            or control_chars / len(sample) > BINARY_THRESHOLD)


def format_file_size(size: int) -> str:
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f'{value:.2f} {SIZE_UNITS[unit]}'


def shannon_entropy(text: str) -> float:
    """Bits per character of ``text``, 0 for empty input."""
    if not text:
        return 0.0
    length = len(text)
    return -sum((count / length) * math.log2(count / length) for count in Counter(text).values())


def _line_stats(text: str) -> Dict[str, Any]:
    lines = re.split(r'\r?\n', text)
    empty = sum(1 for line in lines if not line.strip())
    return {
        'total': len(lines),
        'empty': empty,
        'non_empty': len(lines) - empty,
        'max_length': max(len(line) for line in lines),
        'avg_length': sum(len(line) for line in lines) / len(lines)
    }


def _char_stats(text: str) -> Dict[str, int]:
    stats = {'total': len(text), 'whitespace': 0, 'alphanumeric': 0, 'special': 0, 'unicode': 0}
    for char in text:
        if char.isspace():
            stats['whitespace'] += 1
        elif _ALPHANUMERIC_RE.match(char):
            stats['alphanumeric'] += 1
        elif ord(char) > 127:
            stats['unicode'] += 1
        else:
            stats['special'] += 1
    return stats


def _word_stats(text: str) -> Dict[str, Any]:
    words = _WORD_RE.findall(text)
    if not words:
        return {'total': 0, 'unique': 0, 'avg_length': 0, 'longest': ''}
    longest = ''
    for word in words:
        if len(word) > len(longest):
            longest = word
    return {
        'total': len(words),
        'unique': len({word.lower() for word in words}),
        'avg_length': sum(len(word) for word in words) / len(words),
        'longest': longest
    }


def analyze_file(buffer: bytes, name: str, size: Optional[int] = None,
                 mime_type: Optional[str] = None) -> FileStats:
    """Compute size, encoding and content statistics for an uploaded file.

    Args:
        buffer: the file content
        name: declared file name
        size: declared size in bytes, defaults to ``len(buffer)``
        mime_type: declared MIME type

    Returns:
        FileStats. Line, character and word statistics and entropy are only
        filled in for text files.
    """
    if size is None:
        size = len(buffer)

    encoding = detect_encoding(buffer)
    binary = is_binary(buffer)
    stats = FileStats(
        name=name,
        size={
            'bytes': size,
            'formatted': format_file_size(size),
            'breakdown': {
                'kb': size / 1024,
                'mb': size / (1024 ** 2),
                'gb': size / (1024 ** 3)
            }
        },
        encoding=encoding,
        is_binary=binary,
        mime_type=mime_type or 'Unknown'
    )

    if not binary:
        text = buffer.decode(_DECODERS[encoding], errors='replace')
        stats.line_stats = _line_stats(text)
        stats.char_stats = _char_stats(text)
        stats.word_stats = _word_stats(text)
        stats.entropy = shannon_entropy(text[:ENTROPY_SAMPLE_SIZE])

    return stats
