"""
Regular expression tester.

Flags use the JavaScript letters the browser tools send. ``g`` switches
from first-match mode to all-matches mode, the others map onto ``re``
flags. A pattern or flag string that does not compile is reported as an
invalid result instead of raising.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

GLOBAL_FLAG = 'g'

FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    # str patterns are already unicode aware
    'u': 0,
}

# (?<name>...) and \k<name> are the JavaScript spellings of named groups
NAMED_GROUP = re.compile(r'(?<!\\)\(\?<([A-Za-z_]\w*)>')
NAMED_BACKREF = re.compile(r'(?<!\\)\\k<([A-Za-z_]\w*)>')


@dataclass
class RegexMatch:
    text: str
    index: int
    end: int
    groups: List[Optional[str]]
    named_groups: Dict[str, Optional[str]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'index': self.index,
            'end': self.end,
            'groups': self.groups,
            'named_groups': self.named_groups
        }


@dataclass
class RegexResult:
    matches: List[RegexMatch] = field(default_factory=list)
    is_valid: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'matches': [match.to_dict() for match in self.matches],
            'is_valid': self.is_valid
        }
        if self.error is not None:
            result['error'] = self.error
        return result


def parse_flags(flags: str) -> int:
    """Turn a flag string such as ``"gi"`` into ``re`` flags. ``g`` is ignored here."""
    value = 0
    seen = set()
    for letter in flags:
        if letter in seen:
            raise ConfigurationError(f"Duplicate regex flag: {letter!r}")
        seen.add(letter)
        if letter == GLOBAL_FLAG:
            continue
        if letter not in FLAG_MAP:
            raise ConfigurationError(f"Invalid regex flag: {letter!r}. Supported: {GLOBAL_FLAG + ''.join(FLAG_MAP)}")
        value |= FLAG_MAP[letter]
    return value


def translate_pattern(pattern: str) -> str:
    pattern = NAMED_GROUP.sub(r'(?P<\1>', pattern)
    return NAMED_BACKREF.sub(r'(?P=\1)', pattern)


def _to_match(match: re.Match) -> RegexMatch:
    return RegexMatch(
        text=match.group(0),
        index=match.start(),
        end=match.end(),
        groups=list(match.groups()),
        named_groups=match.groupdict()
    )


def find_matches(pattern: str, flags: str, text: str) -> RegexResult:
    """Run ``pattern`` over ``text``.

    Without the ``g`` flag only the first match is returned. With it every
    non-overlapping match is returned; empty matches advance one character.
    """
    try:
        regex = re.compile(translate_pattern(pattern), parse_flags(flags))
    except (re.error, ConfigurationError) as e:
        logger.debug("Rejected regex %r with flags %r: %s", pattern, flags, e)
        return RegexResult(is_valid=False, error=str(e))

    if GLOBAL_FLAG in flags:
        return RegexResult(matches=[_to_match(match) for match in regex.finditer(text)])

    match = regex.search(text)
    return RegexResult(matches=[_to_match(match)] if match else [])
