"""
Line diff helpers.

``diff_lines`` compares the two texts position by position rather than
computing a longest common subsequence, so an inserted line shifts every
later line into a removed/added pair. The unified and context renderings
use ``difflib`` and do align moved blocks.
"""

import difflib
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

ADDED = 'added'
REMOVED = 'removed'
UNCHANGED = 'unchanged'


@dataclass
class DiffEntry:
    kind: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {'kind': self.kind, 'value': self.value}


def preprocess_texts(text1: str, text2: str, ignore_whitespace: bool, ignore_case: bool) -> Tuple[str, str]:
    """Preprocess texts based on comparison options"""
    if ignore_case:
        text1 = text1.lower()
        text2 = text2.lower()

    if ignore_whitespace:
        # Runs of spaces and tabs collapse within each line, line breaks survive
        text1 = '\n'.join(re.sub(r'\s+', ' ', line).strip() for line in text1.split('\n'))
        text2 = '\n'.join(re.sub(r'\s+', ' ', line).strip() for line in text2.split('\n'))

    return text1, text2


def diff_lines(text1: str, text2: str) -> List[DiffEntry]:
    lines1 = text1.split('\n')
    lines2 = text2.split('\n')
    entries = []

    for i in range(max(len(lines1), len(lines2))):
        if i >= len(lines1):
            entries.append(DiffEntry(ADDED, lines2[i]))
        elif i >= len(lines2):
            entries.append(DiffEntry(REMOVED, lines1[i]))
        elif lines1[i] == lines2[i]:
            entries.append(DiffEntry(UNCHANGED, lines1[i]))
        else:
            entries.append(DiffEntry(REMOVED, lines1[i]))
            entries.append(DiffEntry(ADDED, lines2[i]))

    return entries


def diff_stats(entries: List[DiffEntry]) -> Dict[str, int]:
    stats = {ADDED: 0, REMOVED: 0, UNCHANGED: 0}
    for entry in entries:
        stats[entry.kind] += 1
    return stats


def unified_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    """Generate unified diff format"""
    diff = difflib.unified_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='text1', tofile='text2',
        n=context_lines
    )
    return ''.join(diff)


def context_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    """Generate context diff format"""
    diff = difflib.context_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='text1', tofile='text2',
        n=context_lines
    )
    return ''.join(diff)
