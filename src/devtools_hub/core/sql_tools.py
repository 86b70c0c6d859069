"""
Lightweight SQL formatter.

This is a single left-to-right pass over whitespace-normalised text, not a
SQL parser. Keywords are recased, major clauses start on a new line, and a
parenthesis that opens a subquery starts an indented block. All other
parentheses (function calls, ``IN`` lists, column definitions) stay inline.
"""

import re
from typing import List, Optional

from .exceptions import ConfigurationError

KEYWORDS = [
    'SELECT', 'FROM', 'WHERE', 'JOIN', 'LEFT', 'RIGHT', 'INNER', 'OUTER',
    'ON', 'AND', 'OR', 'NOT', 'IN', 'EXISTS', 'BETWEEN', 'LIKE', 'IS',
    'NULL', 'ORDER', 'BY', 'GROUP', 'HAVING', 'UNION', 'ALL', 'DISTINCT',
    'INSERT', 'INTO', 'VALUES', 'UPDATE', 'SET', 'DELETE', 'CREATE',
    'TABLE', 'DROP', 'ALTER', 'ADD', 'COLUMN', 'PRIMARY', 'KEY', 'FOREIGN',
    'REFERENCES', 'INDEX', 'VIEW', 'AS', 'CASE', 'WHEN', 'THEN', 'ELSE',
    'END', 'LIMIT', 'OFFSET', 'ASC', 'DESC', 'COUNT', 'SUM', 'AVG', 'MAX',
    'MIN', 'CAST', 'CONVERT', 'COALESCE', 'NULLIF', 'WITH', 'RECURSIVE',
    'FULL', 'CROSS'
]

_KEYWORD_RE = re.compile(r'\b(?:' + '|'.join(KEYWORDS) + r')\b', re.IGNORECASE)
_LITERAL_RE = re.compile(r"'(?:[^']|'')*'|\"[^\"]*\"|`[^`]*`")
_CLAUSE_RE = re.compile(
    r'(?:(?:LEFT|RIGHT|FULL)(?:\s+OUTER)?\s+JOIN|INNER\s+JOIN|CROSS\s+JOIN|JOIN'
    r'|SELECT|FROM|WHERE|GROUP\s+BY|ORDER\s+BY|HAVING|UNION(?:\s+ALL)?|LIMIT)\b',
    re.IGNORECASE
)
_LOGICAL_RE = re.compile(r'(?:AND|OR)\b', re.IGNORECASE)
_BETWEEN_RE = re.compile(r'BETWEEN\b', re.IGNORECASE)
_SUBQUERY_RE = re.compile(r'\s*(?:SELECT|WITH)\b', re.IGNORECASE)
_WORD_RE = re.compile(r'\w+')
_CONDITION_CLAUSES = ('WHERE', 'HAVING')
MAX_INDENT = 8


def recase_keywords(sql: str, uppercase: bool = True) -> str:
    """Recase keywords, leaving quoted literals and identifiers untouched."""
    def recase(chunk: str) -> str:
        return _KEYWORD_RE.sub(
            lambda m: m.group(0).upper() if uppercase else m.group(0).lower(), chunk
        )

    pieces = []
    position = 0
    for literal in _LITERAL_RE.finditer(sql):
        pieces.append(recase(sql[position:literal.start()]))
        pieces.append(literal.group(0))
        position = literal.end()
    pieces.append(recase(sql[position:]))
    return ''.join(pieces)


def _line_break(result: str, level: int, unit: int) -> str:
    stripped = result.rstrip()
    if not stripped:
        return ''
    return stripped + '\n' + ' ' * (unit * level)


def _is_word_start(sql: str, i: int) -> bool:
    if not sql[i].isalpha():
        return False
    return i == 0 or not (sql[i - 1].isalnum() or sql[i - 1] == '_')


def _layout(sql: str, unit: int) -> str:
    result = ''
    groups: List[bool] = []
    clauses: List[Optional[str]] = [None]
    between = False
    i = 0

    while i < len(sql):
        char = sql[i]

        if char in '\'"`':
            literal = _LITERAL_RE.match(sql, i)
            if literal:
                result += literal.group(0)
                i = literal.end()
                continue

        if char == '(':
            subquery = bool(_SUBQUERY_RE.match(sql, i + 1))
            groups.append(subquery)
            if subquery:
                clauses.append(None)
            result += '('
            i += 1
            continue

        if char == ')':
            if groups and groups.pop():
                clauses.pop()
                result = _line_break(result, len(clauses) - 1, unit)
            result += ')'
            i += 1
            continue

        depth = len(clauses) - 1
        inline = bool(groups) and not groups[-1]

        if not inline and _is_word_start(sql, i):
            clause = _CLAUSE_RE.match(sql, i)
            if clause:
                keyword = re.sub(r'\s+', ' ', clause.group(0))
                result = _line_break(result, depth, unit) + keyword
                clauses[-1] = 'JOIN' if keyword.upper().endswith('JOIN') else keyword.upper()
                between = False
                i = clause.end()
                continue

            if clauses[-1] in _CONDITION_CLAUSES:
                if _BETWEEN_RE.match(sql, i):
                    between = True
                else:
                    logical = _LOGICAL_RE.match(sql, i)
                    if logical:
                        word = logical.group(0)
                        if between and word.upper() == 'AND':
                            between = False
                        else:
                            result = _line_break(result, depth + 1, unit) + word
                            i = logical.end()
                            continue

            word = _WORD_RE.match(sql, i)
            result += word.group(0)
            i = word.end()
            continue

        if char == ',' and not inline:
            result = result.rstrip(' ') + ',\n' + ' ' * (unit * (depth + 1))
            i += 1
            while i < len(sql) and sql[i] == ' ':
                i += 1
            continue

        result += char
        i += 1

    return result


def format_sql(sql: str, uppercase: bool = True, indent: int = 2) -> str:
    """Format SQL with one clause per line.

    Args:
        sql: SQL text, one or more statements
        uppercase: recase keywords to upper case (lower case otherwise)
        indent: spaces per nesting level

    Returns:
        The formatted SQL, always terminated by a semicolon.
    """
    if not isinstance(indent, int) or isinstance(indent, bool) or not 1 <= indent <= MAX_INDENT:
        raise ConfigurationError(f"Indent must be between 1 and {MAX_INDENT} spaces")

    normalized = re.sub(r'\s+', ' ', sql).strip()
    laid_out = _layout(recase_keywords(normalized, uppercase), indent)

    lines = []
    for line in laid_out.split('\n'):
        line = line.rstrip()
        if line == '' and lines and lines[-1] == '':
            continue
        lines.append(line)
    result = '\n'.join(lines).strip()

    if not result.endswith(';'):
        result += ';'
    return result


def minify_sql(sql: str) -> str:
    collapsed = re.sub(r'\s+', ' ', sql)
    return re.sub(r'\s*([(),;])\s*', r'\1', collapsed).strip()
