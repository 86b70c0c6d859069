"""
Markdown to HTML conversion as a fixed sequence of regex substitutions.

The pipeline is line oriented and does not track nesting: nested lists
and inline markup inside block quotes are not guaranteed to render
correctly.
"""

import re
from typing import Callable, List, Tuple, Union

Replacement = Union[str, Callable[[re.Match], str]]


def _wrap_list(tag: str, item_marker: str = '') -> Callable[[re.Match], str]:
    def wrap(match: re.Match) -> str:
        items = match.group(0)
        if item_marker:
            items = items.replace(item_marker, '')
        trailing = '\n' if items.endswith('\n') else ''
        return f'<{tag}>' + items.rstrip('\n') + f'</{tag}>' + trailing
    return wrap


SUBSTITUTIONS: List[Tuple[re.Pattern, Replacement]] = [
    # Escape HTML
    (re.compile(r'&'), '&amp;'),
    (re.compile(r'<'), '&lt;'),
    (re.compile(r'>'), '&gt;'),

    # Fenced code blocks. Later substitutions still run over the code body
    # and a blank line inside a fence splits it into separate paragraphs.
    (re.compile(r'^```[^\n]*\n([\s\S]*?)^```[ \t]*$', re.MULTILINE), r'<pre><code>\1</code></pre>'),

    # Headings, deepest first
    (re.compile(r'^###### (.*?)$', re.MULTILINE), r'<h6>\1</h6>'),
    (re.compile(r'^##### (.*?)$', re.MULTILINE), r'<h5>\1</h5>'),
    (re.compile(r'^#### (.*?)$', re.MULTILINE), r'<h4>\1</h4>'),
    (re.compile(r'^### (.*?)$', re.MULTILINE), r'<h3>\1</h3>'),
    (re.compile(r'^## (.*?)$', re.MULTILINE), r'<h2>\1</h2>'),
    (re.compile(r'^# (.*?)$', re.MULTILINE), r'<h1>\1</h1>'),

    # Horizontal rules before emphasis eats the asterisks
    (re.compile(r'^([-*_])\1{2,}[ \t]*$', re.MULTILINE), '<hr />'),

    # Bold and italic
    (re.compile(r'\*\*\*(.+?)\*\*\*'), r'<strong><em>\1</em></strong>'),
    (re.compile(r'\*\*(.+?)\*\*'), r'<strong>\1</strong>'),
    (re.compile(r'(?<![\w*])\*(?![\s*])(.+?)\*'), r'<em>\1</em>'),
    (re.compile(r'___(.+?)___'), r'<strong><em>\1</em></strong>'),
    (re.compile(r'__(.+?)__'), r'<strong>\1</strong>'),
    (re.compile(r'(?<!\w)_(?!\s)(.+?)_(?!\w)'), r'<em>\1</em>'),

    # Strikethrough
    (re.compile(r'~~(.+?)~~'), r'<del>\1</del>'),

    # Inline code
    (re.compile(r'`([^`\n]+)`'), r'<code>\1</code>'),

    # Images before links, they share the bracket syntax
    (re.compile(r'!\[([^\]]*)\]\(([^)]+)\)'), r'<img src="\2" alt="\1" />'),
    (re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), r'<a href="\2">\1</a>'),

    # Unordered lists
    (re.compile(r'^[*+-] (.+)$', re.MULTILINE), r'<li>\1</li>'),
    (re.compile(r'(?:^<li>.*</li>$\n?)+', re.MULTILINE), _wrap_list('ul')),

    # Ordered lists
    (re.compile(r'^\d+\. (.+)$', re.MULTILINE), r'<li class="ordered">\1</li>'),
    (re.compile(r'(?:^<li class="ordered">.*</li>$\n?)+', re.MULTILINE),
     _wrap_list('ol', ' class="ordered"')),

    # Blockquotes, consecutive lines merged
    (re.compile(r'^&gt; ?(.*)$', re.MULTILINE), r'<blockquote>\1</blockquote>'),
    (re.compile(r'</blockquote>\n<blockquote>'), '\n'),

    # Hard line breaks
    (re.compile(r'  $', re.MULTILINE), '<br />'),
]

_BLOCK_START = re.compile(r'^<(h[1-6]|ul|ol|blockquote|pre|hr)')


def _wrap_paragraphs(html: str) -> str:
    blocks = []
    for block in re.split(r'\n{2,}', html):
        if not block.strip():
            continue
        if _BLOCK_START.match(block):
            blocks.append(block)
        else:
            blocks.append(f'<p>{block}</p>')
    return '\n\n'.join(blocks)


def markdown_to_html(markdown: str) -> str:
    if not markdown:
        return ''

    html = markdown.replace('\r\n', '\n')
    for pattern, replacement in SUBSTITUTIONS:
        html = pattern.sub(replacement, html)
    return _wrap_paragraphs(html)
