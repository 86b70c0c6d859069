"""
XML formatting, minification and validation.

``format_xml`` and ``minify_xml`` go through ``xml.dom.minidom`` so that
malformed documents are rejected with the parser's own message.
``reindent_markup`` is a regex tokenizer that never fails and is used where
input is only known to look like markup.
"""

import re
from typing import Any, Dict, List
from xml.dom import Node, minidom
from xml.parsers.expat import ExpatError

from .exceptions import ConfigurationError, ParseError

INDENT_SIZES = (2, 4, 8)
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_TEXT_NODES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)
_MARKUP_TOKEN = re.compile(r'<!--.*?-->|<!\[CDATA\[.*?\]\]>|<[^>]*>|[^<]+|<', re.DOTALL)


def parse_xml(text: str) -> minidom.Document:
    try:
        return minidom.parseString(text)
    except ExpatError as e:
        raise ParseError(f"XML Parsing Error: {e}") from e


def escape_xml(text: str) -> str:
    return (text.replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;')
                .replace("'", '&apos;'))


def _significant_children(node) -> List[Any]:
    return [
        child for child in node.childNodes
        if child.nodeType == Node.ELEMENT_NODE
        or (child.nodeType in _TEXT_NODES and child.data.strip())
    ]


def _format_element(node, level: int, unit: int, sort_attributes: bool) -> str:
    indent = ' ' * (unit * level)
    child_indent = ' ' * (unit * (level + 1))

    result = indent + '<' + node.tagName
    attributes = list(node.attributes.items())
    if sort_attributes:
        attributes.sort(key=lambda item: item[0])
    for name, value in attributes:
        result += f' {name}="{escape_xml(value)}"'

    children = _significant_children(node)
    if not children:
        return result + ' />'

    if len(children) == 1 and children[0].nodeType in _TEXT_NODES:
        return result + '>' + escape_xml(children[0].data.strip()) + '</' + node.tagName + '>'

    result += '>\n'
    for child in children:
        if child.nodeType == Node.ELEMENT_NODE:
            result += _format_element(child, level + 1, unit, sort_attributes) + '\n'
        else:
            result += child_indent + escape_xml(child.data.strip()) + '\n'
    return result + indent + '</' + node.tagName + '>'


def format_xml(text: str, indent: int = 2, sort_attributes: bool = False) -> str:
    """Pretty-print an XML document.

    Args:
        text: XML source
        indent: spaces per level, one of 2, 4 or 8
        sort_attributes: order attributes by name

    Returns:
        The XML declaration followed by the formatted root element.
    """
    if indent not in INDENT_SIZES:
        raise ConfigurationError(f"Indent must be one of {INDENT_SIZES}")
    document = parse_xml(text)
    body = _format_element(document.documentElement, 0, indent, sort_attributes)
    return XML_DECLARATION + '\n' + body


def minify_xml(text: str) -> str:
    parse_xml(text)
    minified = re.sub(r'>\s+<', '><', text)
    return re.sub(r'\s+', ' ', minified).strip()


def validate_xml(text: str) -> Dict[str, Any]:
    try:
        document = parse_xml(text)
    except ParseError as e:
        return {'valid': False, 'message': f"Validation Error: {e}"}

    root = document.documentElement
    elements = document.getElementsByTagName('*')
    attribute_count = sum(element.attributes.length for element in elements)
    return {
        'valid': True,
        'message': (f"Valid XML - Root: <{root.tagName}>, Elements: {len(elements)}, "
                    f"Attributes: {attribute_count}"),
        'root': root.tagName,
        'elements': len(elements),
        'attributes': attribute_count
    }


def _is_open_tag(token: str) -> bool:
    return (token.startswith('<') and len(token) > 1
            and token[1] not in '/?!'
            and not token.endswith('/>'))


def reindent_markup(text: str, indent: int = 2) -> str:
    """Re-indent tag soup one tag per line without validating it.

    An element holding only text stays on a single line.
    """
    pad = ' ' * indent
    tokens = [token.strip() for token in _MARKUP_TOKEN.findall(text) if token.strip()]
    lines = []
    depth = 0
    i = 0

    while i < len(tokens):
        token = tokens[i]
        if token.startswith('</'):
            depth = max(depth - 1, 0)
            lines.append(pad * depth + token)
        elif _is_open_tag(token):
            if (i + 2 < len(tokens) and not tokens[i + 1].startswith('<')
                    and tokens[i + 2].startswith('</')):
                lines.append(pad * depth + token + tokens[i + 1] + tokens[i + 2])
                i += 3
                continue
            lines.append(pad * depth + token)
            depth += 1
        else:
            lines.append(pad * depth + token)
        i += 1

    return '\n'.join(lines)
