"""
Namespace helpers for WebDAV request bodies.

WebDAV puts its elements in the ``DAV:`` namespace, which is not a valid
namespace URI. Documents are rewritten to use ``urn:DAV`` before parsing
(convert_dav_namespace) and elements are reported back in ``DAV:`` when their
clark notation is taken (to_clark_notation). No other module needs to know
about the substitution.
"""

import re
from typing import Any, Callable, Dict, Iterator, Optional
from xml.dom import Node


DAV_NAMESPACE = "DAV:"
_DAV_SUBSTITUTE = "urn:DAV"

# xmlns="DAV:" or xmlns:prefix='DAV:'; the closing quote must match the opening one
_DAV_DECLARATION = re.compile(r"(?<![\w:.-])xmlns(:[A-Za-z0-9_]+)?=([\"'])DAV:\2")


def convert_dav_namespace(xml_document: str) -> str:
    """Rewrite every ``DAV:`` namespace declaration to ``urn:DAV``.

    Quote style and prefix are kept as written; anything else in the
    document, well-formed or not, is left untouched."""
    return _DAV_DECLARATION.sub(r"xmlns\1=\2" + _DAV_SUBSTITUTE + r"\2", xml_document)


def count_dav_declarations(xml_document: str) -> int:
    """Number of declarations convert_dav_namespace would rewrite."""
    return len(_DAV_DECLARATION.findall(xml_document))


def to_clark_notation(node: Any) -> Optional[str]:
    """
    Return the clark notation (``{namespace}localName``) of an element.

    Elements in the ``urn:DAV`` namespace are reported as ``DAV:``. Elements
    without a namespace keep empty braces (``{}name``). Any node that is not
    an element returns None.
    """
    if getattr(node, "nodeType", None) != Node.ELEMENT_NODE:
        return None

    namespace = node.namespaceURI
    if namespace == _DAV_SUBSTITUTE:
        namespace = DAV_NAMESPACE

    return "{" + (namespace or "") + "}" + node.localName


def child_elements(node: Any) -> Iterator[Any]:
    """Yield the element children of a node, skipping text, comments and PIs."""
    for child in node.childNodes:
        if child.nodeType == Node.ELEMENT_NODE:
            yield child


def find_child(node: Any, clark_name: str) -> Optional[Any]:
    """Find the first child element whose clark notation equals ``clark_name``."""
    for child in child_elements(node):
        if to_clark_notation(child) == clark_name:
            return child
    return None


def get_text_content(node: Any) -> str:
    """Concatenated text of a node and all of its descendants, unstripped."""
    parts = []
    pending = [node]
    while pending:
        current = pending.pop()
        if current.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
            parts.append(current.data)
        elif current is node or current.nodeType == Node.ELEMENT_NODE:
            pending.extend(reversed(current.childNodes))
    return "".join(parts)


def parse_properties(
    parent: Any,
    property_map: Optional[Dict[str, Callable[[Any], Any]]] = None,
) -> Dict[str, Any]:
    """
    Collect the properties listed in ``{DAV:}prop`` elements.

    ``parent`` is usually a ``{DAV:}set``, ``{DAV:}remove`` or
    ``{DAV:}propstat`` element; a ``{DAV:}prop`` element may also be passed
    directly. Each property is keyed by its clark notation. Properties listed
    in ``property_map`` are converted by calling the mapped function with the
    property element; all others map to their text content.
    """
    property_map = property_map or {}
    prop_name = "{" + DAV_NAMESPACE + "}prop"

    if to_clark_notation(parent) == prop_name:
        prop_nodes = [parent]
    else:
        prop_nodes = [c for c in child_elements(parent) if to_clark_notation(c) == prop_name]

    properties: Dict[str, Any] = {}
    for prop_node in prop_nodes:
        for prop_elem in child_elements(prop_node):
            name = to_clark_notation(prop_elem)
            if name in property_map:
                properties[name] = property_map[name](prop_elem)
            else:
                properties[name] = get_text_content(prop_elem)
    return properties
