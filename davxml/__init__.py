"""
davxml - XML utilities for WebDAV

Loads untrusted request bodies into DOM documents, works around the invalid
``DAV:`` namespace URI and reports elements in clark notation.
"""

from .parsing import (
    DAV_NAMESPACE,
    child_elements,
    convert_dav_namespace,
    find_child,
    load_document,
    parse_properties,
    to_clark_notation,
)
from .system import BadRequest, DAVXMLError, configure, get_config, __version__

__all__ = [
    'load_document',
    'convert_dav_namespace',
    'to_clark_notation',
    'child_elements',
    'find_child',
    'parse_properties',
    'DAV_NAMESPACE',
    'BadRequest',
    'DAVXMLError',
    'configure',
    'get_config',
    '__version__',
]
