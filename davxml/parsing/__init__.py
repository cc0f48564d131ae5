"""
XML parsing utilities for WebDAV request bodies
Namespace normalization, document loading and clark notation
"""

from .diagnostics import DiagnosticLog, ParserDiagnostic, get_diagnostic_log
from .document_loader import load_document
from .encoding import decode_xml_bytes
from .namespace_utils import (
    DAV_NAMESPACE,
    child_elements,
    convert_dav_namespace,
    find_child,
    get_text_content,
    parse_properties,
    to_clark_notation,
)

__all__ = [
    'load_document',
    'convert_dav_namespace',
    'to_clark_notation',
    'child_elements',
    'find_child',
    'get_text_content',
    'parse_properties',
    'decode_xml_bytes',
    'DiagnosticLog',
    'ParserDiagnostic',
    'get_diagnostic_log',
    'DAV_NAMESPACE',
]
