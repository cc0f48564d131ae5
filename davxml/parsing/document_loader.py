"""
Document loader for WebDAV request bodies.
Rewrites the DAV: namespace, parses with the hardened minidom builder and
turns every parser diagnostic into a BadRequest.
"""

from typing import Optional, Union
from xml.dom import Node
from xml.dom.minidom import Document
from xml.parsers.expat import ExpatError

from defusedxml import DefusedXmlException
from defusedxml import minidom as safe_minidom

from .diagnostics import ParserDiagnostic, get_diagnostic_log
from .encoding import decode_xml_bytes
from .namespace_utils import convert_dav_namespace, count_dav_declarations, to_clark_notation
from ..system.config import get_config
from ..system.debug_logger import get_debug_logger
from ..system.error_handling import (
    BadRequest,
    ErrorCategory,
    create_error_context,
    get_error_handler,
)


INVALID_BODY_TEMPLATE = (
    "The request body had an invalid XML body. (message: {message}, errorcode: {code}, line: {line})"
)


def load_document(xml_content: Union[str, bytes]) -> Document:
    """
    Load an XML request body into a DOM document.

    Bytes are decoded first. ``DAV:`` namespace declarations are rewritten to
    ``urn:DAV`` and whitespace-only text between elements is dropped unless
    the configuration asks to preserve it.

    Raises:
        BadRequest: for an empty body or any error reported by the parser.
    """
    encoding = None
    if isinstance(xml_content, bytes):
        xml_content, encoding = decode_xml_bytes(xml_content)
    elif xml_content.startswith("\ufeff"):
        xml_content = xml_content[1:]

    if not xml_content or not xml_content.strip():
        error = BadRequest(
            "Empty XML document sent",
            category=ErrorCategory.EMPTY_DOCUMENT,
            context=create_error_context("load_document", encoding=encoding),
        )
        get_error_handler().handle_error(error)
        raise error

    debug = get_debug_logger()
    debug.log_document_load_start(len(xml_content), encoding)
    debug.log_namespace_rewrite(count_dav_declarations(xml_content))

    document = None
    failure: Optional[Exception] = None
    diagnostic: Optional[ParserDiagnostic] = None
    with get_diagnostic_log().capture() as log:
        try:
            document = safe_minidom.parseString(convert_dav_namespace(xml_content))
        except ExpatError as exc:
            failure = exc
            log.record(ParserDiagnostic.from_expat_error(exc))
        except DefusedXmlException as exc:
            failure = exc
            log.record(ParserDiagnostic.from_policy_violation(exc))
        except UnicodeError as exc:
            # pyexpat encodes text to UTF-8 first; lone surrogates fail there
            failure = exc
            log.record(ParserDiagnostic.from_unicode_error(exc))

        errors = log.errors()
        if errors:
            diagnostic = errors[0]

    if diagnostic is not None:
        debug.log_parse_failure(diagnostic)
        error = BadRequest(
            INVALID_BODY_TEMPLATE.format(
                message=diagnostic.message, code=diagnostic.code, line=diagnostic.line
            ),
            diagnostic=diagnostic,
            original_exception=failure,
            context=create_error_context(
                "load_document",
                line_number=diagnostic.line,
                error_code=diagnostic.code,
                encoding=encoding,
            ),
        )
        get_error_handler().handle_error(error)
        raise error

    removed = 0
    if not get_config().preserve_whitespace:
        removed = _strip_blank_text(document)

    debug.log_parse_result(to_clark_notation(document.documentElement), removed)
    return document


def _strip_blank_text(root: Node) -> int:
    """Remove whitespace-only text nodes that sit between elements. Returns the count removed."""
    removed = 0
    # Iterative walk; nesting depth is bounded only by the parser
    pending = [root]
    while pending:
        node = pending.pop()
        has_elements = any(child.nodeType == Node.ELEMENT_NODE for child in node.childNodes)
        for child in list(node.childNodes):
            if child.nodeType == Node.TEXT_NODE:
                if has_elements and not child.data.strip():
                    node.removeChild(child)
                    child.unlink()
                    removed += 1
            elif child.nodeType == Node.ELEMENT_NODE:
                pending.append(child)
    return removed
