"""
Request body decoding.

WebDAV clients send bodies as bytes and the DAV: namespace rewrite works on
text, so bytes are decoded before anything else looks at them. A byte order
mark wins, then the encoding named in the XML declaration, then UTF-8.
chardet is only consulted when none of those decode cleanly; latin-1 is the
last resort since it accepts any byte sequence.
"""

import codecs
import re
from typing import Optional, Tuple

import chardet


# UTF-32 marks first: BOM_UTF32_LE starts with BOM_UTF16_LE
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_DECLARED_ENCODING = re.compile(rb'^\s*<\?xml[^>]*?encoding\s*=\s*["\']([A-Za-z][\w.-]*)["\']')

# chardet is slow on large inputs and a prefix is enough to guess from
_DETECTION_SAMPLE = 10240


def _split_byte_order_mark(raw_bytes: bytes) -> Tuple[Optional[str], bytes]:
    for mark, encoding in _BYTE_ORDER_MARKS:
        if raw_bytes.startswith(mark):
            return encoding, raw_bytes[len(mark):]
    return None, raw_bytes


def _declared_encoding(raw_bytes: bytes) -> Optional[str]:
    match = _DECLARED_ENCODING.match(raw_bytes[:400])
    return match.group(1).decode("ascii") if match else None


def _try_decode(raw_bytes: bytes, encoding: Optional[str]) -> Optional[str]:
    if not encoding:
        return None
    try:
        return raw_bytes.decode(encoding)
    except (LookupError, UnicodeDecodeError):
        return None


def decode_xml_bytes(raw_bytes: bytes) -> Tuple[str, str]:
    """
    Decode a request body and return ``(text, encoding_used)``.

    Any byte order mark is removed from the returned text.
    """
    bom_encoding, body = _split_byte_order_mark(raw_bytes)

    for encoding in (bom_encoding, _declared_encoding(body), "utf-8"):
        text = _try_decode(body, encoding)
        if text is not None:
            return text, encoding

    guessed = chardet.detect(body[:_DETECTION_SAMPLE]).get("encoding")
    text = _try_decode(body, guessed)
    if text is not None:
        return text, guessed

    return body.decode("latin-1"), "latin-1"
