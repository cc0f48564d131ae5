"""
Process-wide parser diagnostic log.

Parser errors are recorded here instead of being raised straight out of the
XML parser. When internal errors are disabled (the default) every recorded
diagnostic is also reported through the ``davxml.diagnostics`` logger; a
caller that wants to inspect diagnostics itself enables internal errors for
the duration of its parse, normally through ``DiagnosticLog.capture()``.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterator, List, Optional
from xml.parsers.expat import ErrorString, ExpatError, errors as expat_errors


logger = logging.getLogger("davxml.diagnostics")

# Code used for documents refused by the hardened parser rather than by expat
POLICY_VIOLATION_CODE = 0


@dataclass(frozen=True)
class ParserDiagnostic:
    """A single error reported while parsing a document."""
    message: str
    code: int
    line: int
    column: int = 0
    level: str = "error"

    @classmethod
    def from_expat_error(cls, exc: ExpatError) -> "ParserDiagnostic":
        return cls(
            message=ErrorString(exc.code),
            code=exc.code,
            line=exc.lineno,
            column=exc.offset,
        )

    @classmethod
    def from_policy_violation(cls, exc: Exception) -> "ParserDiagnostic":
        """Diagnostic for a construct the hardened parser refuses (entities, external DTDs)."""
        return cls(message=str(exc), code=POLICY_VIOLATION_CODE, line=0)

    @classmethod
    def from_unicode_error(cls, exc: UnicodeError) -> "ParserDiagnostic":
        """
        Diagnostic for text the parser cannot take, such as lone surrogates.

        Reported with expat's own invalid-token code, positioned at the
        offending character.
        """
        source = getattr(exc, "object", None) or ""
        start = getattr(exc, "start", 0)
        newline = "\n" if isinstance(source, str) else b"\n"
        return cls(
            message=f"{expat_errors.XML_ERROR_INVALID_TOKEN} ({getattr(exc, 'reason', exc)})",
            code=expat_errors.codes[expat_errors.XML_ERROR_INVALID_TOKEN],
            line=source.count(newline, 0, start) + 1,
            column=start - (source.rfind(newline, 0, start) + 1),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DiagnosticLog:
    """
    Collects parser diagnostics behind a process-wide capture toggle.

    All state changes happen under a re-entrant lock; ``capture()`` holds it
    for the whole block so concurrent parses cannot see each other's errors.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._use_internal_errors = False
        self._entries: List[ParserDiagnostic] = []

    @property
    def internal_errors(self) -> bool:
        return self._use_internal_errors

    def use_internal_errors(self, enabled: bool) -> bool:
        """Set the capture toggle and return its previous value."""
        with self._lock:
            previous = self._use_internal_errors
            self._use_internal_errors = bool(enabled)
            return previous

    def record(self, diagnostic: ParserDiagnostic) -> None:
        with self._lock:
            self._entries.append(diagnostic)
            if not self._use_internal_errors:
                logger.warning(
                    f"XML parser {diagnostic.level}: {diagnostic.message} "
                    f"(code {diagnostic.code}, line {diagnostic.line}, column {diagnostic.column})"
                )

    def errors(self) -> List[ParserDiagnostic]:
        with self._lock:
            return list(self._entries)

    def last_error(self) -> Optional[ParserDiagnostic]:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @contextmanager
    def capture(self) -> Iterator["DiagnosticLog"]:
        """
        Enable internal errors for the duration of the block.

        Stale entries are cleared on entry, captured entries are cleared on
        exit, and the previous toggle value is restored on every exit path.
        """
        with self._lock:
            previous = self.use_internal_errors(True)
            self.clear()
            try:
                yield self
            finally:
                self.clear()
                self.use_internal_errors(previous)


# Global diagnostic log shared by every loader in the process
_global_diagnostic_log = DiagnosticLog()


def get_diagnostic_log() -> DiagnosticLog:
    """Get the global diagnostic log instance"""
    return _global_diagnostic_log
