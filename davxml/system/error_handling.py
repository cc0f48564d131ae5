"""
Standardized error handling for davxml.
Provides the exception hierarchy surfaced to the WebDAV layer plus a small
logging error handler.
"""

import logging
import threading
import traceback
from collections import deque
from datetime import datetime
from typing import Optional, Dict, Any, List
from enum import Enum
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification."""
    EMPTY_DOCUMENT = "empty_document"
    XML_PARSING = "xml_parsing"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    line_number: Optional[int] = None
    error_code: Optional[int] = None
    encoding: Optional[str] = None


class DAVXMLError(Exception):
    """Base exception class for davxml."""

    http_status = 500

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_exception = original_exception
        super().__init__(self.message)

    def get_technical_details(self) -> Dict[str, Any]:
        details = {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "http_status": self.http_status,
        }

        if self.context:
            details["context"] = {
                "operation": self.context.operation,
                "line_number": self.context.line_number,
                "error_code": self.context.error_code,
                "encoding": self.context.encoding,
            }

        if self.original_exception:
            details["original_exception"] = {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception),
                "traceback": "".join(
                    traceback.format_exception(
                        type(self.original_exception),
                        self.original_exception,
                        self.original_exception.__traceback__,
                    )
                ),
            }

        return details


class BadRequest(DAVXMLError):
    """
    The request body could not be turned into a document.

    Raised for empty payloads and for any diagnostic reported by the parser.
    The WebDAV layer is expected to translate this into a 400 response.
    """

    http_status = 400

    def __init__(self, message: str, diagnostic: Any = None, **kwargs):
        self.diagnostic = diagnostic
        kwargs.setdefault("category", ErrorCategory.XML_PARSING)
        kwargs.setdefault("severity", ErrorSeverity.LOW)
        super().__init__(message=message, **kwargs)

    def get_technical_details(self) -> Dict[str, Any]:
        details = super().get_technical_details()
        if self.diagnostic is not None:
            details["diagnostic"] = self.diagnostic.to_dict()
        return details


class ErrorHandler:
    """Centralised error logging."""

    def __init__(self, logger_name: str = "davxml", max_session_errors: int = 100):
        self.logger = logging.getLogger(logger_name)
        self._lock = threading.Lock()
        self._error_count = 0
        # Only the most recent errors are kept
        self._session_errors = deque(maxlen=max_session_errors)

    @property
    def error_count(self) -> int:
        return self._error_count

    def handle_error(self, error: DAVXMLError) -> None:
        """Record an error and log it at a level matching its severity."""
        technical_details = error.get_technical_details()
        with self._lock:
            self._error_count += 1
            self._session_errors.append(
                {"timestamp": datetime.now().isoformat(), "error": error, "details": technical_details}
            )

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"Critical error: {technical_details}")
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"High severity error: {technical_details}")
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"Medium severity error: {technical_details}")
        else:
            self.logger.info(f"Low severity error: {technical_details}")

    def get_session_errors(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._session_errors)

    def clear_session_errors(self) -> None:
        with self._lock:
            self._session_errors.clear()
            self._error_count = 0


def create_error_context(
    operation: str,
    line_number: Optional[int] = None,
    error_code: Optional[int] = None,
    encoding: Optional[str] = None,
) -> ErrorContext:
    """Helper function to create error context."""
    return ErrorContext(
        operation=operation,
        line_number=line_number,
        error_code=error_code,
        encoding=encoding,
    )


# Global error handler instance
_global_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance"""
    return _global_error_handler
