"""
Debug Logging Utility
Provides optional debug logging for troubleshooting request body parsing.
"""

import logging
import sys
import threading
from typing import Any, Dict, Optional

from .config import get_config


class DAVXMLDebugLogger:
    """
    Debug logger for the request body loading process.
    Provides structured logging for troubleshooting malformed client payloads.
    """

    def __init__(self, enable_debug: bool = False):
        """
        Initialise the debug logger.

        Args:
            enable_debug: Whether to enable debug logging
        """
        self.enable_debug = enable_debug
        self.logger = logging.getLogger('davxml.loader')

        if self.enable_debug:
            self.logger.setLevel(logging.DEBUG)
            self.logger.propagate = False

            formatter = logging.Formatter(
                '[%(levelname)s][%(name)s] %(message)s'
            )

            # Keep a single managed handler so formatting stays consistent.
            self.logger.handlers.clear()

            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(formatter)

            self.logger.addHandler(console_handler)

    def log_document_load_start(self, size: int, encoding: Optional[str] = None) -> None:
        """Log the start of a document load."""
        if not self.enable_debug:
            return

        if encoding:
            self.logger.info(f"Loading XML request body ({size} characters, decoded as {encoding})")
        else:
            self.logger.info(f"Loading XML request body ({size} characters)")

    def log_namespace_rewrite(self, declarations: int) -> None:
        """Log how many DAV: declarations were rewritten."""
        if not self.enable_debug:
            return

        self.logger.debug(f"Rewrote {declarations} DAV: namespace declaration(s) to urn:DAV")

    def log_parse_result(self, root_name: Optional[str], removed_blank_nodes: int) -> None:
        """Log a successful parse."""
        if not self.enable_debug:
            return

        self.logger.info(f"Parsed request body, root element {root_name}")
        self.logger.debug(f"Dropped {removed_blank_nodes} whitespace-only text node(s)")

    def log_parse_failure(self, diagnostic: Any) -> None:
        """Log the diagnostic that rejected a document."""
        if not self.enable_debug:
            return

        self.logger.warning(
            f"Rejected request body: {diagnostic.message} "
            f"(code {diagnostic.code}, line {diagnostic.line}, column {diagnostic.column})"
        )


# One instance per debug setting so the handler is configured once
_debug_loggers: Dict[bool, DAVXMLDebugLogger] = {}
_debug_loggers_lock = threading.Lock()


def get_debug_logger() -> DAVXMLDebugLogger:
    """
    Get the debug logger instance for the current configuration.

    Returns:
        DAVXMLDebugLogger instance
    """
    enable_debug = get_config().debug_mode
    with _debug_loggers_lock:
        if enable_debug not in _debug_loggers:
            _debug_loggers[enable_debug] = DAVXMLDebugLogger(enable_debug)
        return _debug_loggers[enable_debug]
