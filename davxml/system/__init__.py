"""
System utilities for davxml
Provides configuration, error handling and debug logging
"""

from .config import DAVXMLConfig, configure, get_config, reset_config
from .debug_logger import DAVXMLDebugLogger, get_debug_logger
from .error_handling import (
    BadRequest,
    DAVXMLError,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    get_error_handler,
)
from .version import __version__

__all__ = [
    # Configuration
    'DAVXMLConfig',
    'configure',
    'get_config',
    'reset_config',

    # Debug and logging
    'DAVXMLDebugLogger',
    'get_debug_logger',

    # Errors
    'BadRequest',
    'DAVXMLError',
    'ErrorCategory',
    'ErrorContext',
    'ErrorHandler',
    'ErrorSeverity',
    'get_error_handler',

    '__version__',
]
