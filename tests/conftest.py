"""
Pytest configuration shared by the davxml test suites.
"""

import pytest

from davxml.parsing.diagnostics import get_diagnostic_log
from davxml.system.config import reset_config


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """
    Every test starts from default configuration and an empty diagnostic log
    with internal errors disabled, and leaves them that way.
    """
    log = get_diagnostic_log()
    reset_config()
    log.use_internal_errors(False)
    log.clear()
    yield
    reset_config()
    log.use_internal_errors(False)
    log.clear()
