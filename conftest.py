"""Project-level pytest configuration.

Living at the repository root puts the ``legitcheck`` package on the import
path when the tests run from a plain checkout.
"""
import logging

import pytest

from legitcheck.utils import logging as legitcheck_logging


@pytest.fixture
def restore_logging():
    """Undo the root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    debug_reporting = legitcheck_logging._debug_reporting
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    legitcheck_logging._debug_reporting = debug_reporting
