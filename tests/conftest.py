import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any logging setup done by the CLI between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)
