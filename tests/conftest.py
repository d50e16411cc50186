import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_capnls_logger():
    """Undo configure_logging() so caplog sees capnls records in later tests."""
    logger = logging.getLogger("capnls")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
