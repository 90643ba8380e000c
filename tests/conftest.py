import logging

import pytest


@pytest.fixture(autouse=True)
def reset_bgg2md_logger():
    """Drop handlers and level set by cli.setup_logging between tests."""
    logger = logging.getLogger('bgg2md')
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)
