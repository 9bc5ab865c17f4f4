import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    yield
    logger = logging.getLogger("ai_doc_optimizer")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
