import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logger():
    # CliRunner swaps sys.stderr; drop sinks bound to the captured stream.
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
