from collections.abc import Iterator

import pytest

from src.logger import logger


@pytest.fixture
def cep_caplog(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """caplog wired straight onto the "cep" logger, which does not propagate to root."""
    logger.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)
