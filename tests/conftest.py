import pytest

from libs.logger import logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield

    for _handler in list(logger.handlers):
        logger.removeHandler(_handler)
        _handler.close()
