import logging
import pytest
from clife.logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def no_root_env(monkeypatch):
    monkeypatch.delenv('CLIFE_ROOT', raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
