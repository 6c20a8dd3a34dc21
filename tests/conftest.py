import logging

import pytest

from quantpricer.log import LOGGER_NAME, PackageHandler


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI installs; they hold the captured stderr."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, PackageHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
