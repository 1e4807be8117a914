# tests/conftest.py
import logging

import pytest

from wordtally import logging_config


@pytest.fixture(autouse=True)
def reset_wordtally_logger():
    """Drop handlers added by the CLI so each test starts with a clean logger."""
    yield
    logger = logging.getLogger(logging_config.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logging_config._logger = None


@pytest.fixture
def sample_text():
    return "About the job. At Broadridge we've built a culture."


@pytest.fixture
def input_file(tmp_path, sample_text):
    path = tmp_path / "Input.txt"
    path.write_text(sample_text)
    return path
