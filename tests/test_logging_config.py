import logging

import pytest

from cubeos.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("cubeos")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


def test_debug_records_reach_log_file(package_logger, tmp_path):
    log_file = tmp_path / "cubeos.log"
    setup_logging(debug=True, log_file=str(log_file))
    logging.getLogger("cubeos.cube").debug("center: drag started")
    for handler in package_logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG   cubeos.cube: center: drag started" in text


def test_repeated_setup_replaces_handlers(package_logger):
    setup_logging()
    logger = setup_logging()
    assert logger is package_logger
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
