import io
import logging

from portaudit.logger import level_for_verbosity, setup_logging


def test_level_for_verbosity():
    assert level_for_verbosity(0) == logging.WARNING
    assert level_for_verbosity(1) == logging.INFO
    assert level_for_verbosity(3) == logging.DEBUG


def test_setup_logging_replaces_handlers():
    stream = io.StringIO()
    setup_logging(1, stream=io.StringIO())
    logger = setup_logging(2, stream=stream)

    logging.getLogger("portaudit.analysis").debug("indexed %d hosts", 3)

    assert len(logger.handlers) == 1
    assert "[DEBUG] [portaudit.analysis] indexed 3 hosts" in stream.getvalue()
