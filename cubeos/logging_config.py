"""
Logging for the home screen host.

Everything the package logs goes through the ``cubeos`` logger; the host
attaches a console handler and, on request, a file that keeps the drag log of
previous runs.
"""
import logging
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    return handlers


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Attach fresh handlers to the ``cubeos`` logger.

    With ``debug`` every drag start and settle is logged; otherwise only
    configuration problems such as missing face images show up.
    """
    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger("cubeos")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file:
        logger.debug("appending log to %s", log_file)
    return logger
