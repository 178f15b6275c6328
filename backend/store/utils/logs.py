import logging
import sys

from store.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing to stdout at the configured level.
    The handler is attached once per logger, so repeated calls are cheap.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("[STORE] %(name)s %(levelname)s %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
