"""
Opt-in log output for sparsevec.

Library modules only create loggers under the "sparsevec" namespace and
never attach handlers. Call setup_logging() to see the records, e.g. the
debug lines written on compaction and dense conversion.
"""
import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the "sparsevec" records to stdout and, if ``log_file`` is given,
    to that file (overwritten). Calling it again replaces the handlers of
    the previous call, closing them first.

    Returns:
        The "sparsevec" logger.
    """
    logger = logging.getLogger("sparsevec")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("sparsevec logging set up at level %s", logging.getLevelName(level))
    return logger
