"""backend.Events.log

Logger setup for the events Lambda. Lambda forwards stderr to CloudWatch, so a
single stream handler is enough; LOG_LEVEL selects verbosity.
"""

import logging
import sys

from backend.Events import config

LOGGER_NAME = "trekking.events"


def setup_logging() -> logging.Logger:
    """
    Configure and return the events logger.
    - LOG_LEVEL: "0" (silent), "1" (INFO), other (DEBUG).
    Safe to call repeatedly; existing handlers are replaced.
    """
    level = config.log_level()

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.DEBUG)  # handler filters

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))

    if level == "0":
        handler.setLevel(logging.CRITICAL + 1)  # effectively silent
    elif level == "1":
        handler.setLevel(logging.INFO)
    else:
        handler.setLevel(logging.DEBUG)

    logger.addHandler(handler)
    return logger
