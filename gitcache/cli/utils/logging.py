import logging
import sys
from typing import Optional


logger = logging.getLogger("gitcache")

_handler: Optional[logging.Handler] = None


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.

    The handler is rebuilt on every call so it always writes to the current
    sys.stdout.
    """
    global _handler

    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter("%(message)s"))

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)
    logger.addHandler(_handler)
