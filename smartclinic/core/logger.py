import logging
import sys

from smartclinic.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Attach a stdout handler to the ``smartclinic`` logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger("smartclinic")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger

logger = setup_logging()
