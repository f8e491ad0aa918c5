import logging
import sys
from app.core.config import settings

def setup_logging():
    """
    Configure logging for the application.
    """
    logger = logging.getLogger("clinicslots")
    logger.setLevel(settings.LOG_LEVEL)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.LOG_LEVEL)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Add handler to logger
    if not logger.handlers:
        logger.addHandler(handler)

    return logger

logger = setup_logging()
