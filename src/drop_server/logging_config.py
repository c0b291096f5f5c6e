import logging
import sys


def setup_logging(level: int = logging.INFO):
    """
    Configures the root logger for the application.
    Called once at startup in main.py.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
