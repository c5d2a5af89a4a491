# utils/logging_config.py
import logging

from config import settings

# ISO-like timestamp including milliseconds
LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: str = None) -> None:
    """Attach a console handler to the root logger once."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # Avoid duplicate handlers when the app module is imported more than once
    if any(getattr(h, "_minimarket", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._minimarket = True
    root.addHandler(handler)

    # SQL echo stays off unless explicitly raised
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
