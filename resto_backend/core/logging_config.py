# resto_backend/core/logging_config.py
# type: ignore

import logging

from resto_backend.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
    # statement logging is switched on through SQL_ECHO only
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
