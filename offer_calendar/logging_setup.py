# offer_calendar/logging_setup.py

import logging

from .config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging from settings (scripts only)."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
