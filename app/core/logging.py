import logging
from logging import Logger
from typing import Optional

from .config import get_settings


def configure_logging(component: Optional[str] = None) -> Logger:
    """تهيئة مسجل موحد للتطبيق، مع مسجل فرعي اختياري لكل مكوّن."""
    settings = get_settings()

    logger = logging.getLogger(settings.app_name)
    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        logger.propagate = False

    return logger.getChild(component) if component else logger
