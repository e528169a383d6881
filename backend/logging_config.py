"""Centralized logging configuration."""

import logging

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"

# yfinance pulls in peewee for its timezone cache
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "urllib3",
    "yfinance",
    "peewee",
    "multipart",
)


def setup_logging() -> None:
    """Configure logging for the NiveshAI backend.

    Root level comes from ``settings.LOG_LEVEL``; the third-party loggers in
    :data:`NOISY_LOGGERS` are held at WARNING regardless.
    """
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        level=getattr(logging, settings.LOG_LEVEL),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
