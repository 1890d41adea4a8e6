"""Logging setup and Logfire instrumentation of the MongoDB driver."""

import logging
from logging.config import dictConfig

import logfire

from ldstore import __version__
from ldstore.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure console logging for the ldstore loggers at settings.log_level."""
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "ldstore": {
                    "handlers": ["console"],
                    "level": settings.log_level,
                    "propagate": True,
                },
            },
        }
    )


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire and instrument PyMongo.

    Call once at application startup, before init_db(), so the Motor client
    picks up the command listeners.

    Args:
        settings: Application settings containing the Logfire token

    Returns:
        True if Logfire was configured, False if it is disabled or failed.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="ldstore",
            service_version=__version__,
            environment=settings.environment,
        )

        # MongoDB commands issued through PyMongo / Motor
        logfire.instrument_pymongo()

        # Bridge Python logging to Logfire
        logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire tracking initialized")
        return True

    except Exception as e:
        # Observability is optional, keep running
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
