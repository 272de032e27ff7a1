import logging
from logging import Logger
from typing import Optional

from .models import ApplicationSettings


def application_logger_name(app_name: str) -> str:
    return f"bindkit.app.{app_name}"


def setup_logging(settings: Optional[ApplicationSettings] = None) -> Logger:
    """
    Send the records of an application logger to the console.

    The logger is the one bound under ``application.logger`` by an
    :class:`~bindkit.Application` built from the same settings. Its level and
    format come from ``settings.logging``. Calling this again reconfigures
    the same console handler instead of adding another one.

    :param settings: Application settings. Defaults are used if None.
    :return: The application logger.
    """
    settings = settings if settings is not None else ApplicationSettings()
    logger = logging.getLogger(application_logger_name(settings.name))
    logger.setLevel(settings.logging.level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "name", None) == "bindkit.console"),
        None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name("bindkit.console")
        logger.addHandler(handler)

    handler.setLevel(settings.logging.level)
    handler.setFormatter(logging.Formatter(settings.logging.format))
    return logger
