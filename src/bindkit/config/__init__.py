from .base import Settings
from .loaders import load_file, load_settings
from .models import ApplicationSettings, LoggingSettings
from .setup import application_logger_name, setup_logging

__all__ = [
    "Settings",
    "ApplicationSettings",
    "LoggingSettings",
    "load_file",
    "load_settings",
    "application_logger_name",
    "setup_logging",
]
