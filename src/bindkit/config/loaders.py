import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .models import ApplicationSettings
from ..utils import expanded_path, merged

logger = logging.getLogger(__name__)


def load_file(path: Path) -> dict:
    """
    Load configuration from a YAML or JSON file.

    :param path: Path to the configuration file.
    :return: Dictionary with configuration data.
    :raises FileNotFoundError: If the file does not exist.
    :raises IsADirectoryError: If the path is a directory.
    :raises RuntimeError: If the file type is not supported.
    """
    logger.debug("Loading configuration file: %s", path)
    assert path is not None

    if not path.exists():
        logger.error("Config file not found: %s", path.absolute())
        raise FileNotFoundError(f"Config file not found: {path.absolute()}")

    if path.is_dir():
        logger.error("Path is a directory, not a file: %s", path.absolute())
        raise IsADirectoryError(path.absolute())

    with open(path, "r", encoding="utf-8") as fp:
        if fp.read(1) == "":
            logger.debug("Config file is empty: %s", path)
            return {}

        fp.seek(0)

        if path.name.endswith((".yaml", ".yml")):
            logger.debug("Parsing YAML file: %s", path.name)
            return yaml.safe_load(fp) or {}
        if path.name.endswith(".json"):
            logger.debug("Parsing JSON file: %s", path.name)
            return json.load(fp)

        logger.error("Invalid file type: %s", path.name)
        raise RuntimeError("Invalid file type given: %s" % path.name)


def load_settings(
        path: Optional[Union[str, Path]] = None,
        **overrides: Any
) -> ApplicationSettings:
    """
    Build application settings.

    Values from the file take precedence over environment variables, and
    ``overrides`` take precedence over both. Without ``path``, the file is
    taken from the ``config_path`` setting, if any.

    :param path: Optional YAML or JSON configuration file.
    :param overrides: Explicit setting values.
    """
    if path is None:
        path = ApplicationSettings(**overrides).config_path

    data: dict = {}
    if path is not None:
        path = expanded_path(path)
        data = load_file(path)
        if not isinstance(data, dict):
            raise RuntimeError(f"Configuration file must contain a mapping: {path}")
        data = merged({"config_path": path}, data)

    data = merged(data, overrides)
    logger.debug("Loading application settings from %s", path or "environment")
    return ApplicationSettings(**data)
